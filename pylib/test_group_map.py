#!/usr/bin/env python3

import os
import pytest

from GroupMap import GroupMap
from EffectiveLengthTable import EffectiveLengthTable
from Merge_exceptions import ConfigError


def test_load_strips_quotes_and_carriage_returns(tmp_path):
    groups_file = tmp_path / "groups.tab"
    groups_file.write_bytes(b's1\tG1\r\n"s2"\t"G1"\r\ns3\tG2\r\n')

    group_map = GroupMap.load(str(groups_file))

    assert group_map.get_group("s1") == "G1"
    assert group_map.get_group("s2") == "G1"
    assert group_map.get_group("s3") == "G2"
    assert group_map.get_groups() == ["G1", "G2"]
    assert len(group_map) == 3


def test_duplicate_subsample_last_row_wins(tmp_path):
    groups_file = tmp_path / "groups.tab"
    groups_file.write_text("s1\tG1\ns1\tG2\n")

    group_map = GroupMap.load(str(groups_file))

    assert group_map.get_group("s1") == "G2"
    assert group_map.get_groups() == ["G2"]


def test_incomplete_rows_are_skipped(tmp_path):
    groups_file = tmp_path / "groups.tab"
    groups_file.write_text("s1\tG1\ns2\n")

    group_map = GroupMap.load(str(groups_file))

    assert group_map.get_subsamples() == ["s1"]
    assert not group_map.has_subsample("s2")


def test_missing_or_empty_groups_file(tmp_path):
    with pytest.raises(ConfigError):
        GroupMap.load(str(tmp_path / "nope.tab"))

    empty = tmp_path / "empty.tab"
    empty.write_text("")
    with pytest.raises(ConfigError):
        GroupMap.load(str(empty))


def test_effective_lengths(tmp_path):
    eff_file = tmp_path / "Hsa_mRNA-50.eff"
    eff_file.write_text("geneA\t1000\ngeneB\t0\ngeneC\tbad\n")

    table = EffectiveLengthTable.load(str(eff_file))

    assert table.get_length("geneA") == 1000
    assert table.get_length("geneB") == 0
    assert table.get_length("geneC") == 0
    assert table.get_length("unknown") == 0
    assert "geneA" in table
    assert len(table) == 3


def test_effective_length_default_path_and_missing_file(tmp_path):
    path = EffectiveLengthTable.get_default_path(str(tmp_path) + "/", "Hsa")
    assert path == os.path.join(str(tmp_path), "Hsa", "EXPRESSION", "Hsa_mRNA-50.eff")

    with pytest.raises(ConfigError):
        EffectiveLengthTable.load(path)
