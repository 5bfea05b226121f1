#!/usr/bin/env python3

import pytest

from Consistency_checker import ConsistencyChecker
from Merge_exceptions import ConsistencyError, ConsistencyWarning


def _checker(**counts):
    checker = ConsistencyChecker()
    for format_key, num in counts.items():
        checker.record(format_key, num)
    return checker


def test_matching_counts_pass():
    checker = _checker(IR=3, microexon=3, junction=3, exon_skip=3, multi_exon=3, expression=3)
    assert checker.check(IR_version=1) == []


def test_cassette_mismatch_is_fatal():
    checker = _checker(IR=3, microexon=2, junction=3, exon_skip=3, multi_exon=3)
    with pytest.raises(ConsistencyError):
        checker.check()


def test_IR_v2_summary_mismatch_is_fatal():
    checker = _checker(IR=3, IR_summary=2, microexon=3, junction=3, exon_skip=3, multi_exon=3)
    with pytest.raises(ConsistencyError):
        checker.check(IR_version=2)
    # summary only matters for v2
    assert checker.check(IR_version=1) == []


def test_optional_format_mismatches_warn():
    checker = _checker(IR=1, microexon=3, junction=3, exon_skip=3, multi_exon=3, expression=2)
    consistency_warnings = checker.check()
    assert len(consistency_warnings) == 2
    assert all([isinstance(w, ConsistencyWarning) for w in consistency_warnings])
    assert "IR samples (1)" in str(consistency_warnings[0])
    assert "EXPR samples (2)" in str(consistency_warnings[1])
