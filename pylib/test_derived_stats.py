#!/usr/bin/env python3

import numpy as np
import pytest

import Derived_stats
from Count_values import NA, NotAvailable, CompositeCount


def test_microexon_PSI():
    assert Derived_stats.microexon_PSI(1, 3) == "75.00"
    assert Derived_stats.microexon_PSI(0, 0) == "NA"
    assert Derived_stats.microexon_PSI(NA, 3) == "NA"
    assert Derived_stats.microexon_PSI(3, NA) == "NA"


def test_exon_skip_PSI():
    # 100 * (1+1) / ((1+1) + 2*1)
    assert Derived_stats.exon_skip_PSI(1, 1, 1) == "50.00"
    assert Derived_stats.exon_skip_PSI(0, 2, 0) == "100.00"
    assert Derived_stats.exon_skip_PSI(0, 0, 0) == "NA"
    # sentinel counts are taken as zero
    assert Derived_stats.exon_skip_PSI(NA, 5, 5) == "100.00"
    assert Derived_stats.exon_skip_PSI(1, NotAvailable("ne"), 2) == "50.00"
    assert Derived_stats.exon_skip_PSI(NA, NA, NA) == "NA"


def test_multi_exon_PSI_uses_total_component():
    exc = CompositeCount(2, 100, 0)
    inc1 = CompositeCount(3, 100, 0)
    inc2 = CompositeCount(1, 100, 0)
    assert Derived_stats.multi_exon_PSI(exc, inc1, inc2) == "50.00"
    zero = CompositeCount()
    assert Derived_stats.multi_exon_PSI(zero, zero, zero) == "NA"


def test_multi_exon_PSI_with_sentinel_total():
    exc = CompositeCount(NA, 0, 0)
    assert str(exc) == "NA=0=0"
    inc1 = CompositeCount(3, 0, 0)
    inc2 = CompositeCount(1, 0, 0)
    assert Derived_stats.multi_exon_PSI(exc, inc1, inc2) == "100.00"


def _complexity_for(from_other, from_ref):
    # all reference-only reads on the exclusion junction
    return Derived_stats.multi_exon_complexity(
        CompositeCount(from_ref + from_other, 0, from_ref),
        CompositeCount(0, 0, 0),
        CompositeCount(0, 0, 0),
    )


@pytest.mark.parametrize(
    "from_other, expected",
    [
        (51, "C3"),
        (50, "C2"),  # exactly 1/2
        (21, "C2"),
        (20, "C1"),  # exactly 1/5
        (6, "C1"),
        (5, "S"),  # exactly 1/20
        (0, "S"),
    ],
)
def test_multi_exon_complexity_boundaries(from_other, expected):
    assert _complexity_for(from_other, 100 - from_other) == expected


def test_multi_exon_complexity_ignores_unavailable_components():
    exc = CompositeCount(10, 0, NA)
    inc1 = CompositeCount(NA, 0, 0)
    inc2 = CompositeCount(0, 0, 0)
    # from_ref 0, from_other 10
    assert Derived_stats.multi_exon_complexity(exc, inc1, inc2) == "C3"
    zero = CompositeCount()
    assert Derived_stats.multi_exon_complexity(zero, zero, zero) == "S"


def test_render_position_histogram():
    assert Derived_stats.render_position_histogram(np.array([0, 3, 0, 2])) == "1:3,3:2"
    assert Derived_stats.render_position_histogram(np.zeros(0, dtype=np.int64)) == ""


def test_cRPKM():
    assert Derived_stats.cRPKM(150, 1000, 150000) == "1000.00"
    assert Derived_stats.cRPKM(150, 0, 150000) == "NA"
    assert Derived_stats.cRPKM(NA, 1000, 150000) == "NA"
    assert Derived_stats.cRPKM(0, 1000, 0) == "NA"
