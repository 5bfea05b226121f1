#!/usr/bin/env python3

import pytest

from Count_values import (
    NA,
    NotAvailable,
    CompositeCount,
    parse_count,
    combine_counts,
    format_count,
    is_available,
)


def test_parse_count_numbers_and_sentinels():
    assert parse_count("12") == 12
    assert isinstance(parse_count("12"), int)
    assert parse_count("2.5") == 2.5
    assert parse_count("NA") == NA
    assert parse_count("ne") == NotAvailable("ne")
    assert parse_count("") == 0


def test_parse_count_rejects_text():
    with pytest.raises(ValueError):
        parse_count("abc")


def test_combine_sentinel_wins_over_sum():
    assert combine_counts(10, 5) == 15
    assert combine_counts(10, NA) == NA
    assert combine_counts(NA, 10) == NA
    # latest sentinel is the one kept
    assert combine_counts(NA, NotAvailable("ne")) == NotAvailable("ne")


def test_combine_is_order_independent_for_numbers():
    values = [3, 7.5, 0, 11]
    forward = 0
    for v in values:
        forward = combine_counts(forward, v)
    backward = 0
    for v in reversed(values):
        backward = combine_counts(backward, v)
    assert forward == backward == 21.5


def test_format_count():
    assert format_count(150) == "150"
    assert format_count(150.0) == "150"
    assert format_count(2.5) == "2.5"
    assert format_count(0.1 + 0.2) == "0.3"
    assert format_count(NotAvailable("ne")) == "ne"


def test_composite_parse_and_render():
    c = CompositeCount.parse("10=8.5=3")
    assert c.get_components() == (10, 8.5, 3)
    assert str(c) == "10=8.5=3"


def test_composite_malformed_counts_as_zero():
    assert CompositeCount.parse("garbage").get_components() == (0, 0, 0)
    c = CompositeCount.parse("5=x=NA")
    assert c.get_total() == 5
    assert c.get_corrected() == 0
    assert not is_available(c.get_reference_only())


def test_composite_combines_components_independently():
    a = CompositeCount.parse("1=2=NA")
    b = CompositeCount.parse("4=5=6")
    assert (a + b).get_components() == (5, 7, NA)
    assert (b + a).get_components() == (5, 7, NA)
