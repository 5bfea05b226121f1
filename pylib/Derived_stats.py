#!/usr/bin/env python
# encoding: utf-8

# Statistics recomputed from the summed group counts (never averaged over subsamples).
# Each returns the text written to the output column; 'NA' when undefined.

import logging
import numpy as np
import Merge_Globals
from Count_values import is_available, value_or_zero

logger = logging.getLogger(__name__)


def _format_fixed(value, decimal_places):
    return "{:.{}f}".format(value, decimal_places)


def _all_available(*values):
    return all([is_available(x) for x in values])


def microexon_PSI(corr_exc, corr_inc):

    if not _all_available(corr_exc, corr_inc):
        return Merge_Globals.NOT_AVAILABLE

    if corr_inc + corr_exc <= 0:
        return Merge_Globals.NOT_AVAILABLE

    return _format_fixed(
        100 * corr_inc / (corr_inc + corr_exc), Merge_Globals.config["PSI_decimal_places"]
    )


def exon_skip_PSI(corr_exc, corr_inc1, corr_inc2):
    """two inclusion junctions against one exclusion junction, hence exc counts twice"""

    # a sentinel count contributes nothing; only an empty denominator is undefined
    corr_exc, corr_inc1, corr_inc2 = [
        value_or_zero(x) for x in (corr_exc, corr_inc1, corr_inc2)
    ]

    inc = corr_inc1 + corr_inc2
    denominator = inc + 2 * corr_exc
    if denominator <= 0:
        return Merge_Globals.NOT_AVAILABLE

    return _format_fixed(100 * inc / denominator, Merge_Globals.config["PSI_decimal_places"])


def multi_exon_PSI(ref_exc, ref_inc1, ref_inc2):
    return exon_skip_PSI(ref_exc.get_total(), ref_inc1.get_total(), ref_inc2.get_total())


def multi_exon_complexity(ref_exc, ref_inc1, ref_inc2):
    """
    Complexity tier of a multi-exon event: how much of the read support comes from
    junctions other than the reference ones.

    from_ref is the reference-only reads of the three composites, from_other the rest
    of their total reads. Tiers apply with strict '>': from_other > total/2 is C3,
    > total/5 is C2, > total/20 is C1, otherwise S.
    """

    composites = (ref_exc, ref_inc1, ref_inc2)

    from_ref = sum([value_or_zero(x.get_reference_only()) for x in composites])
    from_other = sum([value_or_zero(x.get_total()) for x in composites]) - from_ref
    total = from_ref + from_other

    for divisor, tier in Merge_Globals.config["complexity_tiers"]:
        if from_other > total / divisor:
            return tier

    return Merge_Globals.config["complexity_reference_only"]


def render_position_histogram(histogram):
    """'pos:count' for each position with reads, ascending and comma-joined"""

    histogram = np.asarray(histogram)
    positions = np.flatnonzero(histogram)

    return ",".join(["{}:{}".format(int(p), int(histogram[p])) for p in positions])


def cRPKM(raw_reads, effective_length, total_reads):

    if not is_available(raw_reads):
        return Merge_Globals.NOT_AVAILABLE

    if not effective_length or not total_reads:
        return Merge_Globals.NOT_AVAILABLE

    value = 1000000 * (1000 * raw_reads / effective_length) / total_reads

    return _format_fixed(value, Merge_Globals.config["cRPKM_decimal_places"])
