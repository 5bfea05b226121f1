#!/usr/bin/env python3

# Builders for small subsample tables used by the tests.

import os

IR_HEADER = "\t".join(["Event", "EIJ1", "EIJ2", "EEJ", "I"]) + "\n"

IR_SUMMARY_HEADER = (
    "\t".join(["Event", "cEIJ1", "cEIJ2", "cEEJ", "rEIJ1", "rEIJ2", "rEEJ"]) + "\n"
)

MIC_HEADER = (
    "\t".join(
        [
            "GENE",
            "EVENT",
            "COORD",
            "LENGTH",
            "FullCO",
            "COMPLEX",
            "PSI",
            "Raw_reads_exc",
            "Raw_reads_inc",
            "Corr_reads_exc",
            "Corr_reads_inc",
        ]
    )
    + "\n"
)

EXSK_HEADER = (
    "\t".join(
        ["GENE", "COORD", "LENGTH", "EVENT"]
        + ["INFO{}".format(i) for i in range(4, 12)]
        + ["PSI", "Reads_exc", "Reads_inc1", "Reads_inc2", "Sum_of_reads", ".", "Complexity"]
        + ["Corrected_Exc", "Corrected_Inc1", "Corrected_Inc2"]
        + ["POST{}".format(i) for i in range(22, 26)]
    )
    + "\n"
)

MULTI_HEADER = (
    "\t".join(
        ["GENE", "COORD", "LENGTH", "EVENT"]
        + ["INFO{}".format(i) for i in range(4, 12)]
        + ["PSI", "Reads_exc", "Reads_inc1", "Reads_inc2", "Sum_of_reads"]
        + ["MID17", "MID18", "refE", "refI1", "refI2", "Complexity"]
        + ["POST{}".format(i) for i in range(23, 26)]
    )
    + "\n"
)


def _pre_block(gene, event):
    return [gene, "chr1:100-200", "50", event] + [
        "{}_info{}".format(event, i) for i in range(4, 12)
    ]


def IR_row(event, counts):
    return [event] + [str(x) for x in counts]


def microexon_row(event, counts, gene="GeneA", PSI="0"):
    return [gene, event, "chr1:100-105", "6", "chr1:50,100-105,200", "MIC", PSI] + [
        str(x) for x in counts
    ]


def exon_skip_row(event, reads, corrected, gene="GeneA", PSI="0", post=None):
    if post is None:
        post = ["{}_post{}".format(event, i) for i in range(22, 26)]
    return (
        _pre_block(gene, event)
        + [PSI]
        + [str(x) for x in reads]
        + [".", "S"]
        + [str(x) for x in corrected]
        + list(post)
    )


def multi_exon_row(event, reads, composites, gene="GeneA", PSI="0", tier="S"):
    return (
        _pre_block(gene, event)
        + [PSI]
        + [str(x) for x in reads]
        + ["{}_mid17".format(event), "{}_mid18".format(event)]
        + list(composites)
        + [tier]
        + ["{}_post{}".format(event, i) for i in range(23, 26)]
    )


def junction_row(gene, junction, position_counts, total=None):
    if total is None:
        total = sum([c for _, c in position_counts])
    positions = ",".join(["{}:{}".format(p, c) for p, c in position_counts])
    return [gene, junction, str(total), "NA", positions]


def expression_row(gene, raw_reads, cRPKM="1.00"):
    return [gene, cRPKM, str(raw_reads)]


def write_table(filename, rows, header=None):
    dirname = os.path.dirname(filename)
    if dirname and not os.path.isdir(dirname):
        os.makedirs(dirname)
    with open(filename, "wt") as ofh:
        if header is not None:
            ofh.write(header)
        for row in rows:
            print("\t".join(row), file=ofh)
    return filename


def read_rows(filename, skip_header=False):
    with open(filename, "rt") as fh:
        lines = fh.read().splitlines()
    if skip_header:
        lines = lines[1:]
    return [line.split("\t") for line in lines]
