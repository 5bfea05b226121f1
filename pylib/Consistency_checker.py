#!/usr/bin/env python
# encoding: utf-8

import logging
from Merge_exceptions import ConsistencyError, ConsistencyWarning

logger = logging.getLogger(__name__)


class ConsistencyChecker:
    """Compares how many subsamples were merged for each format once all formats are done."""

    # produced together for every subsample, so their counts must agree
    cassette_formats = ("exon_skip", "multi_exon", "microexon", "junction")

    def __init__(self):
        self._format_to_num_subsamples = dict()

    def record(self, format_key, num_subsamples):
        self._format_to_num_subsamples[format_key] = num_subsamples

    def get_num_subsamples(self, format_key):
        return self._format_to_num_subsamples.get(format_key, 0)

    def get_counts(self):
        return dict(self._format_to_num_subsamples)

    def check(self, IR_version=1):
        """raises ConsistencyError; returns the list of (logged) ConsistencyWarnings"""

        counts = self._format_to_num_subsamples

        cassette_counts = [self.get_num_subsamples(x) for x in self.cassette_formats]
        if len(set(cassette_counts)) > 1:
            raise ConsistencyError(
                "Different number of samples in each Cassette module: {}".format(
                    ", ".join(
                        [
                            "{}={}".format(f, n)
                            for f, n in zip(self.cassette_formats, cassette_counts)
                        ]
                    )
                )
            )

        if IR_version == 2 and self.get_num_subsamples("IR") != self.get_num_subsamples(
            "IR_summary"
        ):
            raise ConsistencyError(
                "Different number of samples in each IR file: IR2={} IR_summary={}".format(
                    self.get_num_subsamples("IR"), self.get_num_subsamples("IR_summary")
                )
            )

        num_cassette = self.get_num_subsamples("exon_skip")
        consistency_warnings = list()

        if "IR" in counts and counts["IR"] != num_cassette:
            consistency_warnings.append(
                ConsistencyWarning(
                    "Number of IR samples ({}) doesn't match those of other events ({})".format(
                        counts["IR"], num_cassette
                    )
                )
            )

        if "expression" in counts and counts["expression"] != num_cassette:
            consistency_warnings.append(
                ConsistencyWarning(
                    "Number of EXPR samples ({}) doesn't match those of other events ({})".format(
                        counts["expression"], num_cassette
                    )
                )
            )

        for warning in consistency_warnings:
            logger.warning("Warning: {}".format(warning))

        return consistency_warnings
