#!/usr/bin/env python
# encoding: utf-8

import os
import logging
import Merge_Globals
import Derived_stats
from Count_values import format_count
from Merge_exceptions import MergeError
from Subsample_records import (
    IntronRetentionRecord,
    IntronRetentionSummaryRecord,
    MicroexonRecord,
    ExonSkipRecord,
    MultiExonRecord,
)

logger = logging.getLogger(__name__)


def _event_sort_key(event_key):
    if isinstance(event_key, tuple):
        return "\t".join(event_key)
    return event_key


class GroupWriter:
    """Writes <group><suffix> for every group of the group map, in the input column layout.

    Groups without any data still get a file (header only, when the format has one).
    """

    def __init__(self, output_dir, suffix, aggregator, group_map):
        self._output_dir = output_dir
        self._suffix = suffix
        self._aggregator = aggregator
        self._group_map = group_map

    def get_output_filename(self, group):
        return os.path.join(self._output_dir, group + self._suffix)

    def write_all_groups(self):
        output_filenames = list()
        for group in self._group_map.get_groups():
            output_filenames.append(self.write_group(group))
        return output_filenames

    def write_group(self, group):

        output_filename = self.get_output_filename(group)
        event_counts = self._aggregator.get_event_counts(group)

        logger.debug(
            "-writing {} events for group {} to {}".format(
                len(event_counts), group, output_filename
            )
        )

        try:
            ofh = open(output_filename, "wt")
        except OSError as exc:
            raise MergeError(
                "Cannot open output file {} ({})".format(output_filename, exc)
            )

        with ofh:
            header = self._aggregator.get_header()
            if header is not None:
                ofh.write(header if header.endswith("\n") else header + "\n")

            for event_key in sorted(event_counts.keys(), key=_event_sort_key):
                row = self.format_row(group, event_key, event_counts[event_key])
                print("\t".join(row), file=ofh)

        return output_filename

    def format_row(self, group, event_key, counts):
        raise NotImplementedError("implement format_row() in " + self.__class__.__name__)

    def _format_counts(self, counts, field_names):
        return [format_count(counts[x]) for x in field_names]


class IntronRetentionWriter(GroupWriter):

    record_class = IntronRetentionRecord

    def format_row(self, group, event_key, counts):
        return [event_key] + self._format_counts(counts, self.record_class.count_fields)


class IntronRetentionSummaryWriter(IntronRetentionWriter):

    record_class = IntronRetentionSummaryRecord


class MicroexonWriter(GroupWriter):

    def format_row(self, group, event_key, counts):
        metadata = self._aggregator.get_event_metadata(event_key)
        PSI = Derived_stats.microexon_PSI(counts["corr_exc"], counts["corr_inc"])
        return (
            list(metadata["info"])
            + [PSI]
            + self._format_counts(counts, MicroexonRecord.count_fields)
        )


class ExonSkipWriter(GroupWriter):

    def format_row(self, group, event_key, counts):
        metadata = self._aggregator.get_event_metadata(event_key)
        PSI = Derived_stats.exon_skip_PSI(
            counts["corr_exc"], counts["corr_inc1"], counts["corr_inc2"]
        )
        return (
            list(metadata["pre"])
            + [PSI]
            + self._format_counts(counts, ExonSkipRecord.count_fields[0:4])
            + [".", Merge_Globals.config["complexity_reference_only"]]
            + self._format_counts(counts, ExonSkipRecord.count_fields[4:7])
            + list(metadata["post"])
        )


class MultiExonWriter(GroupWriter):

    def format_row(self, group, event_key, counts):
        metadata = self._aggregator.get_event_metadata(event_key)
        composites = [counts[x] for x in MultiExonRecord.composite_fields]
        PSI = Derived_stats.multi_exon_PSI(*composites)
        complexity = Derived_stats.multi_exon_complexity(*composites)
        return (
            list(metadata["pre"])
            + [PSI]
            + self._format_counts(counts, MultiExonRecord.count_fields)
            + list(metadata["mid"])
            + [str(x) for x in composites]
            + [complexity]
            + list(metadata["post"])
        )


class JunctionWriter(GroupWriter):

    def format_row(self, group, event_key, counts):
        gene, junction = event_key
        histogram = self._aggregator.get_position_histogram(group, event_key)
        return [
            gene,
            junction,
            format_count(counts["total"]),
            Merge_Globals.NOT_AVAILABLE,
            Derived_stats.render_position_histogram(histogram),
        ]


class ExpressionWriter(GroupWriter):

    def __init__(self, output_dir, suffix, aggregator, group_map, effective_lengths):
        super().__init__(output_dir, suffix, aggregator, group_map)
        self._effective_lengths = effective_lengths

    def format_row(self, group, event_key, counts):
        raw_reads = counts["raw_reads"]
        value = Derived_stats.cRPKM(
            raw_reads,
            self._effective_lengths.get_length(event_key),
            self._aggregator.get_total_reads(group),
        )
        return [event_key, value, format_count(raw_reads)]
