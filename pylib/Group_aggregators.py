#!/usr/bin/env python
# encoding: utf-8

import logging
from collections import defaultdict
import numpy as np
from Count_values import CompositeCount, combine_counts, is_available

logger = logging.getLogger(__name__)


class GroupAggregator:
    """Folds subsample records into per-group, per-event summed counts.

    Each count field combines independently (a NotAvailable value sticks).
    Event metadata is shared by all groups and kept from the first record seen.
    """

    def __init__(self, format_name, group_map):
        self._format_name = format_name
        self._group_map = group_map

        self._group_to_event_counts = defaultdict(dict)
        self._event_metadata = dict()
        self._header = None
        self._subsamples = set()

        return

    def get_format_name(self):
        return self._format_name

    def set_header(self, header):
        if self._header is None:
            self._header = header

    def get_header(self):
        return self._header

    def add_subsample_records(self, subsample, records, source=None):

        group = self._group_map.get_group(subsample)
        if group is None:
            raise RuntimeError(
                "subsample {} has no group assignment".format(subsample)
            )

        num_records = 0
        for record in records:
            self.add_record(group, record, source=source)
            num_records += 1

        self._subsamples.add(subsample)

        logger.debug(
            "-added {} {} records of {} to group {}".format(
                num_records, self._format_name, subsample, group
            )
        )

        return num_records

    def add_record(self, group, record, source=None):

        event_key = record.get_event_key()

        if event_key not in self._event_metadata:
            self._event_metadata[event_key] = record.get_metadata()

        event_counts = self._group_to_event_counts[group]
        if event_key not in event_counts:
            event_counts[event_key] = dict(record.get_counts())
            return

        summed = event_counts[event_key]
        for field_name, value in record.get_counts().items():
            summed[field_name] = self._combine(summed.get(field_name, 0), value)

        return

    @staticmethod
    def _combine(accumulated, incoming):
        if isinstance(accumulated, CompositeCount):
            return accumulated.combine(incoming)
        return combine_counts(accumulated, incoming)

    def get_event_counts(self, group):
        """event_key -> {field_name: summed value}; empty for groups without data"""
        return self._group_to_event_counts.get(group, dict())

    def get_event_metadata(self, event_key):
        return self._event_metadata.get(event_key, dict())

    def get_subsamples(self):
        return sorted(self._subsamples)

    def get_num_subsamples(self):
        return len(self._subsamples)

    def get_groups_with_data(self):
        return sorted(self._group_to_event_counts.keys())


class JunctionAggregator(GroupAggregator):
    """Also keeps, per group and junction, the summed reads at each read overlap position."""

    def __init__(self, format_name, group_map):
        super().__init__(format_name, group_map)
        self._group_to_event_positions = defaultdict(dict)
        self._num_position_sum_mismatches = 0

    def add_record(self, group, record, source=None):

        super().add_record(group, record, source=source)

        if not record.position_sum_matches_total():
            self._num_position_sum_mismatches += 1
            logger.warning(
                "Sum of positions ({}) ne total provided ({}) for {} in {}".format(
                    record.get_position_sum(),
                    record.get_count("total"),
                    "\t".join(record.get_event_key()),
                    source,
                )
            )

        position_counts = record.get_position_counts()
        if not position_counts:
            return

        positions = np.array([p for p, _ in position_counts], dtype=np.int64)
        counts = np.array([c for _, c in position_counts], dtype=np.int64)

        event_positions = self._group_to_event_positions[group]
        histogram = event_positions.get(record.get_event_key())
        prev_len = 0 if histogram is None else len(histogram)

        new_len = max(prev_len, int(positions.max()) + 1)
        if histogram is None or new_len > prev_len:
            extended = np.zeros(new_len, dtype=np.int64)
            if histogram is not None:
                extended[:prev_len] = histogram
            histogram = extended

        np.add.at(histogram, positions, counts)
        event_positions[record.get_event_key()] = histogram

        return

    def get_position_histogram(self, group, event_key):
        return self._group_to_event_positions.get(group, dict()).get(
            event_key, np.zeros(0, dtype=np.int64)
        )

    def get_num_position_sum_mismatches(self):
        return self._num_position_sum_mismatches


class ExpressionAggregator(GroupAggregator):
    """Also keeps the total evaluated raw reads of each group, the cRPKM library size."""

    def __init__(self, format_name, group_map):
        super().__init__(format_name, group_map)
        self._group_total_reads = defaultdict(int)

    def add_record(self, group, record, source=None):

        super().add_record(group, record, source=source)

        reads = record.get_raw_reads()
        if is_available(reads):
            self._group_total_reads[group] += reads

        return

    def get_total_reads(self, group):
        return self._group_total_reads.get(group, 0)
