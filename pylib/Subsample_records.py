#!/usr/bin/env python
# encoding: utf-8

import re
import logging
from Count_values import NotAvailable, CompositeCount, parse_count, get_sentinel_tokens

logger = logging.getLogger(__name__)


class SubsampleRecord:
    """One row of a per-subsample output table.

    Subclasses declare the summable fields by name (count_fields) and build records
    from the tab-split columns of a row with parse_fields(). Everything else in the
    row is passthrough metadata for the event.
    """

    format_name = "generic"
    min_num_fields = 1
    count_fields = ()

    def __init__(self, event_key, counts, metadata=None):
        self._event_key = event_key
        self._counts = counts
        self._metadata = metadata if metadata is not None else dict()

    @classmethod
    def parse_fields(cls, fields):
        raise NotImplementedError("implement parse_fields() in " + cls.__name__)

    @classmethod
    def check_num_fields(cls, fields):
        if len(fields) < cls.min_num_fields:
            raise ValueError(
                "expected at least {} columns for {} record, found {}".format(
                    cls.min_num_fields, cls.format_name, len(fields)
                )
            )

    @staticmethod
    def pad_fields(fields, num_fields):
        # trailing empty columns are dropped by some writers
        if len(fields) < num_fields:
            fields = fields + [""] * (num_fields - len(fields))
        return fields

    def get_event_key(self):
        return self._event_key

    def get_counts(self):
        return self._counts

    def get_count(self, field_name):
        return self._counts[field_name]

    def get_metadata(self):
        return self._metadata

    def __repr__(self):
        return "{}: {} counts:{}".format(
            self.__class__.__name__, self._event_key, self._counts
        )


class IntronRetentionRecord(SubsampleRecord):

    format_name = "IR"
    min_num_fields = 5
    count_fields = ("eij1", "eij2", "eej", "intron_body")

    @classmethod
    def parse_fields(cls, fields):
        cls.check_num_fields(fields)
        counts = dict(zip(cls.count_fields, [parse_count(x) for x in fields[1:5]]))
        return cls(fields[0], counts)


class IntronRetentionSummaryRecord(SubsampleRecord):

    format_name = "IR summary"
    min_num_fields = 7
    count_fields = tuple(["summary_count_{}".format(i) for i in range(1, 7)])

    @classmethod
    def parse_fields(cls, fields):
        cls.check_num_fields(fields)
        counts = dict(zip(cls.count_fields, [parse_count(x) for x in fields[1:7]]))
        return cls(fields[0], counts)


class MicroexonRecord(SubsampleRecord):

    format_name = "microexon"
    min_num_fields = 11
    count_fields = ("raw_exc", "raw_inc", "corr_exc", "corr_inc")

    @classmethod
    def parse_fields(cls, fields):
        cls.check_num_fields(fields)
        # col 6 is the subsample PSI, recomputed at write time
        counts = dict(zip(cls.count_fields, [parse_count(x) for x in fields[7:11]]))
        return cls(fields[1], counts, {"info": tuple(fields[0:6])})


class ExonSkipRecord(SubsampleRecord):

    format_name = "exon skipping"
    num_fields = 26
    min_num_fields = 25
    count_fields = (
        "reads_exc",
        "reads_inc1",
        "reads_inc2",
        "sum_of_reads",
        "corr_exc",
        "corr_inc1",
        "corr_inc2",
    )

    @classmethod
    def parse_fields(cls, fields):
        cls.check_num_fields(fields)
        fields = cls.pad_fields(fields, cls.num_fields)
        values = [parse_count(x) for x in fields[13:17] + fields[19:22]]
        metadata = {"pre": tuple(fields[0:12]), "post": tuple(fields[22:26])}
        return cls(fields[3], dict(zip(cls.count_fields, values)), metadata)


class MultiExonRecord(SubsampleRecord):

    format_name = "multi-exon"
    num_fields = 26
    min_num_fields = 25
    count_fields = ("reads_exc", "reads_inc1", "reads_inc2", "sum_of_reads")
    composite_fields = ("ref_exc", "ref_inc1", "ref_inc2")

    @classmethod
    def parse_fields(cls, fields):
        cls.check_num_fields(fields)
        fields = cls.pad_fields(fields, cls.num_fields)
        counts = dict(zip(cls.count_fields, [parse_count(x) for x in fields[13:17]]))
        for name, token in zip(cls.composite_fields, fields[19:22]):
            counts[name] = CompositeCount.parse(token)
        metadata = {
            "pre": tuple(fields[0:12]),
            "mid": tuple(fields[17:19]),
            "post": tuple(fields[23:26]),
        }
        return cls(fields[3], counts, metadata)


class JunctionRecord(SubsampleRecord):
    """exon-exon junction reads with their distribution over read overlap positions"""

    format_name = "junction"
    min_num_fields = 3
    count_fields = ("total",)

    position_regex = re.compile(r"^(\d+):(\d+)$")

    def __init__(self, event_key, counts, position_counts):
        super().__init__(event_key, counts)
        self._position_counts = position_counts

    @classmethod
    def parse_fields(cls, fields):
        cls.check_num_fields(fields)
        fields = cls.pad_fields(fields, 5)
        total = int(fields[2])
        position_counts = list()
        for item in fields[4].split(","):
            item = item.strip()
            if item == "":
                continue
            m = cls.position_regex.match(item)
            if m is None:
                raise ValueError("malformed position:count entry {!r}".format(item))
            position_counts.append((int(m.group(1)), int(m.group(2))))

        return cls((fields[0], fields[1]), {"total": total}, position_counts)

    def get_position_counts(self):
        return self._position_counts

    def get_position_sum(self):
        return sum([count for _, count in self._position_counts])

    def position_sum_matches_total(self):
        return self.get_position_sum() == self._counts["total"]


class ExpressionRecord(SubsampleRecord):

    format_name = "expression"
    min_num_fields = 3
    count_fields = ("raw_reads",)

    @classmethod
    def parse_fields(cls, fields):
        cls.check_num_fields(fields)
        if fields[1].strip() in get_sentinel_tokens():
            # gene not evaluated in this subsample
            reads = NotAvailable()
        else:
            reads = parse_count(fields[2])
        return cls(fields[0], {"raw_reads": reads})

    def get_raw_reads(self):
        return self._counts["raw_reads"]
