#!/usr/bin/env python
# encoding: utf-8

import os
import logging
import Merge_Globals
from Merge_exceptions import FormatError
from Subsample_records import (
    IntronRetentionRecord,
    IntronRetentionSummaryRecord,
    MicroexonRecord,
    ExonSkipRecord,
    MultiExonRecord,
    JunctionRecord,
    ExpressionRecord,
)

logger = logging.getLogger(__name__)


class FormatReader:
    """Finds the subsample files of one format in a folder and streams their records.

    Files are matched by suffix; the subsample name is the filename with the suffix
    removed. Files for subsamples absent from the group map are left alone.
    """

    record_class = None
    suffix_config_key = None
    has_header = True

    def __init__(self, input_dir, group_map):
        self._input_dir = input_dir
        self._group_map = group_map
        self._header = None

    def get_suffix(self):
        return Merge_Globals.config[self.suffix_config_key]

    def get_format_name(self):
        return self.record_class.format_name

    def get_header(self):
        return self._header

    def get_subsample_name(self, filename):
        basename = os.path.basename(filename)
        suffix = self.get_suffix()
        if not basename.endswith(suffix) or basename == suffix:
            return None
        return basename[: -len(suffix)]

    def find_input_files(self):
        """sorted list of (subsample, filename) for the grouped subsamples"""

        suffix = self.get_suffix()
        input_files = list()

        for basename in sorted(os.listdir(self._input_dir)):
            filename = os.path.join(self._input_dir, basename)
            if not os.path.isfile(filename):
                continue
            subsample = self.get_subsample_name(basename)
            if subsample is None:
                continue
            if not self._group_map.has_subsample(subsample):
                logger.debug(
                    "-skipping {}, {} not listed in groupings".format(filename, subsample)
                )
                continue
            input_files.append((subsample, filename))

        logger.debug(
            "-found {} {} files in {}".format(len(input_files), suffix, self._input_dir)
        )

        return input_files

    def read_subsample_file(self, filename):
        """generator of records; the first header seen is kept for the group outputs"""

        try:
            fh = open(filename, "rt")
        except OSError as exc:
            raise FormatError("Can't open input file ({})".format(exc), filename)

        with fh:
            line_no = 0

            if self.has_header:
                header = fh.readline()
                line_no += 1
                if header.strip() == "":
                    raise FormatError("missing header line", filename, line_no)
                if self._header is None:
                    self._header = header

            for line in fh:
                line_no += 1
                line = line.rstrip("\r\n")
                if line.strip() == "":
                    continue
                try:
                    record = self.record_class.parse_fields(line.split("\t"))
                except ValueError as exc:
                    raise FormatError(
                        "cannot parse {} record: {}".format(self.get_format_name(), exc),
                        filename,
                        line_no,
                    )
                yield record

    def report_found_vs_missing(self, found_subsamples):

        found_set = set(found_subsamples)
        found = sorted(found_set)
        missing = [s for s in self._group_map.get_subsamples() if s not in found_set]

        logger.info(
            "-{} {} files merged for {} listed subsamples".format(
                len(found), self.get_suffix(), len(self._group_map)
            )
        )
        if missing:
            logger.info(
                "-no {} file for subsamples: {}".format(self.get_suffix(), ", ".join(missing))
            )

        return found, missing


class IntronRetentionReader(FormatReader):
    record_class = IntronRetentionRecord
    suffix_config_key = "suffix_IR"


class IntronRetentionV2Reader(FormatReader):
    record_class = IntronRetentionRecord
    suffix_config_key = "suffix_IR2"


class IntronRetentionSummaryReader(FormatReader):
    record_class = IntronRetentionSummaryRecord
    suffix_config_key = "suffix_IR_summary"


class MicroexonReader(FormatReader):
    record_class = MicroexonRecord
    suffix_config_key = "suffix_microexon"


class ExonSkipReader(FormatReader):
    record_class = ExonSkipRecord
    suffix_config_key = "suffix_exon_skip"


class MultiExonReader(FormatReader):
    record_class = MultiExonRecord
    suffix_config_key = "suffix_multi_exon"


class JunctionReader(FormatReader):
    record_class = JunctionRecord
    suffix_config_key = "suffix_junction"
    has_header = False


class ExpressionReader(FormatReader):
    record_class = ExpressionRecord
    suffix_config_key = "suffix_expression"
    has_header = False
