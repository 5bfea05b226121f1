#!/usr/bin/env python
# encoding: utf-8

import os
import shutil
import logging
from tqdm import tqdm
import Merge_Globals
from Merge_exceptions import ConfigError
from Consistency_checker import ConsistencyChecker
from Format_readers import (
    IntronRetentionReader,
    IntronRetentionV2Reader,
    IntronRetentionSummaryReader,
    MicroexonReader,
    ExonSkipReader,
    MultiExonReader,
    JunctionReader,
    ExpressionReader,
)
from Group_aggregators import GroupAggregator, JunctionAggregator, ExpressionAggregator
from Group_writers import (
    IntronRetentionWriter,
    IntronRetentionSummaryWriter,
    MicroexonWriter,
    ExonSkipWriter,
    MultiExonWriter,
    JunctionWriter,
    ExpressionWriter,
)

logger = logging.getLogger(__name__)


# format_key -> (reader, aggregator, writer)
FORMAT_HANDLERS = {
    "IR": (IntronRetentionReader, GroupAggregator, IntronRetentionWriter),
    "IR2": (IntronRetentionV2Reader, GroupAggregator, IntronRetentionWriter),
    "IR_summary": (
        IntronRetentionSummaryReader,
        GroupAggregator,
        IntronRetentionSummaryWriter,
    ),
    "microexon": (MicroexonReader, GroupAggregator, MicroexonWriter),
    "junction": (JunctionReader, JunctionAggregator, JunctionWriter),
    "exon_skip": (ExonSkipReader, GroupAggregator, ExonSkipWriter),
    "multi_exon": (MultiExonReader, GroupAggregator, MultiExonWriter),
    "expression": (ExpressionReader, ExpressionAggregator, ExpressionWriter),
}


class SubsampleMerger:
    """Merges the subsample outputs found under an output folder into one set of outputs per group.

    Splicing tables are read from and written to <out_dir>/to_combine, expression
    tables to <out_dir>/expr_out. Each format is read, summed per group and written
    before the next one starts; subsample counts are cross-checked at the end.
    """

    def __init__(
        self,
        group_map,
        out_dir,
        IR_version=1,
        merge_expression=False,
        expression_only=False,
        effective_lengths=None,
        move_to_parts=False,
    ):

        if IR_version not in (1, 2):
            raise ConfigError(
                "IR version must be either 1 or 2, got {}".format(IR_version)
            )

        if expression_only:
            merge_expression = True

        self._group_map = group_map
        self._out_dir = out_dir
        self._IR_version = IR_version
        self._merge_expression = merge_expression
        self._expression_only = expression_only
        self._effective_lengths = effective_lengths
        self._move_to_parts = move_to_parts

        self._splicing_dir = os.path.join(out_dir, Merge_Globals.config["splicing_dir"])
        self._expression_dir = os.path.join(
            out_dir, Merge_Globals.config["expression_dir"]
        )

        if not os.path.isdir(self._splicing_dir):
            raise ConfigError(
                'The output directory "{}" does not exist'.format(self._splicing_dir)
            )

        if merge_expression:
            if effective_lengths is None:
                raise ConfigError("Effective lengths are required to merge expression")
            if not os.path.isdir(self._expression_dir):
                raise ConfigError(
                    'The expression directory "{}" does not exist'.format(
                        self._expression_dir
                    )
                )

        self._consistency_checker = ConsistencyChecker()

        return

    def get_formats_to_merge(self):

        format_keys = list()

        if self._merge_expression:
            format_keys.append("expression")

        if not self._expression_only:
            if self._IR_version == 1:
                format_keys.append("IR")
            else:
                format_keys.extend(["IR2", "IR_summary"])
            format_keys.extend(["microexon", "junction", "exon_skip", "multi_exon"])

        return format_keys

    def run(self):
        """merge every requested format; returns format_key -> number of subsamples merged"""

        if self._expression_only:
            logger.info("Doing merging for Expression files only")
        elif not self._merge_expression:
            logger.info("Warning: Not merging Expression data")

        for format_key in self.get_formats_to_merge():
            num_subsamples = self.merge_format(format_key)
            # IR v1 and v2 share the IR slot of the consistency check
            self._consistency_checker.record(
                "IR" if format_key == "IR2" else format_key, num_subsamples
            )

        if not self._expression_only:
            self._consistency_checker.check(IR_version=self._IR_version)

        return self._consistency_checker.get_counts()

    def merge_format(self, format_key):

        reader_class, aggregator_class, writer_class = FORMAT_HANDLERS[format_key]

        folder = self._expression_dir if format_key == "expression" else self._splicing_dir

        reader = reader_class(folder, self._group_map)
        aggregator = aggregator_class(reader.get_format_name(), self._group_map)

        logger.info("Loading {} files".format(reader.get_suffix()))

        input_files = reader.find_input_files()

        for subsample, filename in tqdm(
            input_files,
            desc=format_key,
            unit="files",
            leave=False,
            disable=not Merge_Globals.config.get("show_progress", True),
        ):
            logger.info("  Processing {}".format(filename))
            aggregator.add_subsample_records(
                subsample, reader.read_subsample_file(filename), source=filename
            )
            if self._move_to_parts:
                self._archive_input_file(filename, folder)

        aggregator.set_header(reader.get_header())
        reader.report_found_vs_missing(aggregator.get_subsamples())

        if format_key == "expression":
            writer = writer_class(
                folder,
                reader.get_suffix(),
                aggregator,
                self._group_map,
                self._effective_lengths,
            )
        else:
            writer = writer_class(folder, reader.get_suffix(), aggregator, self._group_map)

        output_filenames = writer.write_all_groups()
        logger.info(
            "-wrote {} group {} files".format(len(output_filenames), reader.get_suffix())
        )

        return aggregator.get_num_subsamples()

    def _archive_input_file(self, filename, folder):
        archive_dir = os.path.join(folder, Merge_Globals.config["archive_subdir"])
        if not os.path.isdir(archive_dir):
            os.makedirs(archive_dir)
        logger.debug("-moving {} to {}".format(filename, archive_dir))
        shutil.move(filename, os.path.join(archive_dir, os.path.basename(filename)))
