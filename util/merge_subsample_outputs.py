#!/usr/bin/env python3

import sys, os

sys.path.insert(
    0, os.path.sep.join([os.path.dirname(os.path.realpath(__file__)), "../pylib"])
)

import logging
import traceback
import argparse
import Merge_Globals  # type: ignore
from GroupMap import GroupMap  # type: ignore
from EffectiveLengthTable import EffectiveLengthTable  # type: ignore
from Merge_outputs import SubsampleMerger  # type: ignore
from Merge_exceptions import MergeError, ConfigError  # type: ignore

FORMAT = (
    "%(asctime)-15s %(levelname)s %(module)s.%(name)s.%(funcName)s:\n\t%(message)s\n"
)

logger = logging.getLogger()


def _configure_logging(debug=False):
    for h in list(logger.handlers):
        logger.removeHandler(h)

    logger.setLevel(logging.DEBUG if debug else logging.INFO)

    # INFO and below to stdout
    class StdoutFilter(logging.Filter):
        def filter(self, record):
            return record.levelno <= logging.INFO

    sh_out = logging.StreamHandler(stream=sys.stdout)
    sh_out.setLevel(logging.DEBUG)
    sh_out.addFilter(StdoutFilter())
    sh_out.setFormatter(logging.Formatter(FORMAT))
    logger.addHandler(sh_out)

    # WARNING and above to stderr
    sh_err = logging.StreamHandler(stream=sys.stderr)
    sh_err.setLevel(logging.WARNING)
    sh_err.setFormatter(logging.Formatter(FORMAT))
    logger.addHandler(sh_err)

    def _excepthook(exc_type, exc, tb):
        logger.error("Uncaught exception: %s", exc)
        traceback.print_exception(exc_type, exc, tb, file=sys.stderr)

    sys.excepthook = _excepthook


_configure_logging(debug=False)


def main():

    parser = argparse.ArgumentParser(
        description="Merges outputs from multiple subsamples into grouped samples",
        formatter_class=argparse.ArgumentDefaultsHelpFormatter,
    )

    parser.add_argument(
        "--groups",
        "-g",
        type=str,
        required=True,
        help="file with groupings (subsample1<TAB>sampleA<NEWLINE>subsample2<TAB>sampleA...)",
    )

    parser.add_argument(
        "--outDir",
        "-o",
        type=str,
        default="vast_out",
        help="output folder holding to_combine/ (and expr_out/ for expression)",
    )

    parser.add_argument(
        "--sp",
        type=str,
        default=None,
        help="three letter species code of the database (only needed if merging cRPKMs)",
    )

    parser.add_argument(
        "--dbDir",
        type=str,
        default=os.path.sep.join(
            [os.path.dirname(os.path.realpath(__file__)), "..", "VASTDB"]
        ),
        help="database directory",
    )

    parser.add_argument(
        "--IR_version",
        type=int,
        default=1,
        help="version of the intron retention pipeline (1 or 2)",
    )

    parser.add_argument(
        "--expr",
        action="store_true",
        default=False,
        help="merges cRPKM files",
    )

    parser.add_argument(
        "--exprONLY",
        action="store_true",
        default=False,
        help="merges only cRPKM files",
    )

    parser.add_argument(
        "--move_to_PARTS",
        action="store_true",
        default=False,
        help="moves the subsample files to PARTS/ within the output folders",
    )

    parser.add_argument(
        "--no_progress",
        action="store_true",
        default=False,
        help="do not show progress bars while reading subsample files",
    )

    parser.add_argument(
        "--debug",
        "-d",
        action="store_true",
        default=False,
        help="debug mode, more verbose",
    )

    args = parser.parse_args()

    if args.debug:
        Merge_Globals.DEBUG = True
        _configure_logging(debug=True)
        logger.debug("Debug logging enabled for merge script.")

    if args.no_progress:
        Merge_Globals.config["show_progress"] = False

    try:
        run_merge(args)
    except MergeError as exc:
        logger.error("[merge error]: %s", exc)
        sys.exit(1)

    logger.info("Merging finished.")

    sys.exit(0)


def run_merge(args):

    merge_expression = args.expr or args.exprONLY

    if args.IR_version not in (1, 2):
        raise ConfigError("IR version must be either 1 or 2")

    effective_lengths = None
    if merge_expression:
        if args.sp is None:
            raise ConfigError("Needs to provide species (--sp) to merge expression")
        db_dir = os.path.abspath(args.dbDir)
        logger.info("Using database -> {}".format(db_dir))
        if not os.path.isdir(os.path.join(db_dir, args.sp)):
            raise ConfigError(
                "The database directory {} does not exist".format(
                    os.path.join(db_dir, args.sp)
                )
            )

    group_map = GroupMap.load(args.groups)

    if merge_expression:
        effective_lengths = EffectiveLengthTable.load(
            EffectiveLengthTable.get_default_path(db_dir, args.sp)
        )

    merger = SubsampleMerger(
        group_map,
        args.outDir,
        IR_version=args.IR_version,
        merge_expression=merge_expression,
        expression_only=args.exprONLY,
        effective_lengths=effective_lengths,
        move_to_parts=args.move_to_PARTS,
    )

    logger.info("Setting output directory to {}".format(args.outDir))

    format_counts = merger.run()

    for format_key, num_subsamples in sorted(format_counts.items()):
        logger.info("-{}: {} subsamples merged".format(format_key, num_subsamples))

    return format_counts


if __name__ == "__main__":
    main()
