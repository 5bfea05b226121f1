#!/usr/bin/env python
# encoding: utf-8

import os
import csv
import logging
import pandas as pd
import Merge_Globals
from Merge_exceptions import ConfigError

logger = logging.getLogger(__name__)


class EffectiveLengthTable:
    """Per-gene effective (mappable) lengths used as the cRPKM length normalizer."""

    def __init__(self, gene_to_length=None):
        self._gene_to_length = dict(gene_to_length) if gene_to_length else dict()

    @staticmethod
    def get_default_path(db_dir, species):
        return Merge_Globals.config["effective_length_template"].format(
            db_dir=db_dir.rstrip("/"), species=species
        )

    @classmethod
    def load(cls, eff_filename):

        if not os.path.isfile(eff_filename):
            raise ConfigError(
                "Effective length file does not exist: {}".format(eff_filename)
            )

        logger.info("-loading effective lengths from {}".format(eff_filename))

        try:
            df = pd.read_csv(
                eff_filename,
                sep="\t",
                header=None,
                names=["gene", "eff_length"],
                usecols=[0, 1],
                index_col=False,
                dtype={"gene": str},
                keep_default_na=False,
                quoting=csv.QUOTE_NONE,
            )
        except pd.errors.EmptyDataError:
            raise ConfigError("Effective length file is empty: {}".format(eff_filename))
        except ValueError as exc:
            raise ConfigError(
                "Cannot parse effective length file: {} ({})".format(eff_filename, exc)
            )
        except OSError as exc:
            raise ConfigError(
                "Cannot open effective length file: {} ({})".format(eff_filename, exc)
            )

        # unparseable lengths count as zero, which yields NA cRPKMs downstream
        lengths = pd.to_numeric(df["eff_length"], errors="coerce").fillna(0)

        table = cls(zip(df["gene"], lengths.astype(float)))

        logger.info("-loaded effective lengths for {} genes".format(len(table)))

        return table

    def get_length(self, gene):
        """effective length, 0 for genes absent from the table"""
        return self._gene_to_length.get(gene, 0)

    def __len__(self):
        return len(self._gene_to_length)
