#!/usr/bin/env python
# encoding: utf-8

import os
import csv
import logging
import pandas as pd
from Merge_exceptions import ConfigError

logger = logging.getLogger(__name__)


class GroupMap:
    """Subsample -> group assignments, one 'subsample<TAB>group' row per subsample."""

    def __init__(self, subsample_to_group=None):

        self._subsample_to_group = dict()

        if subsample_to_group is not None:
            for subsample, group in subsample_to_group.items():
                self._subsample_to_group[subsample] = group

        return

    @classmethod
    def load(cls, groups_filename):

        if not os.path.isfile(groups_filename):
            raise ConfigError("Cannot open groupings: {}".format(groups_filename))

        logger.info("-loading subsample groupings from {}".format(groups_filename))

        try:
            df = pd.read_csv(
                groups_filename,
                sep="\t",
                header=None,
                names=["subsample", "group"],
                usecols=[0, 1],
                index_col=False,
                dtype=str,
                keep_default_na=False,
                quoting=csv.QUOTE_NONE,
            )
        except pd.errors.EmptyDataError:
            raise ConfigError("Groupings file is empty: {}".format(groups_filename))
        except ValueError as exc:
            raise ConfigError(
                "Cannot parse groupings: {} ({})".format(groups_filename, exc)
            )
        except OSError as exc:
            raise ConfigError(
                "Cannot open groupings: {} ({})".format(groups_filename, exc)
            )

        # tables saved from spreadsheets can carry quotes and carriage returns
        df = df.fillna("")
        for column in ("subsample", "group"):
            df[column] = (
                df[column]
                .str.replace("\r", "", regex=False)
                .str.replace('"', "", regex=False)
                .str.strip()
            )

        group_map = cls()
        for subsample, group in zip(df["subsample"], df["group"]):
            if subsample == "" and group == "":
                continue
            if subsample == "" or group == "":
                logger.warning(
                    "skipping incomplete grouping row: subsample={!r} group={!r}".format(
                        subsample, group
                    )
                )
                continue
            group_map.assign(subsample, group)

        if len(group_map) == 0:
            raise ConfigError(
                "No subsample groupings found in {}".format(groups_filename)
            )

        logger.info(
            "-{} subsamples assigned to {} groups".format(
                len(group_map), len(group_map.get_groups())
            )
        )

        return group_map

    def assign(self, subsample, group):
        prev_group = self._subsample_to_group.get(subsample)
        if prev_group is not None and prev_group != group:
            logger.warning(
                "subsample {} listed more than once, reassigned from {} to {}".format(
                    subsample, prev_group, group
                )
            )
        self._subsample_to_group[subsample] = group

    def get_group(self, subsample):
        return self._subsample_to_group.get(subsample)

    def has_subsample(self, subsample):
        return subsample in self._subsample_to_group

    def get_subsamples(self):
        return sorted(self._subsample_to_group.keys())

    def get_groups(self):
        return sorted(set(self._subsample_to_group.values()))

    def __len__(self):
        return len(self._subsample_to_group)

    def __repr__(self):
        return "\n".join(
            ["{}\t{}".format(s, g) for s, g in sorted(self._subsample_to_group.items())]
        )
