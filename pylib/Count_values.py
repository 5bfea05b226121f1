#!/usr/bin/env python
# encoding: utf-8

import re
import logging
import Merge_Globals

logger = logging.getLogger(__name__)


class NotAvailable:
    """Stands in for a count that a subsample could not provide ('NA', or 'ne' for not evaluated).

    Once a group field sees a NotAvailable value it stays NotAvailable, whatever the other
    subsamples contribute. The token is kept verbatim so it is written back unchanged.
    """

    def __init__(self, token=Merge_Globals.NOT_AVAILABLE):
        self._token = token

    def get_token(self):
        return self._token

    def __eq__(self, other):
        return isinstance(other, NotAvailable) and other._token == self._token

    def __hash__(self):
        return hash(("NotAvailable", self._token))

    def __str__(self):
        return self._token

    def __repr__(self):
        return "NotAvailable({!r})".format(self._token)


NA = NotAvailable(Merge_Globals.NOT_AVAILABLE)


def is_available(value):
    return not isinstance(value, NotAvailable)


def get_sentinel_tokens():
    return (Merge_Globals.NOT_AVAILABLE, Merge_Globals.NOT_EVALUATED)


def parse_count(token):
    """int, float or NotAvailable from a count column; ValueError on anything else"""

    token = token.strip()

    if token in get_sentinel_tokens():
        return NotAvailable(token)

    if token == "":
        return 0

    try:
        return int(token)
    except ValueError:
        return float(token)


def combine_counts(accumulated, incoming):
    # sentinel wins over any number, most recent sentinel kept
    if not is_available(incoming):
        return incoming
    if not is_available(accumulated):
        return accumulated
    return accumulated + incoming


def format_count(value):

    if not is_available(value):
        return value.get_token()

    if isinstance(value, float):
        if value.is_integer():
            return str(int(value))
        return "{:.15g}".format(value)

    return str(value)


def value_or_zero(value):
    return value if is_available(value) else 0


class CompositeCount:
    """Reads supporting a reference junction, encoded in files as 'total=corrected=reference_only'."""

    composite_regex = re.compile(r"^(.*?)=(.*?)=(.*)$")

    def __init__(self, total=0, corrected=0, reference_only=0):
        self._total = total
        self._corrected = corrected
        self._reference_only = reference_only

    @classmethod
    def parse(cls, token):

        m = cls.composite_regex.match(token.strip())
        if m is None:
            logger.debug("composite value {!r} not in a=b=c form, counted as zero".format(token))
            return cls()

        return cls(*[cls._parse_component(x) for x in m.groups()])

    @staticmethod
    def _parse_component(token):
        try:
            return parse_count(token)
        except ValueError:
            # non-numeric component contributes nothing
            return 0

    def get_total(self):
        return self._total

    def get_corrected(self):
        return self._corrected

    def get_reference_only(self):
        return self._reference_only

    def get_components(self):
        return (self._total, self._corrected, self._reference_only)

    def combine(self, other):
        return CompositeCount(
            *[
                combine_counts(mine, theirs)
                for mine, theirs in zip(self.get_components(), other.get_components())
            ]
        )

    def __add__(self, other):
        return self.combine(other)

    def __eq__(self, other):
        return (
            isinstance(other, CompositeCount)
            and self.get_components() == other.get_components()
        )

    def __str__(self):
        return "=".join([format_count(x) for x in self.get_components()])

    def __repr__(self):
        return "CompositeCount({})".format(str(self))
