#!/usr/bin/env python
# encoding: utf-8


class MergeError(RuntimeError):
    """Fatal condition while merging subsample outputs."""


class ConfigError(MergeError):
    """Missing or invalid run configuration (group table, folders, species, IR version)."""


class FormatError(MergeError):
    """An input file cannot be opened or does not have the expected layout."""

    def __init__(self, message, filename=None, line_no=None):
        if filename is not None:
            location = filename if line_no is None else "{}:{}".format(filename, line_no)
            message = "{} [{}]".format(message, location)
        super().__init__(message)
        self.filename = filename
        self.line_no = line_no


class ConsistencyError(MergeError):
    """Formats that must co-occur per subsample were found for different numbers of subsamples."""


class ConsistencyWarning(UserWarning):
    """Optional formats were found for a different number of subsamples than the cassette formats."""
