"""Exception types surfaced to the dashboard error banner."""

from __future__ import annotations


class FinAnalyzerError(Exception):
    """Base class for recoverable errors; ``str(err)`` is shown to the user."""


class UnsupportedFileTypeError(FinAnalyzerError):
    """Raised before any read when the upload extension is not recognised."""


class FileReadError(FinAnalyzerError):
    pass


class ParseError(FinAnalyzerError):
    """The file was read but could not be turned into a table."""


class EmptySheetError(ParseError):
    pass


class EmptyTableError(FinAnalyzerError):
    """Raised when an analysis is requested without any rows."""


class AnalysisFailedError(FinAnalyzerError):
    pass
