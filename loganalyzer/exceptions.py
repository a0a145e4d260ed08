"""
Exceptions raised by the log analyzer.

Per-line parse problems are not exceptions; they surface as fallback
ParseResult values. Only conditions that stop an ingestion run end up here.
"""


class LogAnalyzerError(Exception):
    """Base class for all analyzer errors."""


class LogInputError(LogAnalyzerError):
    """The log file is missing, is not a regular file, or cannot be read."""

    def __init__(self, path, reason: str):
        super().__init__(f"{reason}: {path}")
        self.path = path
        self.reason = reason


class StoreFrozenError(LogAnalyzerError):
    """An append was attempted on an entry store after ingestion finished."""
