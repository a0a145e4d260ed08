"""
Base Parser Module

Provides the abstract base class for all line parsers, the normalized
LogRecord dataclass and the ParseResult value returned for every line.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, asdict
from enum import Enum
from typing import Optional, Dict, Any


NOT_AVAILABLE = "N/A"


class LogFormat(Enum):
    """Input formats recognized by format detection."""
    STRUCTURED = "json"
    DELIMITED = "csv"
    FREE_TEXT = "syslog"
    UNKNOWN = "unknown"

    def __str__(self):
        return self.value


class LogSeverity(str, Enum):
    """Severity assigned to normalized records."""
    ERROR = "ERROR"
    WARNING = "WARNING"
    INFO = "INFO"

    def __str__(self):
        return self.value


@dataclass(frozen=True)
class LogRecord:
    """
    Normalized log entry.

    Every supported input format is converted into this shape so the
    detectors never need to know where a line came from.

    Attributes:
        timestamp: Timestamp text as it appeared in the line, or "N/A"
        severity: ERROR, WARNING or INFO (delimited lines keep their column)
        source: Originating host or process identifier
        event_type: Free-text category (process name, declared event kind)
        message: The log message; never empty for a stored record
    """
    timestamp: str
    severity: str
    source: str
    event_type: str
    message: str

    def to_dict(self) -> Dict[str, Any]:
        """Convert record to dictionary for serialization."""
        return asdict(self)


@dataclass(frozen=True)
class ParseResult:
    """
    Outcome of parsing one line.

    A fallback result still carries a usable record (the raw line as the
    message); ``reason`` says why structural parsing did not succeed.
    """
    record: LogRecord
    fallback: bool = False
    reason: Optional[str] = None


class BaseParser(ABC):
    """
    Abstract base class for line parsers.

    Subclasses implement ``parse_line`` for a single format and use
    ``_fallback`` when a line does not have the expected structure.
    """

    # Placeholders used for fallback records
    FALLBACK_SOURCE = "unknown"
    FALLBACK_EVENT_TYPE = "raw"

    def __init__(self, log_type: str):
        """
        Initialize the parser.

        Args:
            log_type: Identifier for the log format (e.g., 'syslog', 'json')
        """
        self.log_type = log_type

    @abstractmethod
    def parse_line(self, line: str) -> ParseResult:
        """
        Parse a single sanitized log line.

        Args:
            line: Non-empty, sanitized log line

        Returns:
            ParseResult holding either the parsed or the fallback record
        """
        pass

    def _fallback(self, line: str, reason: str) -> ParseResult:
        """Build the best-effort record for a line that could not be parsed."""
        record = LogRecord(
            timestamp=NOT_AVAILABLE,
            severity=LogSeverity.INFO.value,
            source=self.FALLBACK_SOURCE,
            event_type=self.FALLBACK_EVENT_TYPE,
            message=line,
        )
        return ParseResult(record=record, fallback=True, reason=reason)
