"""
Syslog Parser

Parses free-text, syslog-like lines (RFC 3164 style without a priority).

Format:
    timestamp hostname event-label: message

Examples:
    Jan 15 10:23:45 webserver sshd[12345]: Failed password for root from 10.0.0.5
    Dec  3 15:30:45 fw01 kernel: DROP IN=eth0 SRC=203.0.113.9
"""

import re

from .base_parser import BaseParser, LogRecord, LogSeverity, ParseResult


class SyslogParser(BaseParser):
    """
    Parser for free-text syslog lines.

    Severity is not read from the line; it is derived from keywords in
    the message since plain syslog text carries no level field.
    """

    FALLBACK_SOURCE = "unknown"
    FALLBACK_EVENT_TYPE = "raw"

    LINE_PATTERN = re.compile(
        r'^(?P<timestamp>\w+\s+\d+\s+\d+:\d+:\d+)\s+'     # Jan 15 10:23:45
        r'(?P<source>\S+)\s+'                             # Hostname
        r'(?P<event_type>.+?):\s+'                        # Process[pid]:
        r'(?P<message>.+)$'                               # Message
    )

    ERROR_KEYWORDS = ('fail', 'error', 'denied')
    WARNING_KEYWORDS = ('warn',)

    def __init__(self):
        """Initialize syslog parser."""
        super().__init__("syslog")

    @classmethod
    def classify_severity(cls, message: str) -> LogSeverity:
        """Derive a severity from keywords in the message."""
        lowered = message.lower()
        if any(keyword in lowered for keyword in cls.ERROR_KEYWORDS):
            return LogSeverity.ERROR
        if any(keyword in lowered for keyword in cls.WARNING_KEYWORDS):
            return LogSeverity.WARNING
        return LogSeverity.INFO

    def parse_line(self, line: str) -> ParseResult:
        match = self.LINE_PATTERN.match(line)
        if not match:
            return self._fallback(line, "line does not match syslog layout")

        groups = match.groupdict()
        message = groups['message']

        return ParseResult(record=LogRecord(
            timestamp=groups['timestamp'],
            severity=self.classify_severity(message).value,
            source=groups['source'],
            event_type=groups['event_type'],
            message=message,
        ))
