"""
CSV Parser

Parses comma-delimited logs with positional columns:
    timestamp,severity,source,message

Columns past the fourth are ignored. Quoted columns may contain commas.

Example:
    2024-01-01,ERROR,firewall,"Unauthorized admin privilege escalation attempt"
"""

import csv

from .base_parser import BaseParser, LogRecord, ParseResult


class CSVLineParser(BaseParser):
    """Parser for comma-delimited logs."""

    FALLBACK_SOURCE = "csv"
    FALLBACK_EVENT_TYPE = "delimited_event"

    MIN_FIELDS = 4

    def __init__(self):
        """Initialize CSV parser."""
        super().__init__("csv")

    @staticmethod
    def _strip_single_quotes(value: str) -> str:
        """
        Trim whitespace and one pair of surrounding single quotes.

        Double-quoted fields have already been unquoted by the csv reader,
        so any double quotes left in ``value`` are part of the data.
        """
        value = value.strip()
        if len(value) >= 2 and value[0] == value[-1] == "'":
            value = value[1:-1].strip()
        return value

    def parse_line(self, line: str) -> ParseResult:
        try:
            fields = next(csv.reader([line], skipinitialspace=True), [])
        except csv.Error as e:
            return self._fallback(line, f"malformed CSV: {e}")

        if len(fields) < self.MIN_FIELDS:
            return self._fallback(
                line, f"expected {self.MIN_FIELDS} fields, found {len(fields)}"
            )

        timestamp, severity, source, message = (
            self._strip_single_quotes(value) for value in fields[:self.MIN_FIELDS]
        )

        return ParseResult(record=LogRecord(
            timestamp=timestamp,
            severity=severity,
            source=source,
            event_type=self.FALLBACK_EVENT_TYPE,
            message=message,
        ))
