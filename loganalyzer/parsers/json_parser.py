"""
JSON Lines Parser

Parses structured logs written as one flat JSON object per line.

Only the ``timestamp`` and ``message`` fields are recognized. Nested
objects are not traversed; a field holding an object, an array, a boolean
or null is treated as missing.

Example:
    {"timestamp": "2024-01-15T10:23:45Z", "message": "Failed login for admin"}
"""

import json
from typing import Any, Dict, Optional

from .base_parser import BaseParser, LogRecord, LogSeverity, ParseResult, NOT_AVAILABLE


class JSONLineParser(BaseParser):
    """Parser for JSON-lines (structured record) logs."""

    FALLBACK_SOURCE = "json"
    FALLBACK_EVENT_TYPE = "structured_event"

    QUOTE_CHARS = '"\''

    def __init__(self):
        """Initialize JSON lines parser."""
        super().__init__("json")

    def _scalar_field(self, document: Dict[str, Any], name: str) -> Optional[str]:
        """Return a flat scalar field as trimmed text, or None if unusable."""
        value = document.get(name)
        if isinstance(value, bool) or value is None:
            return None
        if isinstance(value, (int, float)):
            return str(value)
        if isinstance(value, str):
            return value.strip().strip(self.QUOTE_CHARS).strip()
        return None

    def parse_line(self, line: str) -> ParseResult:
        try:
            document = json.loads(line)
        except ValueError as e:
            return self._fallback(line, f"invalid JSON: {e}")
        except RecursionError:
            return self._fallback(line, "JSON nesting too deep")

        if not isinstance(document, dict):
            return self._fallback(line, "JSON value is not an object")

        timestamp = self._scalar_field(document, 'timestamp')
        message = self._scalar_field(document, 'message')

        return ParseResult(record=LogRecord(
            timestamp=timestamp if timestamp is not None else NOT_AVAILABLE,
            severity=LogSeverity.INFO.value,
            source=self.FALLBACK_SOURCE,
            event_type=self.FALLBACK_EVENT_TYPE,
            message=message if message is not None else line,
        ))
