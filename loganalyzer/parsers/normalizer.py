"""
Line Normalization

Sanitizes raw lines and routes them to the parser for the detected format.
"""

import re
from typing import Dict, Optional

from .base_parser import BaseParser, LogFormat, ParseResult
from .syslog_parser import SyslogParser
from .json_parser import JSONLineParser
from .csv_parser import CSVLineParser


# ASCII control characters except tab (0x09) and newline (0x0A), plus DEL
CONTROL_CHARS = re.compile(r'[\x00-\x08\x0b-\x1f\x7f]')


def sanitize_line(line: str) -> str:
    """
    Prepare a raw line for parsing.

    Strips surrounding whitespace and removes control characters that could
    smuggle terminal escape sequences or null bytes into the report.
    """
    return CONTROL_CHARS.sub('', line.strip()).strip()


class LineNormalizer:
    """
    Converts sanitized lines into LogRecords.

    Holds one parser per format. Lines of an UNKNOWN file are handled by
    the free-text parser.
    """

    def __init__(self, parsers: Optional[Dict[LogFormat, BaseParser]] = None):
        self.parsers: Dict[LogFormat, BaseParser] = parsers or {
            LogFormat.FREE_TEXT: SyslogParser(),
            LogFormat.STRUCTURED: JSONLineParser(),
            LogFormat.DELIMITED: CSVLineParser(),
        }
        self._default = self.parsers[LogFormat.FREE_TEXT]

    def parser_for(self, log_format: LogFormat) -> BaseParser:
        """Return the parser registered for a format."""
        return self.parsers.get(log_format, self._default)

    def normalize(self, log_format: LogFormat, line: str) -> ParseResult:
        """
        Normalize one line.

        Args:
            log_format: Format detected for the file
            line: Sanitized, non-empty line

        Returns:
            ParseResult with the parsed record, or a fallback record
        """
        return self.parser_for(log_format).parse_line(line)
