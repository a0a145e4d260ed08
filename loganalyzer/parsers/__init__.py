"""
Log Parsers Module

Provides format detection and line parsers for:
- Free-text syslog lines
- JSON lines (one flat object per line)
- Comma-delimited logs
"""

from .base_parser import BaseParser, LogFormat, LogRecord, LogSeverity, ParseResult
from .syslog_parser import SyslogParser
from .json_parser import JSONLineParser
from .csv_parser import CSVLineParser
from .normalizer import LineNormalizer, sanitize_line
from .format_detector import detect_format, detect_file_format, sample_first_line

__all__ = [
    'BaseParser',
    'LogFormat',
    'LogRecord',
    'LogSeverity',
    'ParseResult',
    'SyslogParser',
    'JSONLineParser',
    'CSVLineParser',
    'LineNormalizer',
    'sanitize_line',
    'detect_format',
    'detect_file_format',
    'sample_first_line',
]
