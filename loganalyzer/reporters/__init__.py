"""
Report Generation Module

Provides report formats for security analysis results:
- Text reports for terminal display
- JSON export for integration
"""

from .base_reporter import BaseReporter, NO_THREATS_MESSAGE
from .text_reporter import TextReporter
from .json_reporter import JSONReporter

__all__ = [
    'BaseReporter',
    'NO_THREATS_MESSAGE',
    'TextReporter',
    'JSONReporter',
]
