"""
Format Detection

Classifies a log file by looking at its first non-empty line. Detection
happens once per file; later lines are never re-examined.
"""

import logging
from pathlib import Path
from typing import Optional, Union

from .base_parser import LogFormat
from .normalizer import sanitize_line

logger = logging.getLogger(__name__)


def detect_format(sample: Optional[str]) -> LogFormat:
    """
    Classify a sampled line.

    Args:
        sample: First non-empty line of the input, or None if unavailable

    Returns:
        The detected LogFormat
    """
    if sample is None or not sample.strip():
        return LogFormat.UNKNOWN

    sample = sample.lstrip()
    if sample[0] in '{[':
        return LogFormat.STRUCTURED
    if ',' in sample:
        return LogFormat.DELIMITED
    return LogFormat.FREE_TEXT


def sample_first_line(file_path: Union[str, Path]) -> Optional[str]:
    """
    Return the first non-empty sanitized line of a file.

    Raises:
        OSError: If the file cannot be read
    """
    with open(file_path, 'r', encoding='utf-8-sig', errors='replace') as f:
        for line in f:
            line = sanitize_line(line)
            if line:
                return line
    return None


def detect_file_format(file_path: Union[str, Path]) -> LogFormat:
    """Detect the format of a log file, UNKNOWN if it cannot be sampled."""
    try:
        sample = sample_first_line(file_path)
    except OSError as e:
        logger.warning("Unable to sample %s: %s", file_path, e)
        return LogFormat.UNKNOWN

    log_format = detect_format(sample)
    logger.debug("Detected format %s for %s", log_format, file_path)
    return log_format
