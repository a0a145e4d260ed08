"""
Log Ingestion

Reads a log file once, detects its format from the first non-empty line
and streams every remaining line through the normalizer into an EntryStore.
"""

import logging
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Optional, Union

from .exceptions import LogInputError
from .parsers.base_parser import LogFormat
from .parsers.format_detector import detect_file_format
from .parsers.normalizer import LineNormalizer, sanitize_line
from .store import EntryStore

logger = logging.getLogger(__name__)


class RecordSource(ABC):
    """Anything that can produce a record store from a path."""

    @abstractmethod
    def load(self, file_path: Union[str, Path]) -> EntryStore:
        """
        Load records from a log file.

        Raises:
            LogInputError: If the file is missing or unreadable
        """
        pass


class LogIngestor(RecordSource):
    """
    Default record source for on-disk log files.

    Args:
        normalizer: Optional LineNormalizer with custom parsers
    """

    def __init__(self, normalizer: Optional[LineNormalizer] = None):
        self.normalizer = normalizer or LineNormalizer()
        self.lines_processed = 0

    def _check_path(self, file_path: Path) -> None:
        if not file_path.exists():
            raise LogInputError(file_path, "Log file not found")
        if not file_path.is_file():
            raise LogInputError(file_path, "Not a regular file")

    def load(self, file_path: Union[str, Path]) -> EntryStore:
        file_path = Path(file_path)
        self._check_path(file_path)
        self.lines_processed = 0

        log_format = detect_file_format(file_path)
        if log_format is LogFormat.UNKNOWN:
            logger.warning("Unknown log format in %s, attempting syslog parsing", file_path)
        logger.debug(
            "Parsing %s with the %s parser",
            file_path, self.normalizer.parser_for(log_format).log_type
        )

        store = EntryStore(log_format)

        try:
            with open(file_path, 'r', encoding='utf-8-sig', errors='replace') as f:
                for line_num, raw_line in enumerate(f, 1):
                    self.lines_processed += 1
                    line = sanitize_line(raw_line)
                    if not line:
                        continue

                    result = self.normalizer.normalize(log_format, line)
                    if result.fallback:
                        logger.warning(
                            "Failed to parse line %d of %s: %s",
                            line_num, file_path, result.reason
                        )
                    store.append(result.record, fallback=result.fallback)
        except OSError as e:
            raise LogInputError(file_path, f"Unable to read log file ({e.strerror or e})") from e

        logger.info("Loaded %d log entries from %s", len(store), file_path)
        return store.freeze()
