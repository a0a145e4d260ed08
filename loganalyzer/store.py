"""
Entry Store

Ordered, append-only container for the records of one ingestion run.
"""

from typing import Iterator, List, Optional, Tuple, Dict, Any

from .exceptions import StoreFrozenError
from .parsers.base_parser import LogFormat, LogRecord


class EntryStore:
    """
    Holds normalized records in ingestion order.

    Records with an empty message are refused. Once ``freeze`` has been
    called the store is read-only.
    """

    def __init__(self, log_format: LogFormat = LogFormat.UNKNOWN):
        self.log_format = log_format
        self._records: List[LogRecord] = []
        self._frozen = False
        self.fallback_count = 0
        self.dropped_count = 0

    def append(self, record: LogRecord, fallback: bool = False) -> bool:
        """
        Append a record.

        Args:
            record: Normalized record
            fallback: Whether the record came from a fallback parse

        Returns:
            True if stored, False if dropped for an empty message
        """
        if self._frozen:
            raise StoreFrozenError("entry store is read-only after ingestion")

        if not record.message:
            self.dropped_count += 1
            return False

        self._records.append(record)
        if fallback:
            self.fallback_count += 1
        return True

    def freeze(self) -> 'EntryStore':
        """Mark ingestion as finished."""
        self._frozen = True
        return self

    @property
    def frozen(self) -> bool:
        return self._frozen

    @property
    def records(self) -> Tuple[LogRecord, ...]:
        """Snapshot of all stored records."""
        return tuple(self._records)

    def head(self, limit: Optional[int]) -> Tuple[LogRecord, ...]:
        """Return the first ``limit`` records (all of them for None)."""
        if limit is None:
            return self.records
        return tuple(self._records[:limit])

    def get_stats(self) -> Dict[str, Any]:
        """Get ingestion statistics."""
        return {
            'log_format': str(self.log_format),
            'total_entries': len(self._records),
            'fallback_entries': self.fallback_count,
            'dropped_entries': self.dropped_count,
        }

    def __len__(self) -> int:
        return len(self._records)

    def __iter__(self) -> Iterator[LogRecord]:
        return iter(self._records)

    def __getitem__(self, index):
        return self._records[index]

    def __bool__(self) -> bool:
        return bool(self._records)
