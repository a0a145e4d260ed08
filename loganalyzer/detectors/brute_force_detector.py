"""
Brute Force Attack Detector

Detects repeated authentication failures coming from the same
source and event type (for example one host's sshd).

MITRE ATT&CK References:
- T1110.001: Brute Force - Password Guessing
"""

from collections import Counter
from typing import List, Optional, Sequence

from .base_detector import BaseDetector, ThreatIndicator, ThreatLevel, DetectorConfig
from ..parsers.base_parser import LogRecord


class BruteForceDetector(BaseDetector):
    """
    Detects brute force login attempts.

    Failed authentication messages are counted per ``source:event_type``
    key. A key reaching ``failed_attempts_threshold`` produces a HIGH
    indicator, one reaching ``critical_threshold`` a CRITICAL one. Both
    thresholds are inclusive.
    """

    THREAT_TYPE = "Brute Force Attack"

    DEFAULT_CONFIG = {
        'failed_attempts_threshold': 3,
        'critical_threshold': 10,
    }

    FAILURE_KEYWORD = 'failed'
    AUTH_KEYWORDS = ('login', 'password', 'authentication')

    def __init__(self, config: Optional[DetectorConfig] = None):
        super().__init__(
            name="brute_force",
            description="Detects repeated failed authentication attempts",
            config=config,
        )
        self._failed_attempts: Counter = Counter()

    def reset(self):
        """Reset detector state."""
        super().reset()
        self._failed_attempts.clear()

    @classmethod
    def is_failed_auth(cls, record: LogRecord) -> bool:
        """Check if a record describes a failed authentication."""
        message = record.message.lower()
        return (cls.FAILURE_KEYWORD in message and
                any(keyword in message for keyword in cls.AUTH_KEYWORDS))

    @staticmethod
    def attempt_key(record: LogRecord) -> str:
        return f"{record.source}:{record.event_type}"

    def analyze(self, records: Sequence[LogRecord]) -> List[ThreatIndicator]:
        self.reset()

        for record in records:
            self.entries_analyzed += 1
            if self.is_failed_auth(record):
                self._failed_attempts[self.attempt_key(record)] += 1

        threshold = self.config.get('failed_attempts_threshold', 3)
        critical = self.config.get('critical_threshold', 10)

        indicators = []
        for key in sorted(self._failed_attempts):
            count = self._failed_attempts[key]
            if count < threshold:
                continue
            indicators.append(ThreatIndicator(
                threat_type=self.THREAT_TYPE,
                level=ThreatLevel.CRITICAL if count >= critical else ThreatLevel.HIGH,
                description=f"Detected {count} failed login attempts from {key}",
                related_keys=(key,),
            ))

        self.indicators = indicators
        return indicators
