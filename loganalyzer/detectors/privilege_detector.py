"""
Privilege Escalation Detector

Flags individual messages that mention an elevated-privilege context
together with an escalation or unauthorized-gain action.

MITRE ATT&CK References:
- T1068: Exploitation for Privilege Escalation
- T1548.003: Abuse Elevation Control Mechanism - Sudo and Sudo Caching
"""

from typing import List, Optional, Sequence

from .base_detector import BaseDetector, ThreatIndicator, ThreatLevel, DetectorConfig
from ..parsers.base_parser import LogRecord


class PrivilegeEscalationDetector(BaseDetector):
    """
    Detects privilege escalation attempts.

    Each record is judged on its own. A message needs at least one
    privilege-context keyword and at least one action keyword.
    """

    THREAT_TYPE = "Privilege Escalation Attempt"

    DEFAULT_CONFIG = {
        'description_length': 100,
    }

    PRIVILEGE_KEYWORDS = ('sudo', 'root', 'admin', 'privilege', 'elevated')
    ACTION_KEYWORDS = ('escalat', 'gain', 'unauthorized')

    def __init__(self, config: Optional[DetectorConfig] = None):
        super().__init__(
            name="privilege_escalation",
            description="Detects attempts to gain elevated privileges",
            config=config,
        )

    @classmethod
    def is_escalation(cls, record: LogRecord) -> bool:
        """Check if a message pairs a privilege context with an escalation action."""
        message = record.message.lower()
        has_privilege = any(keyword in message for keyword in cls.PRIVILEGE_KEYWORDS)
        has_action = any(keyword in message for keyword in cls.ACTION_KEYWORDS)
        return has_privilege and has_action

    def analyze_record(self, record: LogRecord) -> Optional[ThreatIndicator]:
        """Analyze a single record."""
        if not self.is_escalation(record):
            return None

        length = self.config.get('description_length', 100)
        return ThreatIndicator(
            threat_type=self.THREAT_TYPE,
            level=ThreatLevel.CRITICAL,
            description=record.message[:length],
            related_keys=(record.timestamp,),
        )

    def analyze(self, records: Sequence[LogRecord]) -> List[ThreatIndicator]:
        self.reset()

        indicators = []
        for record in records:
            self.entries_analyzed += 1
            indicator = self.analyze_record(record)
            if indicator:
                indicators.append(indicator)

        self.indicators = indicators
        return indicators
