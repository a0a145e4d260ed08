"""
Base Detector Module

Provides the abstract base class for all threat detectors and the
standardized ThreatIndicator dataclass for consistent threat reporting.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import List, Dict, Any, Optional, Sequence, Tuple
from enum import Enum

from ..parsers.base_parser import LogRecord


class ThreatLevel(Enum):
    """
    Threat severity levels following industry standards.

    - CRITICAL: Immediate action required, active exploitation
    - HIGH: Significant risk, requires prompt attention
    - MEDIUM: Moderate risk, should be addressed in near term
    - LOW: Minor risk, address during normal operations
    - INFO: Informational, no immediate action needed
    """
    CRITICAL = 5
    HIGH = 4
    MEDIUM = 3
    LOW = 2
    INFO = 1

    def __str__(self):
        return self.name


@dataclass(frozen=True)
class ThreatIndicator:
    """
    A single finding produced by one detector pass.

    Attributes:
        threat_type: Category label assigned by the detector
        level: Severity of the finding
        description: Human-readable description of the finding
        related_keys: Identifiers (a source:event key or a timestamp)
            pointing back at the records that triggered the finding
    """
    threat_type: str
    level: ThreatLevel
    description: str
    related_keys: Tuple[str, ...] = field(default_factory=tuple)

    def to_dict(self) -> Dict[str, Any]:
        """Convert indicator to dictionary for serialization."""
        return {
            'threat_type': self.threat_type,
            'level': self.level.name,
            'level_value': self.level.value,
            'description': self.description,
            'related_keys': list(self.related_keys),
        }


class DetectorConfig:
    """
    Configuration container for detector parameters.

    Allows customization of detection thresholds without modifying
    detector code.
    """

    def __init__(self, **kwargs):
        for key, value in kwargs.items():
            setattr(self, key, value)

    def get(self, key: str, default: Any = None) -> Any:
        """Get configuration value with default."""
        return getattr(self, key, default)

    def to_dict(self) -> Dict[str, Any]:
        """Convert configuration to dictionary."""
        return {k: v for k, v in self.__dict__.items() if not k.startswith('_')}


class BaseDetector(ABC):
    """
    Abstract base class for threat detectors.

    A detector is one independent pass over the complete record sequence.
    New detectors are added by subclassing and registering them with the
    DetectionEngine; existing passes are never modified.
    """

    DEFAULT_CONFIG: Dict[str, Any] = {}

    def __init__(self, name: str, description: str, config: Optional[DetectorConfig] = None):
        """
        Initialize the detector.

        Args:
            name: Unique identifier for the detector
            description: Human-readable description of what the detector finds
            config: Optional configuration overrides
        """
        self.name = name
        self.description = description
        self.enabled = True
        self.config = config or DetectorConfig(**self.DEFAULT_CONFIG)
        self.indicators: List[ThreatIndicator] = []
        self.entries_analyzed = 0

    @abstractmethod
    def analyze(self, records: Sequence[LogRecord]) -> List[ThreatIndicator]:
        """
        Analyze log records for threats.

        Args:
            records: Normalized records in ingestion order

        Returns:
            List of ThreatIndicator objects for detected threats
        """
        pass

    def reset(self):
        """Reset detector state for new analysis."""
        self.indicators = []
        self.entries_analyzed = 0

    def get_stats(self) -> Dict[str, Any]:
        """
        Get detection statistics.

        Returns:
            Dictionary containing detection metrics
        """
        level_counts: Dict[str, int] = {}
        for indicator in self.indicators:
            level_name = indicator.level.name
            level_counts[level_name] = level_counts.get(level_name, 0) + 1

        return {
            'detector_name': self.name,
            'description': self.description,
            'enabled': self.enabled,
            'entries_analyzed': self.entries_analyzed,
            'total_indicators': len(self.indicators),
            'indicators_by_level': level_counts,
        }
