"""
Threat Detectors Module

Provides heuristic detectors for security-relevant patterns:
- Brute force login attempts
- Privilege escalation attempts

The DetectionEngine lives in ``detection_engine`` and is imported from
there directly.
"""

from .base_detector import BaseDetector, DetectorConfig, ThreatLevel, ThreatIndicator
from .brute_force_detector import BruteForceDetector
from .privilege_detector import PrivilegeEscalationDetector

__all__ = [
    'BaseDetector',
    'DetectorConfig',
    'ThreatLevel',
    'ThreatIndicator',
    'BruteForceDetector',
    'PrivilegeEscalationDetector',
]
