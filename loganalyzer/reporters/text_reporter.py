"""
Text Report Generator

Generates the plain-text threat report printed to the terminal or
written to a file.
"""

from typing import List, Optional, Sequence

from .base_reporter import BaseReporter, NO_THREATS_MESSAGE
from ..detectors.base_detector import ThreatIndicator, ThreatLevel
from ..narrative.ollama_client import NarrativeResult
from ..parsers.base_parser import LogRecord


class TextReporter(BaseReporter):
    """
    Generates text reports.

    Sections:
    - Header and total count
    - Severity breakdown (CRITICAL to LOW, zero counts omitted)
    - Detailed findings in detection order
    - AI-powered analysis (narrative or the reason it is unavailable)
    """

    BREAKDOWN_LEVELS = (ThreatLevel.CRITICAL, ThreatLevel.HIGH, ThreatLevel.MEDIUM, ThreatLevel.LOW)

    def build(
        self,
        records: Sequence[LogRecord],
        indicators: Sequence[ThreatIndicator],
        narrative: Optional[NarrativeResult] = None,
        narrative_location: str = "",
    ) -> str:
        if not indicators:
            return NO_THREATS_MESSAGE

        lines = []
        lines.append(f"=== {self.title} ===")
        lines.append("")
        lines.extend(self._generate_summary(indicators))
        lines.append("")
        lines.extend(self._generate_findings(indicators))
        lines.append("")
        lines.append("")
        lines.extend(self._generate_narrative(narrative, narrative_location))

        return '\n'.join(lines) + '\n'

    def _generate_summary(self, indicators: Sequence[ThreatIndicator]) -> List[str]:
        """Generate total and severity breakdown."""
        severity = self._get_severity_summary(indicators)

        lines = [
            "PATTERN DETECTION RESULTS:",
            f"Total Threats Detected: {len(indicators)}",
            "",
            "Severity Breakdown:",
        ]
        for level in self.BREAKDOWN_LEVELS:
            count = severity[level.name]
            if count:
                lines.append(f"  {level.name}: {count}")
        return lines

    def _generate_findings(self, indicators: Sequence[ThreatIndicator]) -> List[str]:
        """Generate one block per indicator."""
        lines = ["Detailed Findings:"]
        for index, indicator in enumerate(indicators, 1):
            lines.append("")
            lines.append(self._format_indicator(index, indicator))
        return lines

    def _format_indicator(self, index: int, indicator: ThreatIndicator) -> str:
        """Format a single indicator for display."""
        lines = [
            f"[{index}] {indicator.threat_type} - {indicator.level.name}",
            f"    Description: {indicator.description}",
        ]
        if indicator.related_keys:
            lines.append(f"    Related Log Entries: {len(indicator.related_keys)}")
        return '\n'.join(lines)

    def _generate_narrative(self, narrative: Optional[NarrativeResult], location: str) -> List[str]:
        lines = ["=== AI-POWERED ANALYSIS ===", ""]

        if narrative is None:
            lines.append("AI analysis unavailable: narrative analysis disabled")
        elif narrative.success:
            lines.append(narrative.content)
        else:
            lines.append(f"AI analysis unavailable: {narrative.error}")
            if location:
                lines.append(f"Note: Ensure OLLAMA is running ({location})")

        return lines
