"""
Base Reporter Module

Provides abstract base class for report generators.
"""

from abc import ABC, abstractmethod
from typing import Dict, Optional, Sequence

from ..detectors.base_detector import ThreatIndicator, ThreatLevel
from ..narrative.ollama_client import NarrativeResult
from ..parsers.base_parser import LogRecord


NO_THREATS_MESSAGE = "No significant threats detected in the analyzed logs."


class BaseReporter(ABC):
    """
    Abstract base class for report generators.

    Reports are a pure function of their inputs: the same records,
    indicators and narrative always render to the same output.
    """

    # Number of records included in the narrative prompt
    PROMPT_LIMIT = 20

    def __init__(self, title: str = "THREAT ANALYSIS REPORT", prompt_limit: int = PROMPT_LIMIT):
        """
        Initialize reporter.

        Args:
            title: Report title
            prompt_limit: Maximum number of records rendered into the prompt
        """
        self.title = title
        self.prompt_limit = prompt_limit

    @abstractmethod
    def build(
        self,
        records: Sequence[LogRecord],
        indicators: Sequence[ThreatIndicator],
        narrative: Optional[NarrativeResult] = None,
        narrative_location: str = "",
    ) -> str:
        """
        Build the report.

        Args:
            records: Normalized records of the run
            indicators: Indicators in detection order
            narrative: Narrative collaborator result, None when not requested
            narrative_location: Where the narrative service was expected

        Returns:
            Report content as string
        """
        pass

    def build_prompt(self, records: Sequence[LogRecord], total: Optional[int] = None) -> str:
        """
        Render the leading records as the narrative prompt's log summary.

        Args:
            records: Records of the run, or only its leading slice
            total: Number of records in the run when ``records`` is a slice
        """
        if total is None:
            total = len(records)

        lines = [
            f"[{record.timestamp}] {record.severity} - {record.source} - {record.message}"
            for record in records[:self.prompt_limit]
        ]

        if total > self.prompt_limit:
            lines.append("")
            lines.append(f"... and {total - self.prompt_limit} more entries")

        return '\n'.join(lines) + '\n'

    def _get_severity_summary(self, indicators: Sequence[ThreatIndicator]) -> Dict[str, int]:
        """Get count of indicators by severity level."""
        summary = {level.name: 0 for level in ThreatLevel}
        for indicator in indicators:
            summary[indicator.level.name] += 1
        return summary

    def _get_type_summary(self, indicators: Sequence[ThreatIndicator]) -> Dict[str, int]:
        """Get count of indicators by threat type."""
        summary: Dict[str, int] = {}
        for indicator in indicators:
            summary[indicator.threat_type] = summary.get(indicator.threat_type, 0) + 1
        return summary
