"""
JSON Report Generator

Exports the analysis results as a JSON document for integration with
other tooling.
"""

import json
from typing import Optional, Sequence

from .base_reporter import BaseReporter, NO_THREATS_MESSAGE
from ..detectors.base_detector import ThreatIndicator
from ..narrative.ollama_client import NarrativeResult
from ..parsers.base_parser import LogRecord


class JSONReporter(BaseReporter):
    """Generates JSON reports with sorted keys for stable output."""

    def __init__(self, indent: int = 2, **kwargs):
        super().__init__(**kwargs)
        self.indent = indent

    def build(
        self,
        records: Sequence[LogRecord],
        indicators: Sequence[ThreatIndicator],
        narrative: Optional[NarrativeResult] = None,
        narrative_location: str = "",
    ) -> str:
        document = {
            'title': self.title,
            'total_entries': len(records),
            'total_threats': len(indicators),
            'severity_breakdown': {
                level: count
                for level, count in self._get_severity_summary(indicators).items()
                if count
            },
            'threat_types': self._get_type_summary(indicators),
            'threats': [indicator.to_dict() for indicator in indicators],
        }

        if not indicators:
            document['summary'] = NO_THREATS_MESSAGE
        elif narrative is not None:
            document['ai_analysis'] = {
                'success': narrative.success,
                'content': narrative.content,
                'error': narrative.error,
            }

        return json.dumps(document, indent=self.indent, sort_keys=True)
