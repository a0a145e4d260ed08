"""
Detection Engine

Orchestrates ingestion, the registered threat detectors and report
generation for one analysis run.
"""

import json
import logging
from collections import OrderedDict
from pathlib import Path
from typing import List, Dict, Any, Optional, Sequence, Union

from .base_detector import BaseDetector, ThreatIndicator, ThreatLevel
from .brute_force_detector import BruteForceDetector
from .privilege_detector import PrivilegeEscalationDetector
from ..exceptions import LogInputError
from ..ingest import LogIngestor, RecordSource
from ..narrative.ollama_client import NarrativeClient, NarrativeResult
from ..parsers.base_parser import LogRecord
from ..reporters.base_reporter import BaseReporter
from ..reporters.text_reporter import TextReporter
from ..store import EntryStore

logger = logging.getLogger(__name__)


class DetectionEngine:
    """
    Central detection engine that coordinates all analysis.

    Collaborators are injected so the engine can be exercised with fakes:
    ``record_source`` produces records from a path and ``narrative_client``
    produces narrative text from a prompt (None disables it).
    """

    def __init__(
        self,
        record_source: Optional[RecordSource] = None,
        narrative_client: Optional[NarrativeClient] = None,
        enable_all: bool = True,
    ):
        """
        Initialize detection engine.

        Args:
            record_source: Loader for log files (defaults to LogIngestor)
            narrative_client: Optional narrative collaborator
            enable_all: Register the built-in detectors
        """
        self.record_source = record_source or LogIngestor()
        self.narrative_client = narrative_client
        self.detectors: Dict[str, BaseDetector] = OrderedDict()

        if enable_all:
            self._register_default_detectors()

        # Analysis state
        self.store: Optional[EntryStore] = None
        self.threats: List[ThreatIndicator] = []
        self._narrative: Optional[NarrativeResult] = None

    def _register_default_detectors(self):
        """Register built-in threat detectors, brute force first."""
        self.register_detector('brute_force', BruteForceDetector())
        self.register_detector('privilege_escalation', PrivilegeEscalationDetector())

    def register_detector(self, name: str, detector: BaseDetector):
        """Register a detector; it runs after those already registered."""
        self.detectors[name] = detector

    def enable_detector(self, name: str, enabled: bool = True):
        """Enable or disable a specific detector."""
        if name in self.detectors:
            self.detectors[name].enabled = enabled

    @property
    def records(self) -> Sequence[LogRecord]:
        return self.store.records if self.store is not None else ()

    def analyze(self, records: Sequence[LogRecord]) -> List[ThreatIndicator]:
        """
        Run all enabled detectors over the records.

        Output of each pass is appended in registration order; nothing is
        merged or deduplicated across detectors.
        """
        indicators: List[ThreatIndicator] = []

        for name, detector in self.detectors.items():
            if not detector.enabled:
                continue
            try:
                indicators.extend(detector.analyze(records))
            except Exception:
                logger.exception("Detector %s failed", name)

        return indicators

    def analyze_file(self, file_path: Union[str, Path]) -> bool:
        """
        Load a log file and run detection on it.

        Returns:
            True on success, False if the file could not be read or
            produced no records
        """
        logger.info("Starting threat analysis...")
        self.store = None
        self.threats = []
        self._narrative = None

        try:
            store = self.record_source.load(file_path)
        except LogInputError as e:
            logger.error("Failed to load log file: %s", e)
            return False

        self.store = store
        if not store:
            logger.warning("No log entries found in %s", file_path)
            return False

        logger.info("Analyzing %d log entries", len(store))
        self.threats = self.analyze(store.records)
        logger.info("Pattern detection found %d potential threats", len(self.threats))
        return True

    def _request_narrative(self, reporter: BaseReporter) -> Optional[NarrativeResult]:
        """Ask the collaborator for a narrative once per run."""
        if self.narrative_client is None:
            return None
        if self._narrative is None:
            prompt = reporter.build_prompt(
                self.store.head(reporter.prompt_limit), total=len(self.store)
            )
            self._narrative = self.narrative_client.analyze_security_logs(prompt)
        return self._narrative

    def generate_report(self, reporter: Optional[BaseReporter] = None) -> str:
        """
        Render the report for the current run.

        The narrative collaborator is only consulted when at least one
        threat was detected.
        """
        reporter = reporter or TextReporter()

        narrative = self._request_narrative(reporter) if self.threats else None
        location = self.narrative_client.location if self.narrative_client else ""

        return reporter.build(self.records, self.threats, narrative, location)

    def export_report(self, output_path: Union[str, Path], reporter: Optional[BaseReporter] = None) -> bool:
        """Write the report to ``output_path`` as UTF-8."""
        output_path = Path(output_path)
        report = self.generate_report(reporter)

        try:
            output_path.parent.mkdir(parents=True, exist_ok=True)
            output_path.write_text(report, encoding='utf-8')
        except OSError as e:
            logger.error("Failed to write report to %s: %s", output_path, e)
            return False

        logger.info("Report exported to: %s", output_path)
        return True

    def export_indicators(self) -> str:
        """Export the detected indicators as JSON."""
        return json.dumps([indicator.to_dict() for indicator in self.threats], indent=2)

    @property
    def stats(self) -> Dict[str, Any]:
        """Summary statistics for the current run."""
        stats: Dict[str, Any] = self.store.get_stats() if self.store is not None else {
            'log_format': 'unknown',
            'total_entries': 0,
            'fallback_entries': 0,
            'dropped_entries': 0,
        }

        by_level = {level.name: 0 for level in ThreatLevel}
        for indicator in self.threats:
            by_level[indicator.level.name] += 1

        stats['total_threats'] = len(self.threats)
        stats['threats_by_level'] = by_level
        stats['detector_stats'] = {
            name: detector.get_stats() for name, detector in self.detectors.items()
        }
        return stats
