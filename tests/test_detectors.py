"""
Unit tests for threat detectors.
"""

import unittest
import sys
from pathlib import Path

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from loganalyzer.parsers.base_parser import LogRecord
from loganalyzer.parsers.csv_parser import CSVLineParser
from loganalyzer.detectors.base_detector import DetectorConfig, ThreatLevel
from loganalyzer.detectors.brute_force_detector import BruteForceDetector
from loganalyzer.detectors.privilege_detector import PrivilegeEscalationDetector


def make_record(message, source="host", event_type="sshd[1]", timestamp="Jan 1 00:00:01"):
    return LogRecord(
        timestamp=timestamp,
        severity="ERROR",
        source=source,
        event_type=event_type,
        message=message,
    )


class TestBruteForceDetector(unittest.TestCase):
    """Tests for brute force detector."""

    def setUp(self):
        self.detector = BruteForceDetector()

    def failed_logins(self, count, source="host"):
        return [make_record("Failed password for user", source=source) for _ in range(count)]

    def test_two_attempts_below_threshold(self):
        self.assertEqual(self.detector.analyze(self.failed_logins(2)), [])

    def test_three_attempts_high(self):
        indicators = self.detector.analyze(self.failed_logins(3))

        self.assertEqual(len(indicators), 1)
        indicator = indicators[0]
        self.assertEqual(indicator.threat_type, "Brute Force Attack")
        self.assertEqual(indicator.level, ThreatLevel.HIGH)
        self.assertIn("3", indicator.description)
        self.assertIn("host:sshd[1]", indicator.description)
        self.assertEqual(indicator.related_keys, ("host:sshd[1]",))

    def test_nine_attempts_still_high(self):
        indicators = self.detector.analyze(self.failed_logins(9))
        self.assertEqual(indicators[0].level, ThreatLevel.HIGH)

    def test_ten_attempts_critical(self):
        indicators = self.detector.analyze(self.failed_logins(10))

        self.assertEqual(len(indicators), 1)
        self.assertEqual(indicators[0].level, ThreatLevel.CRITICAL)
        self.assertEqual(
            indicators[0].description,
            "Detected 10 failed login attempts from host:sshd[1]"
        )

    def test_keys_counted_separately(self):
        records = self.failed_logins(2, source="web01") + self.failed_logins(2, source="web02")
        self.assertEqual(self.detector.analyze(records), [])

    def test_keys_reported_in_sorted_order(self):
        records = self.failed_logins(3, source="zulu") + self.failed_logins(4, source="alpha")
        indicators = self.detector.analyze(records)

        self.assertEqual(
            [i.related_keys[0] for i in indicators],
            ["alpha:sshd[1]", "zulu:sshd[1]"]
        )

    def test_case_insensitive_keywords(self):
        records = [make_record("AUTHENTICATION FAILED for bob") for _ in range(3)]
        self.assertEqual(len(self.detector.analyze(records)), 1)

    def test_failure_without_auth_keyword(self):
        records = [make_record("Failed to start nginx.service") for _ in range(5)]
        self.assertEqual(self.detector.analyze(records), [])

    def test_custom_threshold(self):
        detector = BruteForceDetector(DetectorConfig(failed_attempts_threshold=5, critical_threshold=6))

        self.assertEqual(detector.analyze(self.failed_logins(4)), [])
        self.assertEqual(detector.analyze(self.failed_logins(6))[0].level, ThreatLevel.CRITICAL)

    def test_stats(self):
        self.detector.analyze(self.failed_logins(3))
        stats = self.detector.get_stats()

        self.assertEqual(stats['entries_analyzed'], 3)
        self.assertEqual(stats['total_indicators'], 1)
        self.assertEqual(stats['indicators_by_level'], {'HIGH': 1})


class TestPrivilegeEscalationDetector(unittest.TestCase):
    """Tests for privilege escalation detector."""

    def setUp(self):
        self.detector = PrivilegeEscalationDetector()

    def test_detect_escalation(self):
        record = make_record("user bob gained root shell via exploit", timestamp="t42")
        indicators = self.detector.analyze([record])

        self.assertEqual(len(indicators), 1)
        self.assertEqual(indicators[0].threat_type, "Privilege Escalation Attempt")
        self.assertEqual(indicators[0].level, ThreatLevel.CRITICAL)
        self.assertEqual(indicators[0].description, record.message)
        self.assertEqual(indicators[0].related_keys, ("t42",))

    def test_action_keyword_alone(self):
        self.assertEqual(self.detector.analyze([make_record("unauthorized access to /data")]), [])

    def test_privilege_keyword_alone(self):
        self.assertEqual(self.detector.analyze([make_record("sudo session opened for alice")]), [])

    def test_one_indicator_per_record(self):
        records = [make_record("Elevated privilege ESCALATION detected") for _ in range(3)]
        self.assertEqual(len(self.detector.analyze(records)), 3)

    def test_description_truncated(self):
        message = "sudo escalation " + "x" * 200
        indicators = self.detector.analyze([make_record(message)])

        self.assertEqual(len(indicators[0].description), 100)
        self.assertEqual(indicators[0].description, message[:100])

    def test_delimited_line_scenario(self):
        line = '2024-01-01,ERROR,firewall,"Unauthorized admin privilege escalation attempt"'
        record = CSVLineParser().parse_line(line).record

        self.assertEqual(record.severity, "ERROR")
        self.assertEqual(BruteForceDetector().analyze([record]), [])

        indicators = self.detector.analyze([record])
        self.assertEqual(len(indicators), 1)
        self.assertEqual(indicators[0].level, ThreatLevel.CRITICAL)
        self.assertEqual(indicators[0].related_keys, ("2024-01-01",))


if __name__ == '__main__':
    unittest.main()
