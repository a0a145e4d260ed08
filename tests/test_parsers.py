"""
Unit tests for format detection and line parsers.
"""

import csv
import unittest
import sys
from pathlib import Path

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from loganalyzer.parsers.base_parser import LogFormat, LogRecord
from loganalyzer.parsers.format_detector import detect_format
from loganalyzer.parsers.normalizer import LineNormalizer, sanitize_line
from loganalyzer.parsers.syslog_parser import SyslogParser
from loganalyzer.parsers.json_parser import JSONLineParser
from loganalyzer.parsers.csv_parser import CSVLineParser


class TestFormatDetection(unittest.TestCase):
    """Tests for first-line format detection."""

    def test_structured_object(self):
        self.assertEqual(detect_format('{"message": "x"}'), LogFormat.STRUCTURED)

    def test_structured_array_with_leading_whitespace(self):
        self.assertEqual(detect_format('   [1, 2, 3]'), LogFormat.STRUCTURED)

    def test_brace_wins_over_comma(self):
        self.assertEqual(detect_format('{"a": 1, "b": 2}'), LogFormat.STRUCTURED)

    def test_delimited(self):
        self.assertEqual(detect_format('2024-01-01,ERROR,fw,blocked'), LogFormat.DELIMITED)

    def test_free_text(self):
        line = 'Jan 15 10:23:45 webserver sshd[12345]: Accepted publickey for user'
        self.assertEqual(detect_format(line), LogFormat.FREE_TEXT)

    def test_unknown_when_no_sample(self):
        self.assertEqual(detect_format(None), LogFormat.UNKNOWN)
        self.assertEqual(detect_format('   '), LogFormat.UNKNOWN)

    def test_same_line_same_format(self):
        line = 'Jan 1 00:00:01 host sshd[1]: Failed password, retrying'
        self.assertEqual(detect_format(line), detect_format(line))
        self.assertEqual(detect_format(line), LogFormat.DELIMITED)


class TestSanitizeLine(unittest.TestCase):
    """Tests for line sanitization."""

    def test_strips_whitespace(self):
        self.assertEqual(sanitize_line('  hello world \r\n'), 'hello world')

    def test_removes_control_characters(self):
        self.assertEqual(sanitize_line('abc\x00def\x1b[31m\x07\x7f'), 'abcdef[31m')

    def test_keeps_tabs(self):
        self.assertEqual(sanitize_line('a\tb'), 'a\tb')

    def test_control_only_line_is_empty(self):
        self.assertEqual(sanitize_line('\x00\x01 \x02'), '')


class TestSyslogParser(unittest.TestCase):
    """Tests for the free-text syslog parser."""

    def setUp(self):
        self.parser = SyslogParser()

    def test_parse_failed_password(self):
        result = self.parser.parse_line('Jan 1 00:00:01 host sshd[1]: Failed password for user')

        self.assertFalse(result.fallback)
        record = result.record
        self.assertEqual(record.timestamp, 'Jan 1 00:00:01')
        self.assertEqual(record.source, 'host')
        self.assertEqual(record.event_type, 'sshd[1]')
        self.assertEqual(record.message, 'Failed password for user')
        self.assertEqual(record.severity, 'ERROR')

    def test_padded_day(self):
        result = self.parser.parse_line('Dec  3 15:30:45 server kernel: Out of memory warning')

        self.assertFalse(result.fallback)
        self.assertEqual(result.record.timestamp, 'Dec  3 15:30:45')
        self.assertEqual(result.record.event_type, 'kernel')
        self.assertEqual(result.record.severity, 'WARNING')

    def test_severity_keywords(self):
        self.assertEqual(SyslogParser.classify_severity('Permission DENIED').value, 'ERROR')
        self.assertEqual(SyslogParser.classify_severity('disk error on sda').value, 'ERROR')
        self.assertEqual(SyslogParser.classify_severity('Warning: low disk').value, 'WARNING')
        self.assertEqual(SyslogParser.classify_severity('Accepted publickey').value, 'INFO')

    def test_fallback(self):
        result = self.parser.parse_line('this is not syslog')

        self.assertTrue(result.fallback)
        self.assertIsNotNone(result.reason)
        self.assertEqual(result.record, LogRecord(
            timestamp='N/A', severity='INFO', source='unknown',
            event_type='raw', message='this is not syslog',
        ))

    def test_long_line_without_separator_falls_back(self):
        line = 'Jan 1 00:00:01 host ' + 'a' * 200000
        result = self.parser.parse_line(line)

        self.assertTrue(result.fallback)
        self.assertEqual(result.record.message, line)


class TestJSONLineParser(unittest.TestCase):
    """Tests for the JSON lines parser."""

    def setUp(self):
        self.parser = JSONLineParser()

    def test_parse_fields(self):
        line = '{"timestamp": "2024-01-15T10:23:45Z", "message": " Failed login for admin ", "level": "warn"}'
        result = self.parser.parse_line(line)

        self.assertFalse(result.fallback)
        self.assertEqual(result.record.timestamp, '2024-01-15T10:23:45Z')
        self.assertEqual(result.record.message, 'Failed login for admin')
        self.assertEqual(result.record.source, 'json')
        self.assertEqual(result.record.event_type, 'structured_event')
        self.assertEqual(result.record.severity, 'INFO')

    def test_missing_fields_keep_defaults(self):
        line = '{"host": "db01"}'
        result = self.parser.parse_line(line)

        self.assertEqual(result.record.timestamp, 'N/A')
        self.assertEqual(result.record.message, line)

    def test_numeric_timestamp(self):
        result = self.parser.parse_line('{"timestamp": 1700000000, "message": "boot"}')
        self.assertEqual(result.record.timestamp, '1700000000')

    def test_nested_value_is_missing(self):
        line = '{"timestamp": "t1", "message": {"text": "nested"}}'
        result = self.parser.parse_line(line)

        self.assertEqual(result.record.timestamp, 't1')
        self.assertEqual(result.record.message, line)

    def test_empty_message_kept_empty(self):
        result = self.parser.parse_line('{"timestamp": "t1", "message": ""}')
        self.assertEqual(result.record.message, '')

    def test_invalid_json_falls_back(self):
        line = '{"timestamp": "t1", "message": '
        result = self.parser.parse_line(line)

        self.assertTrue(result.fallback)
        self.assertEqual(result.record.message, line)
        self.assertEqual(result.record.source, 'json')
        self.assertEqual(result.record.event_type, 'structured_event')

    def test_array_falls_back(self):
        result = self.parser.parse_line('[1, 2, 3]')
        self.assertTrue(result.fallback)

    def test_deeply_nested_array_falls_back(self):
        line = '[' * 100000
        result = self.parser.parse_line(line)

        self.assertTrue(result.fallback)
        self.assertEqual(result.record.message, line)

    def test_deeply_nested_object_falls_back(self):
        line = '{"a":' * 100000
        result = self.parser.parse_line(line)

        self.assertTrue(result.fallback)
        self.assertEqual(result.record.source, 'json')


class TestCSVLineParser(unittest.TestCase):
    """Tests for the comma-delimited parser."""

    def setUp(self):
        self.parser = CSVLineParser()

    def test_parse_quoted_message(self):
        line = '2024-01-01,ERROR,firewall,"Unauthorized admin privilege escalation attempt"'
        result = self.parser.parse_line(line)

        self.assertFalse(result.fallback)
        self.assertEqual(result.record, LogRecord(
            timestamp='2024-01-01',
            severity='ERROR',
            source='firewall',
            event_type='delimited_event',
            message='Unauthorized admin privilege escalation attempt',
        ))

    def test_trims_whitespace_and_single_quotes(self):
        result = self.parser.parse_line("2024-01-01, WARNING , 'web01' , disk almost full")

        self.assertEqual(result.record.severity, 'WARNING')
        self.assertEqual(result.record.source, 'web01')
        self.assertEqual(result.record.message, 'disk almost full')

    def test_quoted_comma_stays_in_message(self):
        result = self.parser.parse_line('t1,INFO,app,"user a, user b logged in"')
        self.assertEqual(result.record.message, 'user a, user b logged in')

    def test_too_few_fields_falls_back(self):
        line = '2024-01-01,ERROR,firewall'
        result = self.parser.parse_line(line)

        self.assertTrue(result.fallback)
        self.assertEqual(result.record.source, 'csv')
        self.assertEqual(result.record.event_type, 'delimited_event')
        self.assertEqual(result.record.message, line)
        self.assertEqual(result.record.timestamp, 'N/A')

    def test_escaped_quotes_kept_in_message(self):
        result = self.parser.parse_line('t,INFO,src,"""quoted"""')

        self.assertFalse(result.fallback)
        self.assertEqual(result.record.message, '"quoted"')

    def test_oversized_field_falls_back(self):
        line = 't,INFO,src,' + 'x' * (csv.field_size_limit() + 1)
        result = self.parser.parse_line(line)

        self.assertTrue(result.fallback)
        self.assertEqual(result.record.message, line)

    def test_unterminated_quote_does_not_raise(self):
        result = self.parser.parse_line('t,INFO,src,"never closed')
        self.assertTrue(result.record.message)


class TestLineNormalizer(unittest.TestCase):
    """Tests for format dispatch."""

    def setUp(self):
        self.normalizer = LineNormalizer()

    def test_dispatch_by_format(self):
        self.assertIsInstance(self.normalizer.parser_for(LogFormat.STRUCTURED), JSONLineParser)
        self.assertIsInstance(self.normalizer.parser_for(LogFormat.DELIMITED), CSVLineParser)
        self.assertIsInstance(self.normalizer.parser_for(LogFormat.FREE_TEXT), SyslogParser)

    def test_unknown_uses_syslog(self):
        record = self.normalizer.normalize(
            LogFormat.UNKNOWN, 'Jan 1 00:00:01 host su: session opened'
        ).record
        self.assertEqual(record.source, 'host')
        self.assertEqual(record.event_type, 'su')

    def test_mismatched_line_falls_back(self):
        result = self.normalizer.normalize(LogFormat.DELIMITED, 'Jan 1 00:00:01 host sshd[1]: hello')
        self.assertTrue(result.fallback)


if __name__ == '__main__':
    unittest.main()
