#!/usr/bin/env python3
"""
Security Log Analyzer - Main CLI Entry Point

Detects brute force and privilege escalation attempts in security logs
and optionally asks a local Ollama model for a written analysis.

Usage:
    python analyzer.py <log_file> [options]

Examples:
    python analyzer.py /var/log/auth.log
    python analyzer.py firewall.csv --output report.txt
    python analyzer.py events.jsonl --model mistral --timeout 60
    python analyzer.py auth.log --no-ai --output-format json
"""

import argparse
import logging
import sys
from pathlib import Path
from typing import List, Optional

from loganalyzer import __version__
from loganalyzer.detectors.detection_engine import DetectionEngine
from loganalyzer.narrative.ollama_client import (
    DEFAULT_BASE_URL, DEFAULT_MODEL, DEFAULT_TIMEOUT, OllamaClient, OllamaConfig
)
from loganalyzer.reporters.json_reporter import JSONReporter
from loganalyzer.reporters.text_reporter import TextReporter

logger = logging.getLogger("loganalyzer")

# Characters never expected in a log path given on the command line
UNSAFE_PATH_CHARS = '|&;$`\n<>'
MAX_PATH_LENGTH = 4096


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    """Parse command-line arguments."""
    parser = argparse.ArgumentParser(
        prog="loganalyzer",
        description="Security Log Analyzer - Detect threats in log files",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  %(prog)s /var/log/auth.log                    Analyze a syslog file
  %(prog)s firewall.csv --output report.txt     Save the report to a file
  %(prog)s events.jsonl --model mistral         Use another Ollama model
  %(prog)s auth.log --no-ai                     Skip the AI-powered analysis

Supported log formats (detected from the first line):
  syslog    - Jan 15 10:23:45 host process[pid]: message
  json      - {"timestamp": "...", "message": "..."} one object per line
  csv       - timestamp,severity,source,message

Detection capabilities:
  - Brute force attacks (repeated failed logins)
  - Privilege escalation attempts
        """
    )

    parser.add_argument(
        'log_file',
        help='Security log file to analyze'
    )

    parser.add_argument(
        '--model', '-m',
        default=DEFAULT_MODEL,
        help=f'Ollama model used for the AI analysis (default: {DEFAULT_MODEL})'
    )

    parser.add_argument(
        '--output', '-o',
        type=str,
        help='Output file path for report (default: stdout)'
    )

    parser.add_argument(
        '--output-format',
        choices=['text', 'json'],
        default='text',
        help='Report format (default: text)'
    )

    parser.add_argument(
        '--ollama-url',
        default=DEFAULT_BASE_URL,
        help=f'Base URL of the local Ollama server (default: {DEFAULT_BASE_URL})'
    )

    parser.add_argument(
        '--timeout',
        type=float,
        default=DEFAULT_TIMEOUT,
        help=f'Seconds to wait for the AI analysis (default: {DEFAULT_TIMEOUT})'
    )

    parser.add_argument(
        '--no-ai',
        action='store_true',
        help='Disable the AI-powered analysis'
    )

    verbosity = parser.add_mutually_exclusive_group()
    verbosity.add_argument(
        '--verbose', '-v',
        action='store_true',
        help='Show debug output'
    )
    verbosity.add_argument(
        '--quiet', '-q',
        action='store_true',
        help='Only show warnings and errors'
    )

    parser.add_argument(
        '--version',
        action='version',
        version=f'Security Log Analyzer v{__version__}'
    )

    return parser.parse_args(argv)


def configure_logging(verbose: bool = False, quiet: bool = False):
    """Send log output to stderr so reports on stdout stay clean."""
    level = logging.INFO
    if verbose:
        level = logging.DEBUG
    elif quiet:
        level = logging.WARNING

    logging.basicConfig(
        level=level,
        format='%(asctime)s - %(levelname)s - %(message)s',
        stream=sys.stderr,
    )


def validate_path(path: str) -> bool:
    """Reject empty, overlong, traversing or shell-suspicious paths."""
    if not path:
        logger.error("Empty file path")
        return False
    if len(path) > MAX_PATH_LENGTH:
        logger.error("Path too long")
        return False
    if '..' in Path(path).parts:
        logger.error("Path traversal detected in: %s", path)
        return False
    if any(char in path for char in UNSAFE_PATH_CHARS):
        logger.error("Suspicious character detected in path: %s", path)
        return False
    return True


def build_engine(args: argparse.Namespace) -> DetectionEngine:
    """Create the detection engine with the requested narrative client."""
    client = None
    if not args.no_ai:
        client = OllamaClient(OllamaConfig(
            base_url=args.ollama_url,
            model=args.model,
            timeout=args.timeout,
        ))
        if args.verbose and not client.is_available():
            logger.warning("Ollama is not reachable at %s", client.location)
    return DetectionEngine(narrative_client=client)


def run_analysis(args: argparse.Namespace) -> int:
    """Run analysis on the log file and emit the report."""
    engine = build_engine(args)

    logger.info("Processing log file: %s", args.log_file)
    if not engine.analyze_file(args.log_file):
        logger.error("Analysis failed, no report generated")
        return 1

    reporter = JSONReporter() if args.output_format == 'json' else TextReporter()

    if args.output:
        if not validate_path(args.output):
            return 1
        if not engine.export_report(args.output, reporter):
            return 1
    else:
        print(engine.generate_report(reporter).rstrip('\n'))

    logger.debug("Detected indicators:\n%s", engine.export_indicators())

    stats = engine.stats
    logger.info(
        "Analysis complete: %d entries analyzed (%d unparsed), %d threats detected",
        stats['total_entries'], stats['fallback_entries'], stats['total_threats']
    )
    return 0


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point."""
    args = parse_args(argv)
    configure_logging(args.verbose, args.quiet)

    if not validate_path(args.log_file):
        return 1

    input_path = Path(args.log_file)
    if not input_path.is_file():
        logger.error("Input path not found: %s", input_path)
        return 1

    return run_analysis(args)


if __name__ == '__main__':
    sys.exit(main())
