"""
Security Log Analyzer - heuristic threat detection for security logs.

This package normalizes syslog, JSON-lines and CSV logs into uniform
records, runs brute force and privilege escalation detectors over them
and renders a threat report, optionally enriched by a local Ollama model.
"""

__version__ = "1.0.0"
__author__ = "Security Research Team"
