"""
Ollama Client

Talks to a local Ollama server to turn heuristic findings into a short
security narrative. The client never raises: every failure is returned
as an unsuccessful NarrativeResult so the report can still be produced.
"""

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Optional
from urllib.parse import urlparse

import requests

logger = logging.getLogger(__name__)


DEFAULT_BASE_URL = "http://localhost:11434"
DEFAULT_MODEL = "llama3"
DEFAULT_TIMEOUT = 30

ANALYSIS_PROMPT = """You are a cybersecurity analyst. Analyze the following security log entries and provide:
1. Summary of security events
2. Potential threats identified
3. Recommended actions
4. Severity assessment (CRITICAL/HIGH/MEDIUM/LOW)

Log entries:
{log_summary}

Provide a concise security analysis:"""


@dataclass
class OllamaConfig:
    """Connection settings for the Ollama server."""
    base_url: str = DEFAULT_BASE_URL
    model: str = DEFAULT_MODEL
    timeout: float = DEFAULT_TIMEOUT


@dataclass(frozen=True)
class NarrativeResult:
    """Response of a narrative request."""
    success: bool
    content: str = ""
    error: str = ""

    @classmethod
    def failure(cls, error: str) -> 'NarrativeResult':
        return cls(success=False, error=error)


class NarrativeClient(ABC):
    """Anything that can turn a log summary into narrative text."""

    #: Where the service lives, shown in the report when it is unreachable
    location = ""

    @abstractmethod
    def analyze_security_logs(self, log_summary: str) -> NarrativeResult:
        """Produce a narrative for the rendered log summary."""
        pass


class OllamaClient(NarrativeClient):
    """
    Narrative client backed by the Ollama HTTP API.

    Only loopback URLs are accepted so the analyzer cannot be used to send
    log contents to a remote host.
    """

    ALLOWED_HOSTS = ('localhost', '127.0.0.1')
    UNSAFE_CHARS = '|&;$`<> '

    def __init__(self, config: Optional[OllamaConfig] = None, session: Optional[requests.Session] = None):
        self.config = config or OllamaConfig()
        self.session = session or requests.Session()

    @property
    def location(self) -> str:
        return self.config.base_url

    def validate_url(self, url: str) -> bool:
        """Check that a URL points at a loopback HTTP endpoint."""
        if any(char in url for char in self.UNSAFE_CHARS):
            logger.warning("Suspicious character in Ollama URL: %r", url)
            return False

        parsed = urlparse(url)
        if parsed.scheme != 'http' or parsed.hostname not in self.ALLOWED_HOSTS:
            logger.warning("Blocked non-localhost URL: %s", url)
            return False
        return True

    def _url(self, endpoint: str) -> str:
        return self.config.base_url.rstrip('/') + endpoint

    def is_available(self) -> bool:
        """Check the server's model listing endpoint."""
        url = self._url('/api/tags')
        if not self.validate_url(url):
            return False
        try:
            response = self.session.get(url, timeout=self.config.timeout)
            return response.ok
        except requests.RequestException as e:
            logger.debug("Ollama availability check failed: %s", e)
            return False

    def generate_completion(self, prompt: str) -> NarrativeResult:
        """
        Request a completion for ``prompt``.

        Args:
            prompt: Full prompt text

        Returns:
            NarrativeResult with the generated text or the failure reason
        """
        url = self._url('/api/generate')
        if not self.validate_url(url):
            return NarrativeResult.failure(f"Refusing to contact non-local URL {self.config.base_url}")

        payload = {
            'model': self.config.model,
            'prompt': prompt,
            'stream': False,
        }

        try:
            response = self.session.post(url, json=payload, timeout=self.config.timeout)
            response.raise_for_status()
        except requests.Timeout:
            return NarrativeResult.failure(f"Request timed out after {self.config.timeout}s")
        except requests.RequestException as e:
            return NarrativeResult.failure(f"Request failed: {e}")

        try:
            body = response.json()
        except ValueError:
            return NarrativeResult.failure("Invalid JSON in Ollama response")

        content = body.get('response', '') if isinstance(body, dict) else ''
        if not isinstance(content, str) or not content.strip():
            return NarrativeResult.failure("Failed to extract response content")

        return NarrativeResult(success=True, content=content)

    def analyze_security_logs(self, log_summary: str) -> NarrativeResult:
        prompt = ANALYSIS_PROMPT.format(log_summary=log_summary)
        logger.info("Sending to Ollama (%s) for AI-powered analysis...", self.config.model)
        result = self.generate_completion(prompt)
        if not result.success:
            logger.warning("AI analysis unavailable: %s", result.error)
        return result
