"""
Narrative Analysis Module

Optional natural-language summaries produced by a local Ollama server.
"""

from .ollama_client import NarrativeClient, NarrativeResult, OllamaClient, OllamaConfig

__all__ = [
    'NarrativeClient',
    'NarrativeResult',
    'OllamaClient',
    'OllamaConfig',
]
