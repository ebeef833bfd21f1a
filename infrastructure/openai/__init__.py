"""
OpenAI Infrastructure - OpenAI audio transcription client.
"""

from .transcriber import OpenAITranscriber, extract_text

__all__ = [
    "OpenAITranscriber",
    "extract_text",
]
