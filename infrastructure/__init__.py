"""
Infrastructure Layer - External system integrations.

This layer contains implementations of interfaces defined in the interfaces/ layer.
Each subdirectory groups implementations by external dependency.

Structure:
- youtube/     - yt-dlp audio download
- openai/      - OpenAI audio transcription (openai SDK)
- elevenlabs/  - ElevenLabs speech-to-text (httpx)
"""

from .elevenlabs import ElevenLabsTranscriber
from .openai import OpenAITranscriber
from .youtube import YoutubeSourceResolver, get_youtube_source_resolver

__all__ = [
    # YouTube audio download
    "YoutubeSourceResolver",
    "get_youtube_source_resolver",
    # Speech-to-text providers
    "OpenAITranscriber",
    "ElevenLabsTranscriber",
]
