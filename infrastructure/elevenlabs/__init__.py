"""
ElevenLabs Infrastructure - ElevenLabs speech-to-text client.
"""

from .transcriber import ElevenLabsTranscriber

__all__ = [
    "ElevenLabsTranscriber",
]
