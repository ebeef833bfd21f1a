"""
Transcription Provider Interface - Abstract interface for one external
speech-to-text backend.
"""

from abc import ABC, abstractmethod
from pathlib import Path
from typing import Optional

from core.constants import Provider


class ITranscriptionProvider(ABC):
    """
    Abstract interface for a speech-to-text provider.

    Implementations:
    - infrastructure.openai.transcriber.OpenAITranscriber
    - infrastructure.elevenlabs.transcriber.ElevenLabsTranscriber
    """

    provider: Provider

    @property
    @abstractmethod
    def default_model(self) -> str:
        """Model used when the caller does not override it."""
        pass

    @property
    def max_upload_bytes(self) -> Optional[int]:
        """Provider-specific file size cap, or None when uncapped."""
        return None

    async def aclose(self) -> None:
        """Release pooled connections, if the implementation holds any."""
        return None

    @abstractmethod
    async def transcribe(self, api_key: str, audio_path: Path, model: str) -> str:
        """
        Submit an audio file and return the transcript text.

        Args:
            api_key: Caller-supplied provider key
            audio_path: Local file, streamed from disk
            model: Provider model identifier

        Returns:
            Transcript text, or "" when the response carried none

        Raises:
            Exception: Provider HTTP/network errors propagate unchanged
        """
        pass
