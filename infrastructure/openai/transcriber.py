"""
OpenAI Transcriber - Speech-to-text through the OpenAI audio API.

Implements ITranscriptionProvider. A client is created per call because the
API key belongs to the caller, not to this service.
"""

from pathlib import Path
from typing import Any, Optional

import httpx  # type: ignore
from openai import AsyncOpenAI  # type: ignore

from core.config import get_settings
from core.constants import HTTP_CONNECT_TIMEOUT, Provider
from core.logger import logger
from core.messages import LogMessages
from interfaces.transcriber import ITranscriptionProvider


def extract_text(response: Any) -> str:
    """Plain text from either a bare string or a structured transcription."""
    if isinstance(response, str):
        return response
    return getattr(response, "text", None) or ""


class OpenAITranscriber(ITranscriptionProvider):
    """OpenAI audio transcription client (retries disabled)."""

    provider = Provider.OPENAI

    def __init__(
        self,
        default_model: Optional[str] = None,
        max_upload_bytes: Optional[int] = None,
        base_url: Optional[str] = None,
        timeout_seconds: Optional[int] = None,
    ):
        settings = get_settings()
        self._default_model = default_model or settings.openai_default_model
        self._max_upload_bytes = max_upload_bytes or settings.openai_max_upload_bytes
        self._base_url = base_url or settings.openai_base_url
        self._timeout = httpx.Timeout(
            timeout_seconds or settings.provider_timeout_seconds,
            connect=HTTP_CONNECT_TIMEOUT,
        )

    @property
    def default_model(self) -> str:
        return self._default_model

    @property
    def max_upload_bytes(self) -> Optional[int]:
        return self._max_upload_bytes

    def _create_client(self, api_key: str) -> AsyncOpenAI:
        return AsyncOpenAI(
            api_key=api_key,
            base_url=self._base_url,
            timeout=self._timeout,
            max_retries=0,
        )

    async def transcribe(self, api_key: str, audio_path: Path, model: str) -> str:
        """
        Upload the file to the transcription endpoint.

        Raises:
            openai.APIStatusError: Provider answered with an error status
            openai.APIConnectionError: Network failure or timeout
        """
        logger.info(LogMessages.PROVIDER_CALL.format(provider="OpenAI", model=model))

        async with self._create_client(api_key) as client:
            with open(audio_path, "rb") as audio_file:
                response = await client.audio.transcriptions.create(
                    file=audio_file,
                    model=model,
                )

        return extract_text(response)
