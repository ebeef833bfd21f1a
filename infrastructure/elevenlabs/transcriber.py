"""
ElevenLabs Transcriber - Speech-to-text through the ElevenLabs REST API.

Implements ITranscriptionProvider with a pooled httpx.AsyncClient.
The file is sent as a streamed multipart body; there is no client-side
body size ceiling.
"""

from pathlib import Path
from typing import Optional

import httpx  # type: ignore

from core.config import get_settings
from core.constants import (
    ELEVENLABS_API_KEY_HEADER,
    HTTP_CONNECT_TIMEOUT,
    HTTP_KEEPALIVE_EXPIRY,
    HTTP_MAX_CONNECTIONS,
    HTTP_MAX_KEEPALIVE_CONNECTIONS,
    HTTP_POOL_TIMEOUT,
    Provider,
)
from core.logger import logger
from core.messages import LogMessages
from interfaces.transcriber import ITranscriptionProvider


HTTP_LIMITS = httpx.Limits(
    max_keepalive_connections=HTTP_MAX_KEEPALIVE_CONNECTIONS,
    max_connections=HTTP_MAX_CONNECTIONS,
    keepalive_expiry=HTTP_KEEPALIVE_EXPIRY,
)


class ElevenLabsTranscriber(ITranscriptionProvider):
    """
    ElevenLabs speech-to-text client.

    The key travels in the `xi-api-key` header, not as a bearer token.
    """

    provider = Provider.ELEVENLABS

    def __init__(
        self,
        default_model: Optional[str] = None,
        api_url: Optional[str] = None,
        timeout_seconds: Optional[int] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        """
        Args:
            default_model: Model id when the caller gives none (defaults to settings)
            api_url: Speech-to-text endpoint (defaults to settings)
            timeout_seconds: Read/write timeout for upload + transcription
            transport: Optional httpx transport (tests use httpx.MockTransport)
        """
        settings = get_settings()
        self._default_model = default_model or settings.elevenlabs_default_model
        self._api_url = api_url or settings.elevenlabs_api_url
        timeout_seconds = timeout_seconds or settings.provider_timeout_seconds
        self._timeout = httpx.Timeout(
            connect=HTTP_CONNECT_TIMEOUT,
            read=timeout_seconds,
            write=timeout_seconds,
            pool=HTTP_POOL_TIMEOUT,
        )
        self._transport = transport
        self._client: Optional[httpx.AsyncClient] = None

    @property
    def default_model(self) -> str:
        return self._default_model

    async def _get_client(self) -> httpx.AsyncClient:
        """Get or create reusable HTTP client with connection pooling."""
        if self._client is None or self._client.is_closed:
            self._client = httpx.AsyncClient(
                limits=HTTP_LIMITS,
                timeout=self._timeout,
                transport=self._transport,
            )
            logger.info(LogMessages.INIT_HTTP_CLIENT)
        return self._client

    async def transcribe(self, api_key: str, audio_path: Path, model: str) -> str:
        """
        Post model_id + file as multipart form data.

        Raises:
            httpx.HTTPStatusError: Provider answered with a non-2xx status
            httpx.RequestError: Network failure or timeout
        """
        logger.info(
            LogMessages.PROVIDER_CALL.format(provider="ElevenLabs", model=model)
        )

        client = await self._get_client()
        with open(audio_path, "rb") as audio_file:
            response = await client.post(
                self._api_url,
                data={"model_id": model},
                files={"file": (Path(audio_path).name, audio_file)},
                headers={ELEVENLABS_API_KEY_HEADER: api_key},
            )

        if response.is_error:
            logger.warning(
                LogMessages.PROVIDER_HTTP_ERROR.format(
                    provider="ElevenLabs", status=response.status_code
                )
            )
        response.raise_for_status()

        payload = response.json()
        if not isinstance(payload, dict):
            return ""
        return payload.get("text") or ""

    async def aclose(self) -> None:
        """Close the pooled client."""
        if self._client is not None and not self._client.is_closed:
            await self._client.aclose()
