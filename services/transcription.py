"""
Transcription Service - Business logic for media transcription.

This service orchestrates request validation, YouTube audio acquisition,
provider size limits and provider dispatch using dependency injection
through interfaces. It owns (and always deletes) the files it downloads;
uploaded files belong to the caller.
"""

import time
from pathlib import Path
from typing import Optional

from core.constants import Provider, SourceKind
from core.errors import (
    EmptyResultError,
    InvalidInputError,
    PayloadTooLargeError,
    TranscriptionError,
)
from core.logger import format_exception_short, logger
from core.messages import ErrorMessages, LogMessages
from core.temp_files import cleanup_file
from interfaces.source_resolver import ISourceResolver
from interfaces.transcriber import ITranscriptionProvider
from models.schemas import ResolvedSource, TranscriptionRequest, TranscriptionResult
from services.provider_gateway import ProviderGateway


def _clean(value: Optional[str]) -> str:
    return value.strip() if value else ""


def too_large_error(backend: ITranscriptionProvider) -> PayloadTooLargeError:
    """Provider cap error naming the limit and the alternate provider."""
    provider = backend.provider
    return PayloadTooLargeError(
        ErrorMessages.PROVIDER_FILE_TOO_LARGE.format(
            provider=provider.label,
            limit_mb=backend.max_upload_bytes // (1024 * 1024),
            alternate=provider.alternate.label,
        )
    )


class TranscribeService:
    """
    Stateless service that turns a TranscriptionRequest into a transcript.

    Uses dependency injection through interfaces:
    - ISourceResolver: For downloading YouTube audio
    - ProviderGateway: For dispatching to ITranscriptionProvider backends
    """

    def __init__(
        self,
        source_resolver: Optional[ISourceResolver] = None,
        gateway: Optional[ProviderGateway] = None,
    ):
        """
        Initialize TranscribeService with optional dependencies.

        If dependencies are not provided, defaults are used from infrastructure layer.

        Args:
            source_resolver: ISourceResolver implementation (default: YoutubeSourceResolver)
            gateway: ProviderGateway (default: OpenAI + ElevenLabs backends)
        """
        self.source_resolver = source_resolver or self._get_default_source_resolver()
        self.gateway = gateway or self._get_default_gateway()

        logger.info(
            LogMessages.INIT_SERVICE.format(
                resolver=self.source_resolver.__class__.__name__,
                providers=", ".join(p.value for p in self.gateway.providers),
            )
        )

    def _get_default_source_resolver(self) -> ISourceResolver:
        from infrastructure.youtube import get_youtube_source_resolver

        return get_youtube_source_resolver()

    def _get_default_gateway(self) -> ProviderGateway:
        from services.provider_gateway import get_provider_gateway

        return get_provider_gateway()

    def validate(self, request: TranscriptionRequest) -> Provider:
        """
        Check provider, key and source in that order; first violation wins.

        Raises:
            InvalidInputError: On the first failed check
        """
        provider = Provider.parse(request.provider)
        if provider is None:
            raise InvalidInputError(ErrorMessages.PROVIDER_INVALID)

        if not _clean(request.api_key):
            raise InvalidInputError(ErrorMessages.API_KEY_REQUIRED)

        if not request.file_path and not _clean(request.youtube_url):
            raise InvalidInputError(ErrorMessages.SOURCE_REQUIRED)

        return provider

    def resolve_model(
        self, request: TranscriptionRequest, backend: ITranscriptionProvider
    ) -> str:
        return _clean(request.model) or backend.default_model

    async def _acquire_source(
        self, request: TranscriptionRequest, backend: ITranscriptionProvider
    ) -> ResolvedSource:
        if request.file_path:
            file_path = Path(request.file_path)
            return ResolvedSource(
                kind=SourceKind.FILE,
                label=request.file_name or file_path.name,
                local_path=file_path,
                owned_by_pipeline=False,
            )

        youtube_url = _clean(request.youtube_url)
        try:
            local_path = await self.source_resolver.resolve(
                youtube_url, max_bytes=backend.max_upload_bytes
            )
        except PayloadTooLargeError as e:
            raise too_large_error(backend) from e

        return ResolvedSource(
            kind=SourceKind.YOUTUBE,
            label=youtube_url,
            local_path=local_path,
            owned_by_pipeline=True,
        )

    def _enforce_size(
        self, source: ResolvedSource, backend: ITranscriptionProvider
    ) -> None:
        size = source.local_path.stat().st_size
        logger.debug(
            LogMessages.REQUEST_FILE_SIZE.format(
                size=size / (1024 * 1024), path=source.local_path
            )
        )
        cap = backend.max_upload_bytes
        if cap is not None and size > cap:
            raise too_large_error(backend)

    async def transcribe(self, request: TranscriptionRequest) -> TranscriptionResult:
        """
        Validate, acquire audio, enforce limits, transcribe and clean up.

        Args:
            request: Decoded request fields

        Returns:
            TranscriptionResult with a trimmed, non-empty transcript

        Raises:
            InvalidInputError: Bad provider, key, source or YouTube URL
            PayloadTooLargeError: File exceeds the provider's cap
            EmptyResultError: Provider returned no text
            Exception: Upstream download/provider failures propagate unchanged
        """
        provider = self.validate(request)
        backend = self.gateway.get(provider)
        model = self.resolve_model(request, backend)
        start = time.time()

        source: Optional[ResolvedSource] = None
        try:
            source = await self._acquire_source(request, backend)
            logger.info(
                LogMessages.REQUEST_START.format(
                    provider=provider.value,
                    model=model,
                    kind=source.kind.value,
                    label=source.label,
                )
            )

            self._enforce_size(source, backend)

            transcript = await self.gateway.transcribe(
                provider, _clean(request.api_key), source.local_path, model
            )
            transcript = _clean(transcript)
            if not transcript:
                raise EmptyResultError(ErrorMessages.EMPTY_RESULT)

            logger.info(
                LogMessages.REQUEST_COMPLETE.format(
                    provider=provider.value,
                    chars=len(transcript),
                    duration=time.time() - start,
                )
            )
            return TranscriptionResult(
                transcript=transcript,
                provider=provider.value,
                model=model,
                source=source.info,
            )

        except TranscriptionError as e:
            logger.warning(
                LogMessages.REQUEST_REJECTED.format(status=e.status_code, message=e)
            )
            raise
        except Exception as e:
            logger.error(
                LogMessages.REQUEST_FAILED.format(error=format_exception_short(e))
            )
            raise
        finally:
            if source is not None and source.owned_by_pipeline:
                cleanup_file(source.local_path)


# Global singleton instance
_transcribe_service: Optional[TranscribeService] = None


def get_transcribe_service(
    source_resolver: Optional[ISourceResolver] = None,
    gateway: Optional[ProviderGateway] = None,
) -> TranscribeService:
    """
    Get or create global TranscribeService instance (singleton).

    Args:
        source_resolver: Optional ISourceResolver implementation
        gateway: Optional ProviderGateway

    Returns:
        TranscribeService instance
    """
    global _transcribe_service

    if _transcribe_service is None:
        logger.info("Creating TranscribeService instance...")
        _transcribe_service = TranscribeService(
            source_resolver=source_resolver,
            gateway=gateway,
        )

    return _transcribe_service
