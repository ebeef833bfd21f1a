"""
Provider Gateway - One call contract over every speech-to-text backend.

Backends are registered by Provider value; adding a provider means adding an
ITranscriptionProvider implementation and an enum member, never a branch in
TranscribeService.
"""

from pathlib import Path
from typing import Dict, Iterable, Optional

from core.constants import Provider
from core.errors import InvalidInputError
from core.logger import logger
from core.messages import ErrorMessages
from interfaces.transcriber import ITranscriptionProvider


class ProviderGateway:
    """Routes transcription calls to the backend registered for a provider."""

    def __init__(self, providers: Optional[Iterable[ITranscriptionProvider]] = None):
        """
        Args:
            providers: Backends to register (default: OpenAI + ElevenLabs)
        """
        if providers is None:
            providers = self._get_default_providers()
        self._providers: Dict[Provider, ITranscriptionProvider] = {
            backend.provider: backend for backend in providers
        }

    def _get_default_providers(self) -> Iterable[ITranscriptionProvider]:
        from infrastructure.elevenlabs import ElevenLabsTranscriber
        from infrastructure.openai import OpenAITranscriber

        return [OpenAITranscriber(), ElevenLabsTranscriber()]

    @property
    def providers(self) -> Iterable[Provider]:
        return self._providers.keys()

    def get(self, provider: Provider) -> ITranscriptionProvider:
        """
        Backend registered for `provider`.

        Raises:
            InvalidInputError: If no backend is registered for it
        """
        try:
            return self._providers[provider]
        except KeyError:
            raise InvalidInputError(ErrorMessages.PROVIDER_INVALID) from None

    async def transcribe(
        self, provider: Provider, api_key: str, local_path: Path, model: str
    ) -> str:
        """Transcribe with the selected backend; errors propagate unchanged."""
        backend = self.get(provider)
        logger.debug(f"Dispatching to {backend.__class__.__name__}")
        return await backend.transcribe(api_key, local_path, model)

    async def aclose(self) -> None:
        """Close every registered backend."""
        for backend in self._providers.values():
            await backend.aclose()


# Global singleton instance
_provider_gateway: Optional[ProviderGateway] = None


def get_provider_gateway() -> ProviderGateway:
    """Get or create global ProviderGateway instance (singleton)."""
    global _provider_gateway

    if _provider_gateway is None:
        logger.info("Creating ProviderGateway instance...")
        _provider_gateway = ProviderGateway()

    return _provider_gateway


async def shutdown_provider_gateway() -> None:
    """Close the singleton gateway if it was ever created."""
    if _provider_gateway is not None:
        await _provider_gateway.aclose()
