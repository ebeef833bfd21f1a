"""
FastAPI dependency injection.

Routes depend on these functions rather than on concrete services, so tests
can swap implementations through app.dependency_overrides.
"""

from core.logger import logger


def get_transcribe_service_dependency():
    """
    FastAPI dependency for TranscribeService.

    Usage in routes:
        @router.post("/api/transcribe")
        async def transcribe(
            service: TranscribeService = Depends(get_transcribe_service_dependency)
        ):
            ...

    Returns:
        TranscribeService instance with injected dependencies
    """
    from services.transcription import get_transcribe_service

    return get_transcribe_service()


def provision_temp_dir() -> None:
    """Create the temp directory at startup so uploads never race on it."""
    from core.messages import LogMessages
    from core.temp_files import ensure_temp_dir

    path = ensure_temp_dir()
    logger.info(LogMessages.TEMP_DIR_READY.format(path=path))
