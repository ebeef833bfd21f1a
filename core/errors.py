"""
Typed errors raised by the transcription pipeline.

Each error carries the HTTP-style status the boundary should answer with.
Upstream failures (provider HTTP errors, network errors, download errors) are
not wrapped: they propagate as-is and are mapped by services.error_normalizer.
"""

from typing import Optional


class TranscriptionError(Exception):
    """Base class for errors raised by the pipeline itself."""

    status_code: int = 500

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.message = message
        if status_code is not None:
            self.status_code = status_code


class InvalidInputError(TranscriptionError):
    """Missing/invalid provider, API key, media source or YouTube URL."""

    status_code = 400


class PayloadTooLargeError(TranscriptionError):
    """Media exceeds a provider-specific (or upload) size cap."""

    status_code = 400


class EmptyResultError(TranscriptionError):
    """Provider answered without usable transcript text."""

    status_code = 502
