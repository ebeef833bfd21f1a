"""
Models Layer - Pydantic records for requests, resolved sources and results.
"""

from .schemas import (
    NormalizedError,
    ResolvedSource,
    SourceInfo,
    TranscriptionRequest,
    TranscriptionResult,
)

__all__ = [
    "NormalizedError",
    "ResolvedSource",
    "SourceInfo",
    "TranscriptionRequest",
    "TranscriptionResult",
]
