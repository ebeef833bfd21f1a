"""
Interface Layer - Abstract interfaces for dependency injection.

This layer defines contracts that infrastructure implementations must fulfill.
Services depend on these interfaces, not concrete implementations.
"""

from .transcriber import ITranscriptionProvider
from .source_resolver import ISourceResolver

__all__ = [
    "ITranscriptionProvider",
    "ISourceResolver",
]
