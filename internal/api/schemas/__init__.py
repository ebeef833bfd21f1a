"""API schemas."""

from .common_schemas import ErrorResponse, HealthResponse

__all__ = [
    "ErrorResponse",
    "HealthResponse",
]
