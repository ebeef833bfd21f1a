"""
Common API schemas shared across endpoints (documentation models).
"""

from pydantic import BaseModel, Field


class ErrorResponse(BaseModel):
    """Body returned for every failed request."""

    error: str = Field(..., description="Human-readable error message")

    class Config:
        json_schema_extra = {
            "examples": [
                {"error": "API key is required."},
                {"error": "Transcription API returned an empty result."},
            ]
        }


class HealthResponse(BaseModel):
    """Response model for health check."""

    status: str = Field(default="ok", description="Health status")

    class Config:
        json_schema_extra = {"examples": [{"status": "ok"}]}
