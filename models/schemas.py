"""
Pydantic Schemas - Domain records passed through the transcription pipeline.

This module consolidates the models shared by the service layer and the API.
"""

from pathlib import Path
from typing import Optional

from pydantic import BaseModel, Field

from core.constants import SourceKind


# =============================================================================
# Request
# =============================================================================


class TranscriptionRequest(BaseModel):
    """
    Decoded transcription request.

    Fields are deliberately loose (all optional strings): TranscribeService
    validates them in a fixed order so the first violation decides the error.
    """

    provider: Optional[str] = Field(
        default=None, description="'openai' or 'elevenlabs'"
    )
    api_key: Optional[str] = Field(
        default=None,
        repr=False,
        description="Caller-supplied provider key (never persisted or logged)",
    )
    model: Optional[str] = Field(
        default=None, description="Model override; provider default when blank"
    )
    youtube_url: Optional[str] = Field(default=None, description="YouTube video URL")
    file_path: Optional[str] = Field(
        default=None, description="Local path of an uploaded file"
    )
    file_name: Optional[str] = Field(
        default=None, description="Original name of the uploaded file"
    )


# =============================================================================
# Source
# =============================================================================


class SourceInfo(BaseModel):
    """Public description of where the audio came from."""

    kind: SourceKind = Field(..., description="'file' or 'youtube'")
    label: str = Field(..., description="Original file name or YouTube URL")


class ResolvedSource(BaseModel):
    """Local audio file ready for submission, plus who must delete it."""

    kind: SourceKind
    label: str
    local_path: Path
    owned_by_pipeline: bool = Field(
        default=False,
        description="True only for files the pipeline downloaded itself",
    )

    @property
    def info(self) -> SourceInfo:
        return SourceInfo(kind=self.kind, label=self.label)


# =============================================================================
# Results
# =============================================================================


class TranscriptionResult(BaseModel):
    """Successful transcription, serialized as the API success body."""

    transcript: str = Field(..., description="Trimmed, non-empty transcript text")
    provider: str = Field(..., description="Provider that produced the transcript")
    model: str = Field(..., description="Model used (override or provider default)")
    source: SourceInfo

    class Config:
        json_schema_extra = {
            "examples": [
                {
                    "transcript": "hello world",
                    "provider": "openai",
                    "model": "gpt-4o-mini-transcribe",
                    "source": {
                        "kind": "youtube",
                        "label": "https://youtube.com/watch?v=abc",
                    },
                }
            ]
        }


class NormalizedError(BaseModel):
    """Single (status, message) shape for every failure."""

    status: int = Field(default=500, ge=400, le=599)
    message: str
