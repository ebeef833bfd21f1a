"""
Configuration management using Pydantic Settings.
Follows Single Responsibility Principle - only handles configuration.
"""

import tempfile
from functools import lru_cache
from pathlib import Path
from typing import Optional

from pydantic import Field  # type: ignore
from pydantic_settings import BaseSettings, SettingsConfigDict  # type: ignore

from .constants import (
    DEFAULT_DOWNLOAD_BUFFER_SIZE,
    ELEVENLABS_DEFAULT_MODEL,
    ELEVENLABS_STT_URL,
    OPENAI_DEFAULT_MODEL,
    TEMP_DIR_NAME,
)


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
        protected_namespaces=(),  # Allow 'model_*' fields
    )

    # Application
    app_name: str = Field(default="AI Transcripts", alias="APP_NAME")
    app_version: str = Field(default="1.0.0", alias="APP_VERSION")
    environment: str = Field(default="development", alias="ENVIRONMENT")
    debug: bool = Field(default=True, alias="DEBUG")

    # API Service
    api_host: str = Field(default="0.0.0.0", alias="API_HOST")
    api_port: int = Field(default=3000, alias="API_PORT")
    api_reload: bool = Field(default=False, alias="API_RELOAD")

    # Upload ceilings (MiB)
    max_upload_size_mb: int = Field(default=250, alias="MAX_UPLOAD_SIZE_MB")
    openai_max_upload_size_mb: int = Field(
        default=25, alias="OPENAI_MAX_UPLOAD_SIZE_MB"
    )

    # Storage (temporary uploads and downloads)
    temp_dir: str = Field(
        default=str(Path(tempfile.gettempdir()) / TEMP_DIR_NAME), alias="TEMP_DIR"
    )
    # Browser UI directory, mounted at "/" when it exists
    static_dir: str = Field(default="public", alias="STATIC_DIR")

    # Providers
    openai_default_model: str = Field(
        default=OPENAI_DEFAULT_MODEL, alias="OPENAI_DEFAULT_MODEL"
    )
    openai_base_url: Optional[str] = Field(default=None, alias="OPENAI_BASE_URL")
    elevenlabs_default_model: str = Field(
        default=ELEVENLABS_DEFAULT_MODEL, alias="ELEVENLABS_DEFAULT_MODEL"
    )
    elevenlabs_api_url: str = Field(
        default=ELEVENLABS_STT_URL, alias="ELEVENLABS_API_URL"
    )
    # Upload + transcription of long media can take minutes
    provider_timeout_seconds: int = Field(
        default=600, alias="PROVIDER_TIMEOUT_SECONDS"
    )

    # YouTube download
    youtube_download_buffer_size: int = Field(
        default=DEFAULT_DOWNLOAD_BUFFER_SIZE, alias="YOUTUBE_DOWNLOAD_BUFFER_SIZE"
    )

    # Logging
    log_level: str = Field(default="INFO", alias="LOG_LEVEL")
    # Log format: "console" (colored, human-readable) or "json" (for log aggregation)
    log_format: str = Field(default="console", alias="LOG_FORMAT")
    # Enable/disable file logging (logs/app.log and logs/error.log)
    log_file_enabled: bool = Field(default=True, alias="LOG_FILE_ENABLED")

    @property
    def max_upload_bytes(self) -> int:
        return self.max_upload_size_mb * 1024 * 1024

    @property
    def openai_max_upload_bytes(self) -> int:
        return self.openai_max_upload_size_mb * 1024 * 1024


@lru_cache()
def get_settings() -> Settings:
    """
    Get cached settings instance.
    Using lru_cache to ensure single instance (Singleton pattern).
    """
    return Settings()
