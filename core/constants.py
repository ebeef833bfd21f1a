"""Constants for the transcription pipeline."""

from enum import Enum
from typing import Optional


class Provider(str, Enum):
    OPENAI = "openai"
    ELEVENLABS = "elevenlabs"

    @classmethod
    def parse(cls, value: Optional[str]) -> Optional["Provider"]:
        """Return the matching provider, or None for missing/unknown values."""
        if not value:
            return None
        try:
            return cls(value)
        except ValueError:
            return None

    @property
    def label(self) -> str:
        return PROVIDER_LABELS[self]

    @property
    def alternate(self) -> "Provider":
        return Provider.ELEVENLABS if self is Provider.OPENAI else Provider.OPENAI


class SourceKind(str, Enum):
    FILE = "file"
    YOUTUBE = "youtube"


PROVIDER_LABELS = {
    Provider.OPENAI: "OpenAI",
    Provider.ELEVENLABS: "ElevenLabs",
}


# =============================================================================
# Provider Defaults
# =============================================================================

OPENAI_DEFAULT_MODEL = "gpt-4o-mini-transcribe"
ELEVENLABS_DEFAULT_MODEL = "scribe_v1"
ELEVENLABS_STT_URL = "https://api.elevenlabs.io/v1/speech-to-text"
ELEVENLABS_API_KEY_HEADER = "xi-api-key"


# =============================================================================
# Temp Files
# =============================================================================

TEMP_DIR_NAME = "ai-transcripts"
DEFAULT_UPLOAD_EXTENSION = ".bin"
YOUTUBE_AUDIO_EXTENSION = ".webm"

# Chunk size used when copying request uploads to disk
UPLOAD_COPY_CHUNK_SIZE = 1024 * 1024

# yt-dlp transfer buffer (32 MiB) to avoid many small writes on long media
DEFAULT_DOWNLOAD_BUFFER_SIZE = 1 << 25

# YouTube: best audio-only stream in the fixed container, then any audio-only
YOUTUBE_AUDIO_FORMAT = "bestaudio[ext=webm]/bestaudio"


# =============================================================================
# HTTP Client Constants
# =============================================================================

# Connection pool limits for the ElevenLabs client
HTTP_MAX_KEEPALIVE_CONNECTIONS = 10
HTTP_MAX_CONNECTIONS = 20
HTTP_KEEPALIVE_EXPIRY = 30.0

# Connect timeout; read/write timeouts come from settings (long uploads)
HTTP_CONNECT_TIMEOUT = 10.0
HTTP_POOL_TIMEOUT = 5.0

# Valid range for statuses surfaced to the caller
MIN_ERROR_STATUS = 400
MAX_ERROR_STATUS = 599
DEFAULT_ERROR_STATUS = 500
