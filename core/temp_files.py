"""
Temp file helpers shared by the HTTP boundary and the pipeline.

Every temp file has exactly one owner: uploads belong to the request handler,
YouTube downloads belong to TranscribeService. Both delete through
cleanup_file(), which never raises.
"""

import time
import uuid
from pathlib import Path
from typing import Optional, Union

from core.config import get_settings
from core.constants import DEFAULT_UPLOAD_EXTENSION
from core.logger import logger
from core.messages import LogMessages


def get_temp_dir() -> Path:
    """Configured directory for uploads and downloads."""
    return Path(get_settings().temp_dir)


def ensure_temp_dir() -> Path:
    """
    Create the temp directory if absent and return it.

    Safe to call concurrently: mkdir(exist_ok=True) converges on the
    existing directory.
    """
    temp_dir = get_temp_dir()
    temp_dir.mkdir(parents=True, exist_ok=True)
    return temp_dir


def create_temp_filename(
    original_name: str = "", default_extension: str = DEFAULT_UPLOAD_EXTENSION
) -> str:
    """
    Build a collision-resistant file name that keeps the original extension.

    Example:
        >>> create_temp_filename("talk.mp3")
        '1760655123456789012-8b0c...-....mp3'
    """
    extension = Path(original_name or "").suffix or default_extension
    return f"{time.time_ns()}-{uuid.uuid4()}{extension}"


def cleanup_file(file_path: Optional[Union[str, Path]]) -> None:
    """Delete a temp file, logging (never raising) on failure."""
    if not file_path:
        return

    try:
        Path(file_path).unlink(missing_ok=True)
        logger.debug(LogMessages.CLEANUP_DONE.format(path=file_path))
    except OSError as e:
        logger.warning(LogMessages.CLEANUP_FAILED.format(path=file_path, error=e))


def get_max_upload_bytes() -> int:
    """Global upload ceiling enforced by the request boundary."""
    return get_settings().max_upload_bytes
