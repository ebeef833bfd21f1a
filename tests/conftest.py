"""
Shared pytest fixtures.

File logging is disabled before any project module is imported, and every
test that touches temp files gets its own TEMP_DIR.
"""

import os
import sys
from pathlib import Path

import pytest

# Get project root (parent of tests directory)
PROJECT_ROOT = Path(__file__).parent.parent

# Add project root to sys.path for imports
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

os.environ.setdefault("LOG_FILE_ENABLED", "false")
os.environ.setdefault("LOG_LEVEL", "DEBUG")


@pytest.fixture
def temp_dir(tmp_path, monkeypatch):
    """Point TEMP_DIR at a per-test directory and reset cached settings."""
    from core.config import get_settings

    directory = tmp_path / "ai-transcripts"
    monkeypatch.setenv("TEMP_DIR", str(directory))
    get_settings.cache_clear()
    yield directory
    get_settings.cache_clear()


@pytest.fixture
def sized_file():
    """Factory creating (sparse) files of a given size without writing the bytes."""

    def _create(path: Path, size: int) -> Path:
        path.parent.mkdir(parents=True, exist_ok=True)
        with open(path, "wb") as f:
            f.truncate(size)
        return path

    return _create
