"""
YouTube Infrastructure - yt-dlp based audio acquisition.

This module provides:
- YoutubeSourceResolver: Audio downloader (implements ISourceResolver)
"""

from .source_resolver import (
    YoutubeSourceResolver,
    get_youtube_source_resolver,
    is_valid_youtube_url,
)

__all__ = [
    "YoutubeSourceResolver",
    "get_youtube_source_resolver",
    "is_valid_youtube_url",
]
