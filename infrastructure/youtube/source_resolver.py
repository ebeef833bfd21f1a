"""
YouTube Source Resolver - Downloads the audio track of a YouTube video.

Implements ISourceResolver interface for dependency injection.
yt-dlp is synchronous, so downloads run on a dedicated ThreadPoolExecutor.
"""

import asyncio
import time
from concurrent.futures import ThreadPoolExecutor
from pathlib import Path
from typing import Any, Dict, Optional
from urllib.parse import parse_qsl, urlencode, urlsplit, urlunsplit

import yt_dlp  # type: ignore
from yt_dlp.extractor import get_info_extractor  # type: ignore

from core.config import get_settings
from core.constants import YOUTUBE_AUDIO_EXTENSION, YOUTUBE_AUDIO_FORMAT
from core.errors import InvalidInputError, PayloadTooLargeError
from core.logger import YtDlpLogger, format_exception_short, logger
from core.messages import ErrorMessages, LogMessages
from core.temp_files import cleanup_file, create_temp_filename, ensure_temp_dir
from interfaces.source_resolver import ISourceResolver

_download_executor: Optional[ThreadPoolExecutor] = None

# Query parameters that make yt-dlp treat a watch URL as a playlist
PLAYLIST_QUERY_PARAMS = ("list", "index")
URL_SCHEMES = ("http", "https")


def get_download_executor() -> ThreadPoolExecutor:
    """Get or create dedicated ThreadPoolExecutor for yt-dlp downloads."""
    global _download_executor
    if _download_executor is None:
        _download_executor = ThreadPoolExecutor(
            max_workers=4, thread_name_prefix="youtube-"
        )
        logger.info("Created dedicated ThreadPoolExecutor for YouTube downloads")
    return _download_executor


def strip_playlist_params(url: str) -> str:
    """
    Drop playlist query parameters so a watch URL copied from a playlist
    resolves to its single video.

    Example:
        >>> strip_playlist_params("https://youtube.com/watch?v=abc&list=PL1&index=2")
        'https://youtube.com/watch?v=abc'
    """
    parts = urlsplit(url)
    query = [
        (key, value)
        for key, value in parse_qsl(parts.query, keep_blank_values=True)
        if key not in PLAYLIST_QUERY_PARAMS
    ]
    return urlunsplit(parts._replace(query=urlencode(query)))


def is_valid_youtube_url(url: str) -> bool:
    """
    True for an http(s) URL that yt-dlp's YouTube extractor accepts as a
    single video once playlist parameters are dropped.
    """
    if not url:
        return False
    try:
        if urlsplit(url).scheme.lower() not in URL_SCHEMES:
            return False
        video_url = strip_playlist_params(url)
    except ValueError:
        return False
    return get_info_extractor("Youtube").suitable(video_url)


def probe_size(info: Dict[str, Any]) -> Optional[int]:
    """Reported size of the selected audio format, when YouTube exposes one."""
    size = info.get("filesize") or info.get("filesize_approx")
    if size:
        return int(size)

    for fmt in info.get("requested_formats") or ():
        size = fmt.get("filesize") or fmt.get("filesize_approx")
        if size:
            return int(size)
    return None


class YoutubeSourceResolver(ISourceResolver):
    """
    yt-dlp based resolver for YouTube URLs.

    Picks the best audio-only stream, writes it straight to
    <temp_dir>/<timestamp>-<uuid>.webm and returns that path.
    """

    def __init__(self, buffer_size: Optional[int] = None):
        """
        Args:
            buffer_size: yt-dlp transfer buffer in bytes (defaults to settings)
        """
        settings = get_settings()
        self._buffer_size = buffer_size or settings.youtube_download_buffer_size

    def _build_options(self, destination: Path) -> Dict[str, Any]:
        return {
            "format": YOUTUBE_AUDIO_FORMAT,
            "outtmpl": {"default": str(destination)},
            "buffersize": self._buffer_size,
            "noresizebuffer": True,
            "nopart": True,
            "noplaylist": True,
            "overwrites": True,
            "quiet": True,
            "no_warnings": False,
            "noprogress": True,
            "logger": YtDlpLogger(),
        }

    def _download(self, url: str, destination: Path, max_bytes: Optional[int]) -> None:
        """Blocking probe + download, executed on the download executor."""
        with yt_dlp.YoutubeDL(self._build_options(destination)) as ydl:
            logger.info(LogMessages.YOUTUBE_PROBING.format(url=url))
            info = ydl.extract_info(url, download=False)

            size = probe_size(info)
            if size is None:
                logger.debug(LogMessages.YOUTUBE_SIZE_UNKNOWN)
            elif max_bytes is not None and size > max_bytes:
                logger.info(
                    LogMessages.YOUTUBE_TOO_LARGE.format(
                        size=size / 1024 / 1024, limit=max_bytes / 1024 / 1024
                    )
                )
                raise PayloadTooLargeError(
                    ErrorMessages.YOUTUBE_TOO_LARGE.format(
                        limit_mb=max_bytes // (1024 * 1024)
                    )
                )

            logger.info(LogMessages.YOUTUBE_DOWNLOADING.format(destination=destination))
            ydl.process_ie_result(info, download=True)

    async def resolve(self, url: str, max_bytes: Optional[int] = None) -> Path:
        """
        Download YouTube audio to a temp file.

        Implements ISourceResolver.resolve() interface.

        Raises:
            InvalidInputError: If the URL is not a YouTube video URL
            PayloadTooLargeError: If the reported stream size exceeds max_bytes
            yt_dlp.utils.DownloadError: On extractor/network/write failure
        """
        if not is_valid_youtube_url(url):
            raise InvalidInputError(ErrorMessages.YOUTUBE_URL_INVALID)

        destination = ensure_temp_dir() / create_temp_filename(
            default_extension=YOUTUBE_AUDIO_EXTENSION
        )
        start = time.time()

        download = get_download_executor().submit(
            self._download, strip_playlist_params(url), destination, max_bytes
        )
        completed = False
        try:
            await asyncio.wrap_future(download)
            completed = True
        except Exception as e:
            logger.error(
                LogMessages.YOUTUBE_DOWNLOAD_FAILED.format(
                    error=format_exception_short(e)
                )
            )
            raise
        finally:
            if not completed:
                # A cancelled request leaves the worker thread writing; delete
                # the file once it stops (immediately if it already has).
                download.add_done_callback(lambda _: cleanup_file(destination))

        size_mb = destination.stat().st_size / (1024 * 1024)
        logger.info(
            LogMessages.YOUTUBE_DOWNLOADED.format(
                size=size_mb, duration=time.time() - start, destination=destination
            )
        )
        return destination


# Global singleton instance
_source_resolver: Optional[YoutubeSourceResolver] = None


def get_youtube_source_resolver() -> YoutubeSourceResolver:
    """
    Get or create global YoutubeSourceResolver instance (singleton).

    Returns:
        YoutubeSourceResolver instance
    """
    global _source_resolver

    if _source_resolver is None:
        logger.info("Creating YoutubeSourceResolver instance...")
        _source_resolver = YoutubeSourceResolver()

    return _source_resolver
