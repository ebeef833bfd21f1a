"""
Tests for YoutubeSourceResolver.

yt_dlp.YoutubeDL is replaced by FakeYoutubeDL, which records its options and
writes the "downloaded" file itself, so no network access is needed.
"""

import asyncio
import threading
import time
from pathlib import Path
from typing import Any, Dict, List, Optional
from unittest.mock import patch

import pytest
from yt_dlp.utils import DownloadError

from core.errors import InvalidInputError, PayloadTooLargeError
from core.logger import logger
from infrastructure.youtube import source_resolver
from infrastructure.youtube.source_resolver import (
    YoutubeSourceResolver,
    is_valid_youtube_url,
    probe_size,
    strip_playlist_params,
)

VIDEO_URL = "https://www.youtube.com/watch?v=dQw4w9WgXcQ"
PLAYLIST_VIDEO_URL = (
    "https://www.youtube.com/watch?v=dQw4w9WgXcQ"
    "&list=PLFgquLnL59alCl_2TQvOiD5Vgm1hCaGSI&index=2"
)
MB = 1024 * 1024


class FakeYoutubeDL:
    """Stand-in for yt_dlp.YoutubeDL"""

    instances: List["FakeYoutubeDL"] = []
    info: Dict[str, Any] = {}
    payload: bytes = b"webm-audio"
    download_error: Optional[Exception] = None
    # Set to pause process_ie_result after the file was written
    started: Optional[threading.Event] = None
    release: Optional[threading.Event] = None

    def __init__(self, params: Dict[str, Any]):
        self.params = params
        self.extracted: List[str] = []
        self.downloaded = False
        FakeYoutubeDL.instances.append(self)

    def __enter__(self):
        return self

    def __exit__(self, *exc_info):
        return False

    @property
    def destination(self) -> Path:
        return Path(self.params["outtmpl"]["default"])

    def extract_info(self, url: str, download: bool = True) -> Dict[str, Any]:
        assert download is False
        self.extracted.append(url)
        return dict(self.info, webpage_url=url)

    def process_ie_result(self, info: Dict[str, Any], download: bool = True):
        assert download is True
        self.downloaded = True
        self.destination.write_bytes(self.payload)
        if self.started is not None:
            self.started.set()
            self.release.wait(timeout=5)
        if self.download_error is not None:
            raise self.download_error
        return info


@pytest.fixture
def fake_ydl():
    FakeYoutubeDL.instances = []
    FakeYoutubeDL.info = {"id": "dQw4w9WgXcQ", "ext": "webm"}
    FakeYoutubeDL.payload = b"webm-audio"
    FakeYoutubeDL.download_error = None
    FakeYoutubeDL.started = None
    FakeYoutubeDL.release = None
    with patch.object(source_resolver.yt_dlp, "YoutubeDL", FakeYoutubeDL):
        yield FakeYoutubeDL


class TestIsValidYoutubeUrl:
    """Tests for is_valid_youtube_url"""

    @pytest.mark.parametrize(
        "url",
        [
            VIDEO_URL,
            "https://youtube.com/watch?v=dQw4w9WgXcQ",
            "https://youtu.be/dQw4w9WgXcQ",
            "https://m.youtube.com/watch?v=dQw4w9WgXcQ",
            PLAYLIST_VIDEO_URL,
            "https://youtu.be/dQw4w9WgXcQ?list=PLFgquLnL59alCl_2TQvOiD5Vgm1hCaGSI",
        ],
    )
    def test_valid(self, url):
        assert is_valid_youtube_url(url)

    @pytest.mark.parametrize(
        "url",
        [
            "",
            "not-a-url",
            "https://vimeo.com/123456",
            "https://example.com/a.mp3",
            "dQw4w9WgXcQ",
            "youtube.com/watch?v=dQw4w9WgXcQ",
            "ftp://youtube.com/watch?v=dQw4w9WgXcQ",
            "https://www.youtube.com/playlist?list=PLFgquLnL59alCl_2TQvOiD5Vgm1hCaGSI",
            "http://[youtube.com/watch?v=dQw4w9WgXcQ",
        ],
    )
    def test_invalid(self, url):
        assert not is_valid_youtube_url(url)


class TestStripPlaylistParams:
    """Tests for strip_playlist_params"""

    def test_drops_list_and_index(self):
        assert strip_playlist_params(PLAYLIST_VIDEO_URL) == VIDEO_URL

    def test_keeps_other_params(self):
        url = "https://www.youtube.com/watch?v=dQw4w9WgXcQ&t=42s"

        assert strip_playlist_params(url) == url

    def test_plain_url_unchanged(self):
        assert strip_playlist_params(VIDEO_URL) == VIDEO_URL


class TestProbeSize:
    """Tests for probe_size"""

    def test_filesize(self):
        assert probe_size({"filesize": 1000, "filesize_approx": 2000}) == 1000

    def test_filesize_approx(self):
        assert probe_size({"filesize": None, "filesize_approx": 2000.4}) == 2000

    def test_requested_formats(self):
        info = {"requested_formats": [{"filesize": None}, {"filesize_approx": 3000}]}

        assert probe_size(info) == 3000

    def test_unknown(self):
        assert probe_size({}) is None
        assert probe_size({"requested_formats": None}) is None


class TestYoutubeSourceResolver:
    """Tests for YoutubeSourceResolver.resolve"""

    @pytest.mark.asyncio
    async def test_invalid_url(self, temp_dir, fake_ydl):
        resolver = YoutubeSourceResolver()

        with pytest.raises(InvalidInputError) as exc_info:
            await resolver.resolve("not-a-url")

        assert exc_info.value.message == "Invalid YouTube URL."
        assert fake_ydl.instances == []

    @pytest.mark.asyncio
    async def test_downloads_to_temp_dir(self, temp_dir, fake_ydl):
        resolver = YoutubeSourceResolver(buffer_size=4096)

        path = await resolver.resolve(VIDEO_URL)

        assert path.parent == temp_dir
        assert path.suffix == ".webm"
        assert path.read_bytes() == b"webm-audio"

        ydl = fake_ydl.instances[0]
        assert ydl.extracted == [VIDEO_URL]
        assert ydl.destination == path
        assert ydl.params["format"] == "bestaudio[ext=webm]/bestaudio"
        assert ydl.params["buffersize"] == 4096
        assert ydl.params["nopart"] is True
        assert ydl.params["noplaylist"] is True

    @pytest.mark.asyncio
    async def test_each_download_gets_unique_name(self, temp_dir, fake_ydl):
        resolver = YoutubeSourceResolver()

        first = await resolver.resolve(VIDEO_URL)
        second = await resolver.resolve(VIDEO_URL)

        assert first != second

    @pytest.mark.asyncio
    async def test_reported_size_over_cap_skips_download(self, temp_dir, fake_ydl):
        fake_ydl.info = {"id": "dQw4w9WgXcQ", "filesize": 30 * MB}
        resolver = YoutubeSourceResolver()

        with pytest.raises(PayloadTooLargeError) as exc_info:
            await resolver.resolve(VIDEO_URL, max_bytes=25 * MB)

        assert exc_info.value.message == "YouTube audio exceeds the 25 MB limit."
        assert fake_ydl.instances[0].downloaded is False
        assert list(temp_dir.iterdir()) == []

    @pytest.mark.asyncio
    async def test_reported_size_ignored_without_cap(self, temp_dir, fake_ydl):
        fake_ydl.info = {"id": "dQw4w9WgXcQ", "filesize": 300 * MB}
        resolver = YoutubeSourceResolver()

        path = await resolver.resolve(VIDEO_URL, max_bytes=None)

        assert path.exists()

    @pytest.mark.asyncio
    async def test_unknown_size_downloads(self, temp_dir, fake_ydl):
        resolver = YoutubeSourceResolver()

        path = await resolver.resolve(VIDEO_URL, max_bytes=25 * MB)

        assert fake_ydl.instances[0].downloaded is True
        assert path.exists()

    @pytest.mark.asyncio
    async def test_download_error_removes_partial_file(self, temp_dir, fake_ydl):
        fake_ydl.download_error = DownloadError("ERROR: unable to download video data")
        resolver = YoutubeSourceResolver()

        with pytest.raises(DownloadError):
            await resolver.resolve(VIDEO_URL)

        assert fake_ydl.instances[0].downloaded is True
        assert list(temp_dir.iterdir()) == []

    @pytest.mark.asyncio
    async def test_download_error_is_logged_with_type(self, temp_dir, fake_ydl):
        fake_ydl.download_error = DownloadError("ERROR: unable to download video data")
        resolver = YoutubeSourceResolver()
        messages = []
        sink_id = logger.add(lambda m: messages.append(m.record["message"]), level="ERROR")

        try:
            with pytest.raises(DownloadError):
                await resolver.resolve(VIDEO_URL)
        finally:
            logger.remove(sink_id)

        assert any(
            "YouTube download failed: DownloadError: ERROR: unable to download video data"
            in message
            for message in messages
        )

    @pytest.mark.asyncio
    async def test_playlist_url_downloads_single_video(self, temp_dir, fake_ydl):
        resolver = YoutubeSourceResolver()

        path = await resolver.resolve(PLAYLIST_VIDEO_URL)

        assert path.exists()
        assert fake_ydl.instances[0].extracted == [VIDEO_URL]

    @pytest.mark.asyncio
    async def test_cancelled_download_removes_file(self, temp_dir, fake_ydl):
        fake_ydl.started = threading.Event()
        fake_ydl.release = threading.Event()
        resolver = YoutubeSourceResolver()

        task = asyncio.create_task(resolver.resolve(VIDEO_URL))
        loop = asyncio.get_running_loop()
        assert await loop.run_in_executor(None, fake_ydl.started.wait, 5)
        assert len(list(temp_dir.iterdir())) == 1

        task.cancel()
        with pytest.raises(asyncio.CancelledError):
            await task

        # The worker thread finishes its write after the request is gone
        fake_ydl.release.set()
        deadline = time.monotonic() + 5
        while list(temp_dir.iterdir()) and time.monotonic() < deadline:
            await asyncio.sleep(0.01)

        assert list(temp_dir.iterdir()) == []
