"""
Source Resolver Interface - Abstract interface for turning a remote media URL
into a local audio file.
"""

from abc import ABC, abstractmethod
from pathlib import Path
from typing import Optional


class ISourceResolver(ABC):
    """
    Abstract interface for acquiring remote audio.

    Implementations:
    - infrastructure.youtube.source_resolver.YoutubeSourceResolver
    """

    @abstractmethod
    async def resolve(self, url: str, max_bytes: Optional[int] = None) -> Path:
        """
        Download the audio behind `url` to a uniquely named temp file.

        Args:
            url: Remote media URL (already trimmed)
            max_bytes: Optional size cap; implementations that can learn the
                size before downloading should refuse oversized media early

        Returns:
            Path of the downloaded file. The caller owns it and must delete it.

        Raises:
            InvalidInputError: If the URL is not supported
            PayloadTooLargeError: If the media is known to exceed max_bytes
            Exception: Download failures propagate unchanged
        """
        pass
