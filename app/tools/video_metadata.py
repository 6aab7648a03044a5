"""YouTube metadata extraction.

Uses yt-dlp in metadata-only mode. The blocking extraction runs in a
worker thread under a timeout; any failure or timeout surfaces as a
ProviderError.
"""

import asyncio
import logging
import re
from datetime import datetime
from typing import Any, Callable, Dict, List, Optional

from yt_dlp import YoutubeDL

from app.config import Settings
from app.exceptions import ProviderError
from app.models.video import VideoContext

logger = logging.getLogger(__name__)

# Comments are not available without the YouTube Data API
SIMULATED_COMMENTS = [
    "Excelente análise técnica!",
    "Consegui 50 pips seguindo essa estratégia",
    "Melhor explicação de forex que já vi",
]

YOUTUBE_URL_PATTERNS = [
    re.compile(r"^(?:https?://)?(?:www\.|m\.|music\.)?youtube\.com/watch\?(?:.*&)?v=([a-zA-Z0-9_-]{11})"),
    re.compile(r"^(?:https?://)?(?:www\.)?youtu\.be/([a-zA-Z0-9_-]{11})"),
    re.compile(r"^(?:https?://)?(?:www\.|m\.)?youtube\.com/(?:embed|shorts|live|v)/([a-zA-Z0-9_-]{11})"),
]

YDL_OPTIONS = {
    "quiet": True,
    "no_warnings": True,
    "extract_flat": False,
    "skip_download": True,
}


def extract_video_id(url: str) -> Optional[str]:
    """Extract the 11-character video id from a YouTube URL."""
    for pattern in YOUTUBE_URL_PATTERNS:
        match = pattern.search(url.strip())
        if match:
            return match.group(1)
    return None


def is_valid_youtube_url(url: str) -> bool:
    return extract_video_id(url) is not None


def _extract_info(url: str) -> Dict[str, Any]:
    """Fetch raw metadata for a video without downloading it."""
    with YoutubeDL(YDL_OPTIONS) as ydl:
        return ydl.extract_info(url, download=False)


def _format_upload_date(upload_date: Optional[str]) -> Optional[str]:
    if not upload_date:
        return None
    try:
        return datetime.strptime(upload_date, "%Y%m%d").strftime("%Y-%m-%d")
    except ValueError:
        return upload_date


def context_from_info(
    info: Dict[str, Any],
    url: str,
    description_max_chars: int = 1000,
    max_tags: int = 10,
    comments: Optional[List[str]] = None,
) -> VideoContext:
    """Map a yt-dlp info dict onto a VideoContext."""
    title = info.get("title") or info.get("fulltitle") or ""
    author = info.get("uploader") or info.get("channel") or info.get("uploader_id") or ""
    description = info.get("description") or ""
    categories = info.get("categories") or []

    return VideoContext(
        url=url,
        title=title,
        description=description[:description_max_chars],
        author=author,
        duration_seconds=int(info.get("duration") or 0),
        tags=list(info.get("tags") or [])[:max_tags],
        top_comments=list(comments or []),
        views=info.get("view_count"),
        upload_date=_format_upload_date(info.get("upload_date")),
        category=categories[0] if categories else None,
        thumbnail_url=info.get("thumbnail"),
        content_extracted=True,
    )


class YouTubeMetadataSource:
    """Fetches video metadata from YouTube via yt-dlp."""

    def __init__(
        self,
        settings: Settings,
        extractor: Callable[[str], Dict[str, Any]] = _extract_info,
    ):
        """Initialize the source.

        Args:
            settings: Application settings (timeouts, truncation limits)
            extractor: Blocking callable returning a yt-dlp info dict
        """
        self.settings = settings
        self._extractor = extractor

    def is_valid_url(self, url: str) -> bool:
        return is_valid_youtube_url(url)

    async def fetch(self, url: str) -> VideoContext:
        """Fetch metadata for ``url``.

        Raises:
            ProviderError: If extraction fails or exceeds the timeout
        """
        logger.info(f"Extracting metadata for {url}")
        try:
            info = await asyncio.wait_for(
                asyncio.to_thread(self._extractor, url),
                timeout=self.settings.metadata_timeout_seconds,
            )
        except asyncio.TimeoutError as e:
            raise ProviderError(
                f"metadata fetch timed out after {self.settings.metadata_timeout_seconds}s",
                provider="youtube",
            ) from e
        except Exception as e:
            raise ProviderError(f"metadata fetch failed: {e}", provider="youtube") from e

        if not info:
            raise ProviderError("metadata fetch returned no data", provider="youtube")

        comments = SIMULATED_COMMENTS if self.settings.simulate_comments else []
        context = context_from_info(
            info,
            url,
            description_max_chars=self.settings.description_max_chars,
            max_tags=self.settings.max_tags,
            comments=comments,
        )
        logger.info(f"Metadata extracted: {context.title}")
        return context
