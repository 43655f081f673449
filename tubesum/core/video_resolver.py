"""
Resolve YouTube links to video ids and metadata.
"""

import asyncio
from typing import Optional, Tuple
from urllib.parse import urlparse, parse_qs

from pytubefix import YouTube

from tubesum.config import config
from tubesum.models.schemas import VideoInfo
from tubesum.utils.errors import ExternalApiError, InvalidInputError
from tubesum.utils.logger import logging

WATCH_URL = "https://www.youtube.com/watch?v={video_id}"
YOUTUBE_DOMAIN = "youtube.com"


def is_youtube_url(url: str) -> bool:
    """Whether the host of ``url`` is youtube.com or one of its subdomains."""
    try:
        hostname = (urlparse(url).hostname or "").lower()
    except (TypeError, ValueError):
        return False
    return hostname == YOUTUBE_DOMAIN or hostname.endswith("." + YOUTUBE_DOMAIN)


def extract_video_id(url: str) -> Optional[str]:
    """Return the ``v`` query parameter of a YouTube link, or None."""
    try:
        query = parse_qs(urlparse(url).query)
    except (TypeError, ValueError):
        return None

    values = query.get("v")
    if not values or not values[0]:
        return None
    return values[0]


def parse_video_id(url: str) -> str:
    """Like ``extract_video_id`` but raises InvalidInputError when there is no id."""
    video_id = extract_video_id(url)
    if not video_id:
        raise InvalidInputError(f"No video id found in {url!r}")
    return video_id


def watch_url(video_id: str) -> str:
    return WATCH_URL.format(video_id=video_id)


def _lookup_metadata(video_id: str) -> Tuple[str, str]:
    yt = YouTube(watch_url(video_id), client=config.VIDEO_INFO_CLIENT)
    return yt.title, yt.author


async def resolve_video(video_id: str) -> VideoInfo:
    """
    Fetch title and author of a video.

    Only the basic metadata is read; no stream or player data is requested.
    The pytubefix lookup blocks, so it runs in a worker thread.

    Raises:
        ExternalApiError: if the lookup fails or returns no metadata
    """
    try:
        title, author = await asyncio.to_thread(_lookup_metadata, video_id)
    except Exception as e:
        raise ExternalApiError(f"Video info lookup failed for {video_id}: {e}") from e

    if not title:
        raise ExternalApiError(f"Video info lookup returned no title for {video_id}")

    logging.debug(f"Resolved {video_id}: {title!r} by {author!r}")
    return VideoInfo(video_id=video_id, title=title, author=author or "")
