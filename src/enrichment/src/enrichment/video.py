"""Video link enrichment for channel messages.

When a message in a channel with an assigned bot links to a video, the bot
looks the video up and announces its title, uploader and view count. Lookup
failures are reported privately to the sender only.
"""

from __future__ import annotations

import logging
import os
import re
from typing import TYPE_CHECKING

import services_api
from enrichment.fetch import fetch
from enrichment.formatter import format_result, is_broadcast
from enrichment.parser import parse_lookup
from enrichment.results import EnrichmentResult, TransportError
from enrichment.text import strip_formatting

if TYPE_CHECKING:
    from services_api import ChannelMessage

YOUTUBE_API_KEY = os.environ.get("YOUTUBE_API_KEY")
YOUTUBE_API_URL = os.environ.get("YOUTUBE_API_URL", "https://www.googleapis.com/youtube/v3/videos")
LOOKUP_TIMEOUT_SECONDS = float(os.environ.get("LOOKUP_TIMEOUT_SECONDS", "5"))

_VIDEO_ID = re.compile(r"[A-Za-z0-9_-]{11}")
_VIDEO_LINK = re.compile(
    r"https?://(?:(?:www\.|m\.)?youtube\.com/watch\?v=|youtu\.be/)([A-Za-z0-9_-]{11})",
    re.IGNORECASE,
)

logger = logging.getLogger("enrichment.video")


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def extract_video_id(text: str) -> str | None:
    """Return the first video id linked from ``text``, if any."""
    match = _VIDEO_LINK.search(strip_formatting(text))
    if match is None:
        return None
    video_id = match.group(1)
    if not is_valid_video_id(video_id):
        return None
    return video_id


def is_valid_video_id(video_id: str) -> bool:
    """Return True when ``video_id`` is safe to send to the lookup endpoint."""
    return _VIDEO_ID.fullmatch(video_id) is not None


def lookup_video(video_id: str, api_key: str, *, timeout: float = LOOKUP_TIMEOUT_SECONDS) -> EnrichmentResult:
    """Fetch and parse metadata for a single video."""
    body = fetch(
        YOUTUBE_API_URL,
        params={"id": video_id, "key": api_key, "part": "snippet,statistics"},
        timeout=timeout,
    )
    if isinstance(body, TransportError):
        return body
    return parse_lookup(body)


# ---------------------------------------------------------------------------
# Hook handler
# ---------------------------------------------------------------------------


def handle_channel_message(event: ChannelMessage) -> None:
    """Announce metadata for a video linked in a channel message."""
    video_id = extract_video_id(event.raw_text)
    if video_id is None:
        return

    bot = services_api.get_channel_directory().assigned_bot(event.channel_id)
    if bot is None:
        return

    if not YOUTUBE_API_KEY:
        logger.warning("YOUTUBE_API_KEY is not set; skipping lookup for %s", video_id)
        return

    result = lookup_video(video_id, YOUTUBE_API_KEY)
    line = format_result(result)
    messenger = services_api.get_messenger()
    if is_broadcast(result):
        messenger.broadcast_to_channel(event.channel_id, line, source=bot)
        return
    logger.info("Lookup for %s in %s ended with %s", video_id, event.channel_id, result.kind)
    messenger.notify_privately(event.sender_id, line, source=bot)
