"""Hook handlers that call external HTTP services."""

from enrichment.account_notify import handle_account_deleted, notify_account_deleted
from enrichment.video import extract_video_id, handle_channel_message, lookup_video

__all__ = [
    "extract_video_id",
    "handle_account_deleted",
    "handle_channel_message",
    "lookup_video",
    "notify_account_deleted",
]
