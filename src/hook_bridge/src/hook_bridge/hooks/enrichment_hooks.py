"""Register the external-call handlers."""

from enrichment import handle_account_deleted, handle_channel_message
from hook_bridge.hooks.registry import register_hook

register_hook("channel_message", handle_channel_message)
register_hook("account_deleted", handle_account_deleted)
