"""Public export surface for ``services_api``."""

from services_api.client import (
    AccountStore,
    ChannelDirectory,
    HostError,
    Messenger,
    SessionRegistry,
    get_account_store,
    get_channel_directory,
    get_messenger,
    get_session_registry,
)
from services_api.models import (
    AccountDeleted,
    ChannelMessage,
    HostAction,
    Session,
    SessionAuthenticated,
    SessionLoggingOut,
    TriggerEvent,
    irc_casefold,
)

__all__ = [
    "AccountDeleted",
    "AccountStore",
    "ChannelDirectory",
    "ChannelMessage",
    "HostAction",
    "HostError",
    "Messenger",
    "Session",
    "SessionAuthenticated",
    "SessionLoggingOut",
    "SessionRegistry",
    "TriggerEvent",
    "get_account_store",
    "get_channel_directory",
    "get_messenger",
    "get_session_registry",
    "irc_casefold",
]
