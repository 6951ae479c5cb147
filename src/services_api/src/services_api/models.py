"""Pydantic schemas shared between the host and the hook handlers."""

from __future__ import annotations

from typing import Annotated, Literal

from pydantic import BaseModel, ConfigDict, Field

__all__ = [
    "AccountDeleted",
    "ChannelMessage",
    "HostAction",
    "Session",
    "SessionAuthenticated",
    "SessionLoggingOut",
    "TriggerEvent",
    "irc_casefold",
]

_RFC1459_UPPER = "ABCDEFGHIJKLMNOPQRSTUVWXYZ[]\\~"
_RFC1459_LOWER = "abcdefghijklmnopqrstuvwxyz{}|^"
_RFC1459_TABLE = str.maketrans(_RFC1459_UPPER, _RFC1459_LOWER)


def irc_casefold(nick: str) -> str:
    """Fold a nickname using RFC 1459 case mapping."""
    return nick.translate(_RFC1459_TABLE)


class Session(BaseModel):
    """A live client connection as seen by the services host."""

    model_config = ConfigDict(frozen=True)

    session_id: str
    nick: str
    account: str | None = None


class HostAction(BaseModel):
    """Record of one output primitive applied by the host."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["notice", "privmsg", "rename", "terminate"]
    target: str
    text: str
    source: str | None = None


# ---------------------------------------------------------------------------
# Trigger events
# ---------------------------------------------------------------------------


class ChannelMessage(BaseModel):
    """A message sent to a channel."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["channel_message"] = "channel_message"
    channel_id: str
    sender_id: str
    raw_text: str


class AccountDeleted(BaseModel):
    """An account was dropped, by its owner or forcibly by an operator."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["account_deleted"] = "account_deleted"
    account_name: str
    forced: bool = False


class SessionAuthenticated(BaseModel):
    """A session identified to an account."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["session_authenticated"] = "session_authenticated"
    session_id: str
    account_name: str
    current_nick: str


class SessionLoggingOut(BaseModel):
    """A session is about to log out of its account."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["session_logging_out"] = "session_logging_out"
    session_id: str


TriggerEvent = Annotated[
    ChannelMessage | AccountDeleted | SessionAuthenticated | SessionLoggingOut,
    Field(discriminator="kind"),
]
