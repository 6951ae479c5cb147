"""In-memory services host.

Concrete implementation of every ``services_api`` contract backed by plain
dictionaries. Output primitives are recorded as ``HostAction`` entries so a
caller can inspect what the hooks did; the same object is used by the hook
bridge service when no daemon adapter is registered.
"""

from __future__ import annotations

import logging

import services_api
from services_api import client as api_client
from services_api import (
    AccountStore,
    ChannelDirectory,
    HostAction,
    HostError,
    Messenger,
    Session,
    SessionRegistry,
    irc_casefold,
)

logger = logging.getLogger("memory_services_impl")

# ---------------------------------------------------------------------------
# Host implementation
# ---------------------------------------------------------------------------


class MemoryHost(SessionRegistry, AccountStore, Messenger, ChannelDirectory):
    """Session table, account table and outbox kept in process memory.

    Attributes:
        actions: Output primitives applied so far, oldest first.

    """

    def __init__(self) -> None:
        """Create an empty host."""
        self._sessions: dict[str, Session] = {}
        self._accounts: dict[str, str | None] = {}
        self._metadata: dict[str, dict[str, str]] = {}
        self._bots: dict[str, str] = {}
        self.actions: list[HostAction] = []

    # -- seeding ------------------------------------------------------------

    def connect(self, session_id: str, nick: str, account: str | None = None) -> Session:
        """Add a live session."""
        if self.find_by_nick(nick) is not None:
            msg = f"Nickname already in use: {nick}"
            raise HostError(msg)
        session = Session(session_id=session_id, nick=nick, account=account)
        self._sessions[session_id] = session
        return session

    def identify(self, session_id: str, account: str) -> Session:
        """Bind a live session to an account."""
        session = self._require(session_id)
        updated = session.model_copy(update={"account": account})
        self._sessions[session_id] = updated
        return updated

    def register_account(self, account: str, nick: str | None = None) -> None:
        """Register an account, optionally with its own nickname."""
        self._accounts[irc_casefold(account)] = nick
        self._metadata.setdefault(irc_casefold(account), {})

    def assign_bot(self, channel: str, bot: str) -> None:
        """Assign a managed bot to a channel."""
        self._bots[channel.lower()] = bot

    def sessions(self) -> list[Session]:
        """Return a snapshot of every live session."""
        return list(self._sessions.values())

    # -- SessionRegistry ----------------------------------------------------

    def get(self, session_id: str) -> Session | None:
        """Return a live session by id."""
        return self._sessions.get(session_id)

    def find_by_account(self, account: str) -> list[Session]:
        """Return every live session bound to an account."""
        folded = irc_casefold(account)
        return [s for s in self._sessions.values() if s.account is not None and irc_casefold(s.account) == folded]

    def find_by_nick(self, nick: str) -> Session | None:
        """Return the live session holding a nickname."""
        folded = irc_casefold(nick)
        for session in self._sessions.values():
            if irc_casefold(session.nick) == folded:
                return session
        return None

    def rename(self, session_id: str, nick: str) -> None:
        """Force a session onto a new nickname."""
        session = self._require(session_id)
        holder = self.find_by_nick(nick)
        if holder is not None and holder.session_id != session_id:
            msg = f"Nickname already in use: {nick}"
            raise HostError(msg)
        self._sessions[session_id] = session.model_copy(update={"nick": nick})
        self.actions.append(HostAction(kind="rename", target=session.nick, text=nick))

    def terminate(self, session_id: str, reason: str) -> None:
        """Disconnect a session; unknown sessions are ignored."""
        session = self._sessions.pop(session_id, None)
        if session is None:
            logger.debug("Session %s already gone", session_id)
            return
        self.actions.append(HostAction(kind="terminate", target=session.nick, text=reason))

    # -- AccountStore -------------------------------------------------------

    def exists(self, account: str) -> bool:
        """Return True when the account is registered."""
        return irc_casefold(account) in self._accounts

    def canonical_nick(self, account: str) -> str | None:
        """Return the nickname registered to the account."""
        return self._accounts.get(irc_casefold(account))

    def get_metadata(self, account: str, key: str) -> str | None:
        """Return a metadata value for an account."""
        return self._metadata.get(irc_casefold(account), {}).get(key)

    def set_metadata(self, account: str, key: str, value: str) -> None:
        """Persist a metadata value for a registered account."""
        if not self.exists(account):
            msg = f"Unknown account: {account}"
            raise HostError(msg)
        self._metadata[irc_casefold(account)][key] = value

    # -- Messenger ----------------------------------------------------------

    def notify_privately(self, target: str, text: str, *, source: str | None = None) -> None:
        """Record a private notice."""
        self.actions.append(HostAction(kind="notice", target=target, text=text, source=source))

    def broadcast_to_channel(self, channel: str, text: str, *, source: str | None = None) -> None:
        """Record a channel message."""
        self.actions.append(HostAction(kind="privmsg", target=channel, text=text, source=source))

    # -- ChannelDirectory ---------------------------------------------------

    def assigned_bot(self, channel: str) -> str | None:
        """Return the bot assigned to a channel."""
        return self._bots.get(channel.lower())

    # -- helpers ------------------------------------------------------------

    def _require(self, session_id: str) -> Session:
        session = self._sessions.get(session_id)
        if session is None:
            msg = f"Unknown session: {session_id}"
            raise HostError(msg)
        return session


# ---------------------------------------------------------------------------
# Factory
# ---------------------------------------------------------------------------

_HOST = MemoryHost()


def get_host_impl() -> MemoryHost:
    """Return the process-wide in-memory host."""
    return _HOST


def reset_host_impl() -> MemoryHost:
    """Replace the process-wide host with an empty one and return it."""
    global _HOST  # noqa: PLW0603
    _HOST = MemoryHost()
    return _HOST


# ---------------------------------------------------------------------------
# Factory registration
# ---------------------------------------------------------------------------


def register() -> None:
    """Bind the in-memory host into the services_api factories."""
    for module in (services_api, api_client):
        module.get_session_registry = get_host_impl
        module.get_account_store = get_host_impl
        module.get_messenger = get_host_impl
        module.get_channel_directory = get_host_impl
