"""Abstract interfaces for the services host.

The host daemon owns the session and account tables and the outbound message
primitives. Hook handlers only ever reach them through these contracts, which
an implementation package binds via its ``register()`` function.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Sequence

    from services_api.models import Session

__all__ = [
    "AccountStore",
    "ChannelDirectory",
    "HostError",
    "Messenger",
    "SessionRegistry",
    "get_account_store",
    "get_channel_directory",
    "get_messenger",
    "get_session_registry",
]


class HostError(Exception):
    """Raised when a host primitive cannot be applied."""


class SessionRegistry(ABC):
    """The contract for the host's table of live sessions."""

    @abstractmethod
    def get(self, session_id: str) -> Session | None:
        """Return a live session by id.

        Args:
            session_id: Host-assigned session identifier.

        Returns:
            The session, or None when it is no longer connected.

        """
        raise NotImplementedError

    @abstractmethod
    def find_by_account(self, account: str) -> Sequence[Session]:
        """Return every live session bound to an account."""
        raise NotImplementedError

    @abstractmethod
    def find_by_nick(self, nick: str) -> Session | None:
        """Return the live session holding a nickname (IRC case-insensitive)."""
        raise NotImplementedError

    @abstractmethod
    def rename(self, session_id: str, nick: str) -> None:
        """Force a session onto a new nickname without confirmation.

        Raises:
            HostError: When the session does not exist.

        """
        raise NotImplementedError

    @abstractmethod
    def terminate(self, session_id: str, reason: str) -> None:
        """Disconnect a session.

        Terminating a session that is already gone is a no-op.

        Args:
            session_id: Session to disconnect.
            reason: Quit reason shown to the network.

        """
        raise NotImplementedError


class AccountStore(ABC):
    """The contract for registered accounts and their metadata."""

    @abstractmethod
    def exists(self, account: str) -> bool:
        """Return True when the account is registered."""
        raise NotImplementedError

    @abstractmethod
    def canonical_nick(self, account: str) -> str | None:
        """Return the nickname registered to the account, if any."""
        raise NotImplementedError

    @abstractmethod
    def get_metadata(self, account: str, key: str) -> str | None:
        """Return a metadata value for an account."""
        raise NotImplementedError

    @abstractmethod
    def set_metadata(self, account: str, key: str, value: str) -> None:
        """Persist a metadata value for an account."""
        raise NotImplementedError


class Messenger(ABC):
    """The contract for outbound text to users and channels."""

    @abstractmethod
    def notify_privately(self, target: str, text: str, *, source: str | None = None) -> None:
        """Send a private notice to a single nickname.

        Args:
            target: Recipient nickname.
            text: Single line of text.
            source: Service or bot nickname the notice comes from.

        """
        raise NotImplementedError

    @abstractmethod
    def broadcast_to_channel(self, channel: str, text: str, *, source: str | None = None) -> None:
        """Send a message to every member of a channel."""
        raise NotImplementedError


class ChannelDirectory(ABC):
    """The contract for channel registration lookups."""

    @abstractmethod
    def assigned_bot(self, channel: str) -> str | None:
        """Return the managed bot nickname assigned to a channel, if any."""
        raise NotImplementedError


# ---------------------------------------------------------------------------
# Factories
# ---------------------------------------------------------------------------


def get_session_registry() -> SessionRegistry:
    """Return the active session registry implementation."""
    raise NotImplementedError


def get_account_store() -> AccountStore:
    """Return the active account store implementation."""
    raise NotImplementedError


def get_messenger() -> Messenger:
    """Return the active messenger implementation."""
    raise NotImplementedError


def get_channel_directory() -> ChannelDirectory:
    """Return the active channel directory implementation."""
    raise NotImplementedError
