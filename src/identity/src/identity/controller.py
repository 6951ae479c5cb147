"""Nickname enforcement around account login and logout.

On login the session is moved onto its account's nickname and every other
session still bound to the account is disconnected. On logout the session is
moved onto a freshly allocated placeholder nickname.
"""

from __future__ import annotations

import logging
import os
from typing import TYPE_CHECKING

import services_api
from identity.nicks import allocate_placeholder_nick
from services_api import HostError, irc_casefold

if TYPE_CHECKING:
    from collections.abc import Callable

    from services_api import (
        AccountStore,
        Messenger,
        Session,
        SessionAuthenticated,
        SessionLoggingOut,
        SessionRegistry,
    )

SERVICES_NICK = os.environ.get("SERVICES_NICK", "NickServ")
GHOST_QUIT_REASON = "Nickname reclaimed"

logger = logging.getLogger("identity.controller")


class IdentityController:
    """Keeps each account down to one session holding the account's nickname.

    Attributes:
        _sessions: Host session table.
        _accounts: Host account table.
        _messenger: Host notice primitive.
        _allocate: Placeholder allocator, given a "nickname is taken" predicate.
        _source: Service nickname notices are sent from.

    """

    def __init__(
        self,
        sessions: SessionRegistry,
        accounts: AccountStore,
        messenger: Messenger,
        *,
        allocate: Callable[[Callable[[str], bool]], str] = allocate_placeholder_nick,
        source: str = SERVICES_NICK,
    ) -> None:
        """Bind the controller to host primitives."""
        self._sessions = sessions
        self._accounts = accounts
        self._messenger = messenger
        self._allocate = allocate
        self._source = source

    # -----------------------------------------------------------------------
    # Hooks
    # -----------------------------------------------------------------------

    def handle_authenticated(self, event: SessionAuthenticated) -> None:
        """Enforce the account nickname and disconnect ghost sessions."""
        session = self._sessions.get(event.session_id)
        if session is None:
            logger.info("Session %s left before login enforcement", event.session_id)
            return

        account = event.account_name
        canonical = self._accounts.canonical_nick(account)
        owner_nick = canonical or session.nick

        ghosts = [ghost for ghost in self._sessions.find_by_account(account) if ghost.session_id != session.session_id]
        for ghost in ghosts:
            self._disconnect_ghost(ghost, owner_nick)

        if canonical is None or irc_casefold(session.nick) == irc_casefold(canonical):
            return

        self._release_nick(canonical, keep_session_id=session.session_id)
        self._notice(session.nick, f"You are now logged in as \x02{canonical}\x02. Changing your nickname immediately.")
        self._force_rename(session.session_id, canonical)

    def handle_logging_out(self, event: SessionLoggingOut) -> bool:
        """Move a logging-out session onto a placeholder nickname.

        Returns:
            True; logout always proceeds.

        """
        session = self._sessions.get(event.session_id)
        if session is None:
            return True
        self._notice(session.nick, "You have logged out. Changing your nickname.")
        self._force_rename(session.session_id, self.allocate_placeholder())
        return True

    # -----------------------------------------------------------------------
    # Helpers
    # -----------------------------------------------------------------------

    def allocate_placeholder(self) -> str:
        """Return a placeholder nickname not held by any live session."""
        return self._allocate(lambda nick: self._sessions.find_by_nick(nick) is not None)

    def _disconnect_ghost(self, ghost: Session, owner_nick: str) -> None:
        """Tell a ghost session why it is going away, then disconnect it."""
        try:
            self._notice(ghost.nick, f"Your nickname has been reclaimed by {owner_nick}.")
        except Exception:  # noqa: BLE001
            logger.exception("Failed to notify ghost %s", ghost.nick)
        try:
            self._sessions.terminate(ghost.session_id, GHOST_QUIT_REASON)
        except Exception:  # noqa: BLE001
            logger.exception("Failed to disconnect ghost %s (%s)", ghost.nick, ghost.session_id)

    def _release_nick(self, nick: str, *, keep_session_id: str) -> None:
        """Move whoever else holds ``nick`` onto a placeholder."""
        holder = self._sessions.find_by_nick(nick)
        if holder is None or holder.session_id == keep_session_id:
            return
        self._notice(holder.nick, "This nickname is registered to another account. Changing your nickname.")
        self._force_rename(holder.session_id, self.allocate_placeholder())

    def _force_rename(self, session_id: str, nick: str) -> None:
        try:
            self._sessions.rename(session_id, nick)
        except HostError:
            logger.exception("Failed to rename session %s to %s", session_id, nick)

    def _notice(self, target: str, text: str) -> None:
        self._messenger.notify_privately(target, text, source=self._source)


def default_controller() -> IdentityController:
    """Build a controller over the registered host implementation."""
    return IdentityController(
        services_api.get_session_registry(),
        services_api.get_account_store(),
        services_api.get_messenger(),
    )
