"""Register the login/logout enforcement and operator rank handlers."""

from __future__ import annotations

from typing import TYPE_CHECKING

from hook_bridge.hooks.registry import register_command, register_hook
from identity import account_info_lines, default_controller, set_role

if TYPE_CHECKING:
    from services_api import SessionAuthenticated, SessionLoggingOut


# ---------------------------------------------------------------------------
# Hook handlers
# ---------------------------------------------------------------------------


def enforce_account_nick(event: SessionAuthenticated) -> None:
    """Run login enforcement against the registered host."""
    default_controller().handle_authenticated(event)


def apply_guest_nick(event: SessionLoggingOut) -> bool:
    """Run logout enforcement against the registered host."""
    return default_controller().handle_logging_out(event)


# ---------------------------------------------------------------------------
# Registrations
# ---------------------------------------------------------------------------


register_hook("session_authenticated", enforce_account_nick)
register_hook("session_logging_out", apply_guest_nick)
register_hook("account_info", account_info_lines)
register_command("setrole", set_role)
