"""Hook and command registry for the services bridge."""

from __future__ import annotations

import logging
from collections.abc import Callable
from typing import Any

HookHandler = Callable[[Any], Any]
CommandHandler = Callable[..., dict[str, str]]

HOOK_NAMES = frozenset(
    {
        "channel_message",
        "account_deleted",
        "session_authenticated",
        "session_logging_out",
        "account_info",
    }
)

_HOOK_HANDLERS: dict[str, list[HookHandler]] = {}
_COMMAND_HANDLERS: dict[str, CommandHandler] = {}
logger = logging.getLogger("hook_bridge.hooks")


# ---------------------------------------------------------------------------
# Registry API
# ---------------------------------------------------------------------------


def register_hook(name: str, handler: HookHandler) -> None:
    """Attach a handler to a named host hook."""
    if name not in HOOK_NAMES:
        msg = f"Unknown hook: {name}"
        raise ValueError(msg)
    handlers = _HOOK_HANDLERS.setdefault(name, [])
    if handler in handlers:
        msg = f"Hook handler already registered: {name}"
        raise ValueError(msg)
    handlers.append(handler)


def register_command(name: str, handler: CommandHandler) -> None:
    """Bind a services command name to its handler."""
    key = name.lower()
    if key in _COMMAND_HANDLERS:
        msg = f"Command already registered: {name}"
        raise ValueError(msg)
    _COMMAND_HANDLERS[key] = handler


def list_hooks() -> dict[str, list[str]]:
    """Return handler names per hook."""
    return {name: [handler.__name__ for handler in handlers] for name, handlers in _HOOK_HANDLERS.items()}


def run_hook(name: str, event: object) -> list[object]:
    """Run every handler of a hook in registration order.

    A failing handler is logged and reported in the results; it never stops
    the remaining handlers.
    """
    results: list[object] = []
    for handler in list(_HOOK_HANDLERS.get(name, [])):
        try:
            results.append(handler(event))
        except Exception as exc:  # noqa: BLE001
            logger.exception("Hook handler failed (%s: %s)", name, handler.__name__)
            results.append({"type": "error", "code": "hook_failed", "message": str(exc), "hook": name})
    return results


def run_command(name: str, params: list[str], *, source: str) -> dict[str, str]:
    """Execute a registered command."""
    handler = _COMMAND_HANDLERS.get(name.lower())
    if handler is None:
        label = name or "unknown"
        return {"type": "error", "code": "unknown_command", "message": f"Unknown command: {label}"}
    try:
        return handler(params, source=source)
    except Exception as exc:  # noqa: BLE001
        logger.exception("Command failed (%s)", name)
        return {"type": "error", "code": "command_failed", "message": str(exc)}
