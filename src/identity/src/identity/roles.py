"""Operator rank shown in account INFO output.

Operators set a free-text rank with ``SETROLE <account> <role>``; anyone
viewing the account's INFO sees it. Privilege checks are done by the host
before the command reaches this module.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

import services_api
from enrichment.text import is_control_char

if TYPE_CHECKING:
    from collections.abc import Sequence

NETWORK_ROLE_KEY = "private:network_role"
ROLE_MAX_LEN = 64
_FORBIDDEN_ROLE_CHARS = {";"}

logger = logging.getLogger("identity.roles")


class ValidationError(ValueError):
    """Raised when operator-supplied input is unsafe to store."""


def validate_role(role: str) -> str:
    """Return ``role`` stripped of surrounding spaces, or raise ValidationError."""
    cleaned = role.strip()
    if not cleaned:
        msg = "Role cannot be empty."
        raise ValidationError(msg)
    if any(is_control_char(char) or char in _FORBIDDEN_ROLE_CHARS for char in cleaned):
        msg = "Invalid role name. Role cannot contain newlines, control characters or semicolons."
        raise ValidationError(msg)
    if len(cleaned) > ROLE_MAX_LEN:
        msg = f"Invalid role name. Role cannot be longer than {ROLE_MAX_LEN} characters."
        raise ValidationError(msg)
    return cleaned


# ---------------------------------------------------------------------------
# Command handler
# ---------------------------------------------------------------------------


def set_role(params: Sequence[str], *, source: str) -> dict[str, str]:
    """Handle ``SETROLE <account> <role>``.

    Args:
        params: Command parameters; everything after the account is the role.
        source: Nickname of the operator issuing the command.

    Returns:
        A result payload with ``type``, ``code`` and ``message``.

    """
    if len(params) < 2:  # noqa: PLR2004
        return {"type": "error", "code": "needmoreparams", "message": "Usage: SETROLE <account> <role>"}

    account_name = params[0]
    accounts = services_api.get_account_store()
    if not accounts.exists(account_name):
        return {
            "type": "error",
            "code": "nosuch_target",
            "message": f"Account \x02{account_name}\x02 does not exist.",
        }

    try:
        role = validate_role(" ".join(params[1:]))
    except ValidationError as exc:
        return {"type": "error", "code": "badparams", "message": str(exc)}

    accounts.set_metadata(account_name, NETWORK_ROLE_KEY, role)
    logger.info("%s SETROLE: %s %s", source, account_name, role)
    return {
        "type": "success",
        "code": "role_set",
        "message": f"OPer rank \x02{role}\x02 has been set for account \x02{account_name}\x02.",
    }


def account_info_lines(account: str) -> list[str]:
    """Return the INFO lines contributed for an account."""
    role = services_api.get_account_store().get_metadata(account, NETWORK_ROLE_KEY)
    if role is None:
        return []
    return [f"Oper rank  : {role}"]
