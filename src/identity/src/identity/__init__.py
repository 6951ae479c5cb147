"""Account identity hooks: nickname enforcement and operator ranks."""

from identity.controller import IdentityController, default_controller
from identity.nicks import allocate_placeholder_nick
from identity.roles import ValidationError, account_info_lines, set_role, validate_role

__all__ = [
    "IdentityController",
    "ValidationError",
    "account_info_lines",
    "allocate_placeholder_nick",
    "default_controller",
    "set_role",
    "validate_role",
]
