"""Text helpers for IRC payloads: formatting removal and byte-bounded lines."""

from __future__ import annotations

import re

MESSAGE_MAX_BYTES = 512

# mIRC colour (\x03) takes up to two "fg[,bg]" digit params, hex colour (\x04) takes six-digit params.
_COLOR_SEQUENCE = re.compile(r"\x03(?:[0-9]{1,2}(?:,[0-9]{1,2})?)?|\x04(?:[0-9A-Fa-f]{6}(?:,[0-9A-Fa-f]{6})?)?")


def is_control_char(char: str) -> bool:
    """Return True for C0 control characters and DEL."""
    code = ord(char)
    return code < 0x20 or code == 0x7F  # noqa: PLR2004


def strip_formatting(text: str) -> str:
    """Remove colour sequences and every control character from ``text``."""
    without_colors = _COLOR_SEQUENCE.sub("", text)
    return "".join(char for char in without_colors if not is_control_char(char))


def truncate_bytes(text: str, max_bytes: int = MESSAGE_MAX_BYTES) -> str:
    """Cut ``text`` so its UTF-8 encoding fits ``max_bytes`` without splitting a character."""
    encoded = text.encode("utf-8")
    if len(encoded) <= max_bytes:
        return text
    return encoded[:max_bytes].decode("utf-8", errors="ignore")
