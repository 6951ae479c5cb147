"""Placeholder nickname allocation."""

from __future__ import annotations

import logging
import os
import random
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Callable

GUEST_NICK_PREFIX = os.environ.get("GUEST_NICK_PREFIX", "Guest")
NICK_MAX_LEN = int(os.environ.get("NICK_MAX_LEN", "30"))
PLACEHOLDER_ATTEMPTS = 30
SUFFIX_MAX = 9999

_SYSTEM_RANDOM = random.SystemRandom()

logger = logging.getLogger("identity.nicks")


def placeholder_nick(number: int, *, prefix: str = GUEST_NICK_PREFIX, max_len: int = NICK_MAX_LEN) -> str:
    """Build ``prefix + number``, trimming the prefix so the result fits ``max_len``."""
    suffix = str(number)
    return prefix[: max(max_len - len(suffix), 0)] + suffix


def allocate_placeholder_nick(
    is_taken: Callable[[str], bool],
    *,
    prefix: str = GUEST_NICK_PREFIX,
    attempts: int = PLACEHOLDER_ATTEMPTS,
    max_len: int = NICK_MAX_LEN,
    rng: random.Random | None = None,
) -> str:
    """Pick a placeholder nickname nobody currently holds.

    Random suffixes are tried first. If every attempt collides, the suffix
    space is scanned in order starting after the last candidate, so a free
    nickname is always found when one exists. Only a completely occupied
    space falls back to the last candidate.

    Args:
        is_taken: Returns True when a nickname is held by a live session.
        prefix: Placeholder prefix.
        attempts: Number of random candidates to try.
        max_len: Host nickname length limit.
        rng: Random source, defaults to the system CSPRNG.

    Returns:
        A nickname; this function never raises for lack of candidates.

    """
    rng = rng or _SYSTEM_RANDOM
    number = SUFFIX_MAX
    candidate = placeholder_nick(number, prefix=prefix, max_len=max_len)
    for _ in range(attempts):
        number = rng.randint(1, SUFFIX_MAX)
        candidate = placeholder_nick(number, prefix=prefix, max_len=max_len)
        if not is_taken(candidate):
            return candidate

    logger.info("%d random placeholder attempts collided; scanning", attempts)
    for offset in range(1, SUFFIX_MAX + 1):
        scanned = placeholder_nick((number + offset - 1) % SUFFIX_MAX + 1, prefix=prefix, max_len=max_len)
        if not is_taken(scanned):
            return scanned

    logger.warning("Every %s placeholder is taken; reusing %s", prefix, candidate)
    return candidate
