"""Render lookup results as single IRC lines."""

from __future__ import annotations

from enrichment.results import EnrichmentResult, Incomplete, NotFound, ParseError, Success, TransportError
from enrichment.text import MESSAGE_MAX_BYTES, is_control_char, truncate_bytes

# Bold, black-on-white "You", white-on-red "Tube", reset, bold.
BRAND_PREFIX = "\x02\x0301,00You\x0300,04Tube\x0f\x02"


def format_result(result: EnrichmentResult, max_bytes: int = MESSAGE_MAX_BYTES) -> str:
    """Return the user-facing line for a lookup result."""
    if isinstance(result, Success):
        title, author, metric = (_plain(field) for field in (result.title, result.author, result.metric))
        line = f'{BRAND_PREFIX} "{title}" by {author} with {metric} views.'
    elif isinstance(result, NotFound):
        line = "No metadata found for the video."
    elif isinstance(result, Incomplete):
        line = "Incomplete metadata found for the video."
    elif isinstance(result, TransportError):
        line = f"Failed to fetch YouTube metadata: {_plain(result.detail)}"
    elif isinstance(result, ParseError):
        line = f"Error: Failed to parse YouTube API response: {_plain(result.detail)}"
    else:
        msg = f"Unsupported result: {result!r}"
        raise TypeError(msg)
    return truncate_bytes(line, max_bytes)


def is_broadcast(result: EnrichmentResult) -> bool:
    """Return True when the result may be sent to the whole channel."""
    return isinstance(result, Success)


def _plain(text: str) -> str:
    """Flatten line breaks to spaces and drop every other control byte from remote text."""
    flattened = text.replace("\r", " ").replace("\n", " ")
    return "".join(char for char in flattened if not is_control_char(char))
