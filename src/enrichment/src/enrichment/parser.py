"""Defensive parsing of video metadata documents.

The expected shape is::

    {"items": [{"snippet": {"title": ..., "channelTitle": ...},
                "statistics": {"viewCount": ...}}]}

Nothing here raises on bad input: every failure is reported as one of the
``EnrichmentResult`` variants.
"""

from __future__ import annotations

import json
from typing import Any

from enrichment.results import EnrichmentResult, Incomplete, NotFound, ParseError, Success

_MISSING = object()


def parse_document(body: bytes | str) -> Any | ParseError:  # noqa: ANN401
    """Decode a JSON body, keeping the decoder's message on failure."""
    try:
        return json.loads(body)
    except UnicodeDecodeError as exc:
        return ParseError(detail=f"invalid UTF-8 at byte {exc.start}")
    except json.JSONDecodeError as exc:
        return ParseError(detail=exc.msg if body else "empty response body")
    except RecursionError:
        return ParseError(detail="document nested too deeply")


def extract_record(document: Any) -> EnrichmentResult:  # noqa: ANN401
    """Turn a decoded document into Success, NotFound or Incomplete."""
    items = _lookup(document, "items")
    if not isinstance(items, list) or not items:
        return NotFound()

    first = items[0]
    title = _lookup(first, "snippet", "title")
    author = _lookup(first, "snippet", "channelTitle")
    metric = _lookup(first, "statistics", "viewCount")
    if not isinstance(title, str) or not isinstance(author, str):
        return Incomplete()
    # The API sends counts as strings; accept plain integers too, but never booleans.
    if isinstance(metric, int) and not isinstance(metric, bool):
        metric = str(metric)
    if not isinstance(metric, str):
        return Incomplete()
    return Success(title=title, author=author, metric=metric)


def parse_lookup(body: bytes | str) -> EnrichmentResult:
    """Parse a raw lookup response body into a single result variant."""
    document = parse_document(body)
    if isinstance(document, ParseError):
        return document
    return extract_record(document)


def _lookup(node: Any, *path: str) -> Any:  # noqa: ANN401
    for key in path:
        if not isinstance(node, dict):
            return _MISSING
        node = node.get(key, _MISSING)
    return node
