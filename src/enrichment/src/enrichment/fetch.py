"""Single-shot outbound HTTP requests with a hard timeout."""

from __future__ import annotations

import logging
import time
from typing import Any
from urllib.parse import urlsplit

import requests

from enrichment.results import TransportError

DEFAULT_TIMEOUT_SECONDS = 5.0
USER_AGENT = "services-hooks/0.1"
# Byte-sized reads return as soon as data arrives, so a slow sender cannot stall past the deadline.
READ_CHUNK_BYTES = 1

logger = logging.getLogger("enrichment.fetch")


def fetch(  # noqa: PLR0913
    url: str,
    *,
    method: str = "GET",
    headers: dict[str, str] | None = None,
    params: dict[str, str] | None = None,
    json_body: Any = None,  # noqa: ANN401
    timeout: float = DEFAULT_TIMEOUT_SECONDS,
) -> bytes | TransportError:
    """Issue exactly one request and return the raw body.

    Args:
        url: Absolute URL to call.
        method: HTTP method.
        headers: Extra request headers; a User-Agent is always sent.
        params: Query string parameters.
        json_body: Payload serialized as the JSON request body.
        timeout: Total time allowed for the call, body included, in seconds.

    Returns:
        The response body, or a TransportError describing why the call failed.
        Timeouts, connection failures and non-2xx statuses are all transport
        errors; nothing is retried.

    """
    request_headers = {"User-Agent": USER_AGENT}
    if headers:
        request_headers.update(headers)
    deadline = time.monotonic() + timeout
    try:
        with requests.request(
            method,
            url,
            headers=request_headers,
            params=params,
            json=json_body,
            timeout=timeout,
            stream=True,
        ) as response:
            response.raise_for_status()
            body = _read_body(response, deadline)
    except requests.Timeout:
        logger.warning("%s %s timed out after %ss", method, _redacted(url), timeout)
        return TransportError(detail=f"Timed out after {timeout:g} seconds")
    except requests.HTTPError as exc:
        status = exc.response.status_code if exc.response is not None else "unknown"
        logger.warning("%s %s returned HTTP %s", method, _redacted(url), status)
        return TransportError(detail=f"HTTP {status}")
    except requests.ConnectionError:
        logger.warning("%s %s failed: connection error", method, _redacted(url))
        return TransportError(detail=f"Could not connect to {urlsplit(url).hostname or url}")
    except requests.RequestException as exc:
        # Exception text can embed the full URL, query string included.
        logger.warning("%s %s failed: %s", method, _redacted(url), exc.__class__.__name__)
        return TransportError(detail=exc.__class__.__name__)
    return body


def _read_body(response: requests.Response, deadline: float) -> bytes:
    """Read the streamed body, raising ReadTimeout once ``deadline`` passes."""
    body = bytearray()
    for chunk in response.iter_content(chunk_size=READ_CHUNK_BYTES):
        if time.monotonic() > deadline:
            msg = "Response body not received before the deadline"
            raise requests.ReadTimeout(msg)
        body.extend(chunk)
    return bytes(body)


def _redacted(url: str) -> str:
    """Drop the query string so API keys never reach the log."""
    return url.split("?", 1)[0]
