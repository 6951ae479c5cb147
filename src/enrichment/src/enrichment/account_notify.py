"""Notify the web application when a services account is dropped."""

from __future__ import annotations

import logging
import os
from typing import TYPE_CHECKING

from enrichment.fetch import fetch
from enrichment.results import TransportError

if TYPE_CHECKING:
    from services_api import AccountDeleted

ACCOUNT_NOTIFY_URL = os.environ.get("ACCOUNT_NOTIFY_URL")
NOTIFY_TIMEOUT_SECONDS = float(os.environ.get("NOTIFY_TIMEOUT_SECONDS", "5"))

logger = logging.getLogger("enrichment.account_notify")


def _notify_url() -> str:
    if not ACCOUNT_NOTIFY_URL:
        error_message = "ACCOUNT_NOTIFY_URL is required."
        raise RuntimeError(error_message)
    return ACCOUNT_NOTIFY_URL


def notify_account_deleted(username: str) -> bool:
    """POST the deleted username to the web application.

    Returns:
        True when the endpoint accepted the notification.

    """
    result = fetch(
        _notify_url(),
        method="POST",
        headers={"Content-Type": "application/json"},
        json_body={"username": username},
        timeout=NOTIFY_TIMEOUT_SECONDS,
    )
    if isinstance(result, TransportError):
        logger.error("Request failed for deleted account %s: %s", username, result.detail)
        return False
    logger.info("Web application notified about deleted account %s.", username)
    return True


def handle_account_deleted(event: AccountDeleted) -> None:
    """Log the drop and forward it; failures never leave this function."""
    if event.forced:
        logger.info("Account %s forcibly deleted.", event.account_name)
    else:
        logger.info("Account %s has been deleted.", event.account_name)
    try:
        notify_account_deleted(event.account_name)
    except RuntimeError:
        logger.exception("Cannot notify about deleted account %s", event.account_name)
