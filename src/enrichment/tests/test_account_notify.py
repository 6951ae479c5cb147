"""Unit tests for the account deletion notifier."""

from __future__ import annotations

import io
from unittest.mock import Mock

import pytest
import requests
from enrichment import account_notify
from enrichment import fetch as fetch_module

from services_api import AccountDeleted

NOTIFY_URL = "https://web.example.com/accounts/api/delete_user/"


def _response(status: int = 200) -> requests.Response:
    response = requests.Response()
    response.status_code = status
    response.raw = io.BytesIO(b"")
    response.url = NOTIFY_URL
    return response


@pytest.fixture(autouse=True)
def notify_url(monkeypatch: pytest.MonkeyPatch) -> str:
    """Configure the notification endpoint."""
    monkeypatch.setattr(account_notify, "ACCOUNT_NOTIFY_URL", NOTIFY_URL)
    return NOTIFY_URL


def test_deletion_posts_username_once(monkeypatch: pytest.MonkeyPatch) -> None:
    """Exactly one JSON POST is issued for a deleted account."""
    mock_request = Mock(return_value=_response())
    monkeypatch.setattr(fetch_module.requests, "request", mock_request)

    account_notify.handle_account_deleted(AccountDeleted(account_name="alice"))

    mock_request.assert_called_once()
    assert mock_request.call_args.args == ("POST", NOTIFY_URL)
    kwargs = mock_request.call_args.kwargs
    assert kwargs["json"] == {"username": "alice"}
    assert kwargs["headers"]["Content-Type"] == "application/json"
    assert kwargs["timeout"] == account_notify.NOTIFY_TIMEOUT_SECONDS


def test_notify_returns_true_on_success(monkeypatch: pytest.MonkeyPatch) -> None:
    """Accepted notifications report success."""
    monkeypatch.setattr(fetch_module.requests, "request", Mock(return_value=_response()))
    assert account_notify.notify_account_deleted("alice") is True


def test_transport_failure_is_logged_not_raised(
    monkeypatch: pytest.MonkeyPatch,
    caplog: pytest.LogCaptureFixture,
) -> None:
    """Failures end in a log line and nothing propagates."""
    mock_request = Mock(side_effect=requests.ConnectionError("refused"))
    monkeypatch.setattr(fetch_module.requests, "request", mock_request)

    with caplog.at_level("INFO", logger="enrichment.account_notify"):
        account_notify.handle_account_deleted(AccountDeleted(account_name="alice"))

    assert mock_request.call_count == 1
    assert "Request failed for deleted account alice" in caplog.text


def test_non_2xx_is_a_failure(monkeypatch: pytest.MonkeyPatch) -> None:
    """Rejected notifications report failure."""
    monkeypatch.setattr(fetch_module.requests, "request", Mock(return_value=_response(status=500)))

    assert account_notify.notify_account_deleted("alice") is False


def test_forced_drop_is_logged(monkeypatch: pytest.MonkeyPatch, caplog: pytest.LogCaptureFixture) -> None:
    """Operator drops are distinguishable in the log."""
    monkeypatch.setattr(fetch_module.requests, "request", Mock(return_value=_response()))

    with caplog.at_level("INFO", logger="enrichment.account_notify"):
        account_notify.handle_account_deleted(AccountDeleted(account_name="mallory", forced=True))

    assert "Account mallory forcibly deleted." in caplog.text


def test_missing_url_is_logged_and_skipped(
    monkeypatch: pytest.MonkeyPatch,
    caplog: pytest.LogCaptureFixture,
) -> None:
    """Without an endpoint nothing is sent and nothing raises."""
    monkeypatch.setattr(account_notify, "ACCOUNT_NOTIFY_URL", None)
    mock_request = Mock()
    monkeypatch.setattr(fetch_module.requests, "request", mock_request)

    with caplog.at_level("ERROR", logger="enrichment.account_notify"):
        account_notify.handle_account_deleted(AccountDeleted(account_name="alice"))

    mock_request.assert_not_called()
    assert "ACCOUNT_NOTIFY_URL is required" in caplog.text


def test_notify_requires_url(monkeypatch: pytest.MonkeyPatch) -> None:
    """The low-level helper raises a helpful error."""
    monkeypatch.setattr(account_notify, "ACCOUNT_NOTIFY_URL", "")
    with pytest.raises(RuntimeError, match="ACCOUNT_NOTIFY_URL is required"):
        account_notify.notify_account_deleted("alice")
