"""Tests for the in-memory services host."""

from __future__ import annotations

import pytest
from memory_services_impl import MemoryHost, get_host_impl, register, reset_host_impl

import services_api
from services_api import HostAction, HostError


@pytest.fixture
def host() -> MemoryHost:
    """Return a fresh host with one account and one bot."""
    fresh = MemoryHost()
    fresh.register_account("alice", "Alice")
    fresh.assign_bot("#Chat", "ChanBot")
    return fresh


class TestRegistration:
    """Factory binding into services_api."""

    def test_register_binds_every_factory(self) -> None:
        """All four factories return the process-wide host."""
        register()
        current = reset_host_impl()
        assert services_api.get_session_registry() is current
        assert services_api.get_account_store() is current
        assert services_api.get_messenger() is current
        assert services_api.get_channel_directory() is current
        assert get_host_impl() is current


class TestSessions:
    """SessionRegistry behaviour."""

    def test_find_by_account_is_case_insensitive(self, host: MemoryHost) -> None:
        """Account matching uses IRC case mapping."""
        host.connect("s1", "alice", account="Alice")
        host.connect("s2", "bob")
        assert [s.session_id for s in host.find_by_account("ALICE")] == ["s1"]

    def test_find_by_nick_uses_rfc1459(self, host: MemoryHost) -> None:
        """Nick lookups fold brackets."""
        host.connect("s1", "nick[a]")
        found = host.find_by_nick("NICK{A}")
        assert found is not None
        assert found.session_id == "s1"

    def test_connect_rejects_taken_nick(self, host: MemoryHost) -> None:
        """Two sessions cannot share a nickname."""
        host.connect("s1", "alice")
        with pytest.raises(HostError, match="already in use"):
            host.connect("s2", "ALICE")

    def test_rename_records_action(self, host: MemoryHost) -> None:
        """Renames update the table and the outbox."""
        host.connect("s1", "alice")
        host.rename("s1", "Guest7")
        session = host.get("s1")
        assert session is not None
        assert session.nick == "Guest7"
        assert host.actions == [HostAction(kind="rename", target="alice", text="Guest7")]

    def test_rename_to_own_nick_in_other_case(self, host: MemoryHost) -> None:
        """A session may change the case of its own nickname."""
        host.connect("s1", "alice")
        host.rename("s1", "Alice")
        session = host.get("s1")
        assert session is not None
        assert session.nick == "Alice"

    def test_rename_collision_raises(self, host: MemoryHost) -> None:
        """Forced renames onto a held nickname are rejected."""
        host.connect("s1", "alice")
        host.connect("s2", "bob")
        with pytest.raises(HostError, match="already in use"):
            host.rename("s2", "alice")

    def test_rename_unknown_session_raises(self, host: MemoryHost) -> None:
        """Unknown sessions cannot be renamed."""
        with pytest.raises(HostError, match="Unknown session"):
            host.rename("missing", "x")

    def test_terminate_is_idempotent(self, host: MemoryHost) -> None:
        """A second termination is a no-op."""
        host.connect("s1", "alice")
        host.terminate("s1", "bye")
        host.terminate("s1", "bye")
        assert host.get("s1") is None
        assert host.actions == [HostAction(kind="terminate", target="alice", text="bye")]


class TestAccountsAndChannels:
    """AccountStore, ChannelDirectory and Messenger behaviour."""

    def test_canonical_nick(self, host: MemoryHost) -> None:
        """Registered accounts expose their nickname."""
        assert host.exists("ALICE") is True
        assert host.canonical_nick("alice") == "Alice"
        assert host.canonical_nick("nobody") is None

    def test_metadata_round_trip(self, host: MemoryHost) -> None:
        """Metadata is stored per account."""
        host.set_metadata("alice", "k", "v")
        assert host.get_metadata("Alice", "k") == "v"
        assert host.get_metadata("alice", "other") is None

    def test_metadata_requires_account(self, host: MemoryHost) -> None:
        """Metadata cannot be attached to unknown accounts."""
        with pytest.raises(HostError, match="Unknown account"):
            host.set_metadata("nobody", "k", "v")

    def test_assigned_bot_ignores_channel_case(self, host: MemoryHost) -> None:
        """Channel names are case-insensitive."""
        assert host.assigned_bot("#chat") == "ChanBot"
        assert host.assigned_bot("#other") is None

    def test_messages_are_recorded(self, host: MemoryHost) -> None:
        """Notices and channel messages land in the outbox."""
        host.notify_privately("alice", "psst", source="NickServ")
        host.broadcast_to_channel("#chat", "hello", source="ChanBot")
        assert host.actions == [
            HostAction(kind="notice", target="alice", text="psst", source="NickServ"),
            HostAction(kind="privmsg", target="#chat", text="hello", source="ChanBot"),
        ]
