"""Tests for the Event, BilledSession, UserSummary and ResultSet models."""

import pytest
from pydantic import ValidationError

from fair_billing.domain.enums import EventKind, SessionKind
from fair_billing.domain.event import Event
from fair_billing.domain.summary import BilledSession, ResultSet, UserSummary


def _valid_event(**overrides) -> dict:
    """Return a valid event dict, with optional overrides."""
    base = {
        "timestamp_seconds": 50523,
        "username": "ALICE99",
        "kind": "Start",
    }
    base.update(overrides)
    return base


def _event(timestamp: int, username: str, kind: str) -> Event:
    return Event.model_validate(_valid_event(timestamp_seconds=timestamp, username=username, kind=kind))


class TestEventValidation:
    def test_valid_event_parses(self) -> None:
        event = Event.model_validate(_valid_event())
        assert event.kind == EventKind.START
        assert event.is_start
        assert not event.is_end

    def test_event_time_renders_hms(self) -> None:
        event = Event.model_validate(_valid_event())
        assert event.event_time == "14:02:03"
        assert str(event) == "14:02:03 ALICE99 Start"

    @pytest.mark.parametrize("timestamp", [-1, 86400])
    def test_timestamp_outside_day_rejected(self, timestamp: int) -> None:
        with pytest.raises(ValidationError):
            Event.model_validate(_valid_event(timestamp_seconds=timestamp))

    @pytest.mark.parametrize("username", ["", "ALICE_99", "bob smith", "carol!"])
    def test_non_alphanumeric_username_rejected(self, username: str) -> None:
        with pytest.raises(ValidationError):
            Event.model_validate(_valid_event(username=username))

    def test_unknown_kind_rejected(self) -> None:
        with pytest.raises(ValidationError):
            Event.model_validate(_valid_event(kind="Pause"))

    def test_event_is_immutable(self) -> None:
        event = Event.model_validate(_valid_event())
        with pytest.raises(ValidationError):
            event.username = "BOB"


class TestEventKind:
    def test_exact_tokens(self) -> None:
        assert EventKind.from_token("Start") is EventKind.START
        assert EventKind.from_token("End") is EventKind.END

    def test_case_sensitive_by_default(self) -> None:
        assert EventKind.from_token("start") is None
        assert EventKind.from_token("END") is None

    def test_case_insensitive_variant(self) -> None:
        assert EventKind.from_token("start", case_sensitive=False) is EventKind.START
        assert EventKind.from_token("END", case_sensitive=False) is EventKind.END

    def test_unknown_token(self) -> None:
        assert EventKind.from_token("Unknown") is None
        assert EventKind.from_token(None) is None


class TestBilledSession:
    def test_duration(self) -> None:
        session = BilledSession(username="ALICE", start_seconds=100, end_seconds=130, kind=SessionKind.CLOSED)
        assert session.duration_seconds == 30


class TestUserSummary:
    def test_negative_values_rejected(self) -> None:
        with pytest.raises(ValidationError):
            UserSummary(username="ALICE", session_count=-1, total_duration_seconds=0)
        with pytest.raises(ValidationError):
            UserSummary(username="ALICE", session_count=1, total_duration_seconds=-5)

    def test_duration_without_sessions_rejected(self) -> None:
        with pytest.raises(ValidationError):
            UserSummary(username="ALICE", session_count=0, total_duration_seconds=10)


class TestResultSet:
    def test_preserves_insertion_order(self) -> None:
        results = ResultSet()
        for name in ["ZED", "ALICE", "MIKE"]:
            results.add(UserSummary(username=name, session_count=1, total_duration_seconds=1))
        assert results.usernames == ["ZED", "ALICE", "MIKE"]
        assert [s.username for s in results] == ["ZED", "ALICE", "MIKE"]
        assert len(results) == 3

    def test_lookup(self) -> None:
        results = ResultSet()
        results.add(UserSummary(username="ALICE", session_count=2, total_duration_seconds=40))
        assert "ALICE" in results
        assert "BOB" not in results
        assert results.get("ALICE").total_duration_seconds == 40
        assert results.get("BOB") is None

    def test_duplicate_username_rejected(self) -> None:
        results = ResultSet()
        results.add(UserSummary(username="ALICE", session_count=1, total_duration_seconds=1))
        with pytest.raises(ValueError):
            results.add(UserSummary(username="ALICE", session_count=2, total_duration_seconds=2))

    def test_usernames_is_a_copy(self) -> None:
        results = ResultSet()
        results.add(UserSummary(username="ALICE", session_count=1, total_duration_seconds=1))
        results.usernames.append("MALLORY")
        assert results.usernames == ["ALICE"]
