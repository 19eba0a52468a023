"""Billing results — sessions, per-user summaries and the ordered result set.

BilledSession and UserSummary are immutable observations produced by the
session matcher.  ResultSet carries them in first-seen username order; that
order is part of the output contract, so it is kept as an explicit list of
keys rather than left to whatever mapping type happens to be used.
"""

from __future__ import annotations

from collections.abc import Iterator

from pydantic import BaseModel, Field, model_validator

from fair_billing.domain.enums import SessionKind
from fair_billing.domain.event import USERNAME_PATTERN
from fair_billing.foundation.timecodec import MAX_TIMESTAMP


class BilledSession(BaseModel):
    """One billable interval, closed or settled against a landmark."""

    username: str = Field(..., min_length=1, pattern=USERNAME_PATTERN)
    start_seconds: int = Field(..., ge=0, le=MAX_TIMESTAMP)
    end_seconds: int = Field(..., ge=0, le=MAX_TIMESTAMP)
    kind: SessionKind

    model_config = {"frozen": True}

    @property
    def duration_seconds(self) -> int:
        return max(0, self.end_seconds - self.start_seconds)


class UserSummary(BaseModel):
    """Session count and total billed duration for a single user."""

    username: str = Field(..., min_length=1, pattern=USERNAME_PATTERN)
    session_count: int = Field(..., ge=0)
    total_duration_seconds: int = Field(..., ge=0)

    model_config = {"frozen": True}

    @model_validator(mode="after")
    def duration_requires_sessions(self) -> UserSummary:
        if self.session_count == 0 and self.total_duration_seconds != 0:
            raise ValueError("total_duration_seconds must be 0 when there are no sessions")
        return self


class ResultSet:
    """Ordered collection of UserSummary keyed by username.

    Iteration order is the order in which summaries were added, which the
    matcher guarantees is first-seen order in the event stream.
    """

    __slots__ = ("_order", "_by_username")

    def __init__(self) -> None:
        self._order: list[str] = []
        self._by_username: dict[str, UserSummary] = {}

    def add(self, summary: UserSummary) -> None:
        """Append a summary.  Each username may appear only once."""
        if summary.username in self._by_username:
            raise ValueError(f"duplicate summary for user '{summary.username}'")
        self._order.append(summary.username)
        self._by_username[summary.username] = summary

    def get(self, username: str) -> UserSummary | None:
        return self._by_username.get(username)

    @property
    def usernames(self) -> list[str]:
        """Usernames in first-seen order."""
        return list(self._order)

    def __iter__(self) -> Iterator[UserSummary]:
        for username in self._order:
            yield self._by_username[username]

    def __len__(self) -> int:
        return len(self._order)

    def __contains__(self, username: object) -> bool:
        return username in self._by_username

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ResultSet):
            return NotImplemented
        return list(self) == list(other)

    def __repr__(self) -> str:
        return f"ResultSet({list(self)!r})"
