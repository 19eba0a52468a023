"""Controlled enumerations for the fair-billing domain."""

from __future__ import annotations

from enum import Enum


class EventKind(str, Enum):
    """The two event tokens a session log may carry."""

    START = "Start"
    END = "End"

    @classmethod
    def from_token(cls, token: str | None, case_sensitive: bool = True) -> EventKind | None:
        """Map a raw log token to an EventKind, or None if unrecognised."""
        if token is None:
            return None
        for kind in cls:
            if case_sensitive and kind.value == token:
                return kind
            if not case_sensitive and kind.value.lower() == token.lower():
                return kind
        return None


class SessionKind(str, Enum):
    """How a billed session was settled."""

    CLOSED = "closed"
    ORPHAN_START = "orphan_start"
    ORPHAN_END = "orphan_end"
