"""SessionMatcher — deterministic reconciliation of Start/End events.

Design principles:
    1. Pure function: accepts an EventStream, returns a ResultSet.
    2. No side effects, no state carried between calls, no I/O.
    3. Never fails on a well-formed EventStream.

Algorithm (per user, over that user's events in stream order):
    - Start: push its timestamp onto open_starts.
    - End:   pop the most recent open Start and bill (end - start);
             with no open Start, push the End onto open_ends.

    After the stream is consumed, leftovers are settled against two
    file-wide landmarks computed over *all* events:
    - each orphaned End   is billed (end - earliest)
    - each orphaned Start is billed (latest - start)

Pairing each End with the most recent open Start (LIFO) gives the minimum
total billed duration of any valid pairing when one user's sessions overlap.
Every Start therefore yields exactly one session, and so does every End that
never finds a Start:

    session_count = starts + orphaned_ends
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Sequence
from dataclasses import dataclass

from fair_billing.domain.enums import SessionKind
from fair_billing.domain.event import Event
from fair_billing.domain.summary import BilledSession, ResultSet, UserSummary
from fair_billing.store.user_index import UserEventIndex

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Landmarks:
    """Earliest and latest timestamps across the whole event stream."""

    earliest: int
    latest: int


def landmarks(events: Sequence[Event]) -> Landmarks:
    """Compute the file-wide landmarks used to settle orphaned events.

    Raises:
        ValueError: If *events* is empty.
    """
    if not events:
        raise ValueError("cannot compute landmarks of an empty event stream")
    timestamps = [e.timestamp_seconds for e in events]
    return Landmarks(earliest=min(timestamps), latest=max(timestamps))


class _UserSessionAccumulator:
    """Two-stack matcher for a single user's chronological events."""

    __slots__ = ("_username", "_landmarks", "_open_starts", "_open_ends", "_sessions")

    def __init__(self, username: str, marks: Landmarks) -> None:
        self._username = username
        self._landmarks = marks
        self._open_starts: list[int] = []
        self._open_ends: list[int] = []
        self._sessions: list[BilledSession] = []

    def accept(self, event: Event) -> None:
        timestamp = event.timestamp_seconds
        if event.is_start:
            self._open_starts.append(timestamp)
        elif self._open_starts:
            start = self._open_starts.pop()
            self._bill(start, timestamp, SessionKind.CLOSED)
        else:
            self._open_ends.append(timestamp)

    def settle(self) -> list[BilledSession]:
        """Resolve orphans against the landmarks and return every session."""
        while self._open_ends:
            end = self._open_ends.pop()
            self._bill(self._landmarks.earliest, end, SessionKind.ORPHAN_END)
        while self._open_starts:
            start = self._open_starts.pop()
            self._bill(start, self._landmarks.latest, SessionKind.ORPHAN_START)
        return list(self._sessions)

    def _bill(self, start: int, end: int, kind: SessionKind) -> None:
        if end < start:
            # Only an out-of-order stream reaches this branch.
            logger.warning(
                "Negative %s session for %s (%d > %d), billing 0",
                kind.value, self._username, start, end,
            )
            end = start
        self._sessions.append(
            BilledSession(
                username=self._username,
                start_seconds=start,
                end_seconds=end,
                kind=kind,
            )
        )


class SessionMatcher:
    """Turns a time-ordered EventStream into per-user billing summaries.

    This matcher is stateless: the same EventStream always produces the
    same ResultSet.
    """

    # ── Public API ───────────────────────────────────────────────────────

    def match(self, events: Iterable[Event]) -> ResultSet:
        """Return one UserSummary per user, in first-seen order."""
        results = ResultSet()
        for username, sessions in self._sessions_by_user(events):
            summary = UserSummary(
                username=username,
                session_count=len(sessions),
                total_duration_seconds=sum(s.duration_seconds for s in sessions),
            )
            logger.debug(
                "User %s: %d session(s), %d second(s)",
                username,
                summary.session_count,
                summary.total_duration_seconds,
            )
            results.add(summary)
        return results

    def sessions(self, events: Iterable[Event]) -> list[BilledSession]:
        """Return every billed session, grouped by user in first-seen order.

        Within a user: closed sessions in matching order, then orphaned
        Ends, then orphaned Starts.
        """
        billed: list[BilledSession] = []
        for _, sessions in self._sessions_by_user(events):
            billed.extend(sessions)
        return billed

    # ── Internals ────────────────────────────────────────────────────────

    @staticmethod
    def _sessions_by_user(events: Iterable[Event]) -> list[tuple[str, list[BilledSession]]]:
        events = list(events)
        if not events:
            return []

        marks = landmarks(events)
        index = UserEventIndex(events)
        logger.debug(
            "Matching %d event(s) for %d user(s), earliest=%d latest=%d",
            len(events),
            len(index),
            marks.earliest,
            marks.latest,
        )

        grouped: list[tuple[str, list[BilledSession]]] = []
        for username, user_events in index:
            accumulator = _UserSessionAccumulator(username, marks)
            for event in user_events:
                accumulator.accept(event)
            grouped.append((username, accumulator.settle()))
        return grouped
