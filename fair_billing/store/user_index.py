"""In-memory per-user event index with explicit first-seen ordering.

The index segregates a mixed EventStream into one sub-sequence per user.
It is a stable grouping: each user's events keep their original relative
order, and users are enumerated in the order they first appear.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Iterator

from fair_billing.domain.event import Event

logger = logging.getLogger(__name__)


class UserEventIndex:
    """Ordered mapping of username to that user's events.

    The key order is held in its own list so first-seen ordering never
    depends on the iteration behaviour of the lookup table.
    """

    __slots__ = ("_order", "_events")

    def __init__(self, events: Iterable[Event] = ()) -> None:
        self._order: list[str] = []
        self._events: dict[str, list[Event]] = {}
        for event in events:
            self.add(event)

    def add(self, event: Event) -> None:
        """Append *event* to its user's sub-sequence, registering new users."""
        bucket = self._events.get(event.username)
        if bucket is None:
            bucket = []
            self._events[event.username] = bucket
            self._order.append(event.username)
            logger.debug("First event for user %s at %s", event.username, event.event_time)
        bucket.append(event)

    @property
    def usernames(self) -> list[str]:
        """Usernames in first-seen order."""
        return list(self._order)

    def events_for(self, username: str) -> list[Event]:
        """Read-only copy of a user's events, empty if the user is unknown."""
        return list(self._events.get(username, ()))

    def __iter__(self) -> Iterator[tuple[str, list[Event]]]:
        for username in self._order:
            yield username, list(self._events[username])

    def __len__(self) -> int:
        return len(self._order)

    def __contains__(self, username: object) -> bool:
        return username in self._events
