"""Canonical Event model — one parsed line of the session log.

Events are created only by the line parser and are immutable afterwards.
Validation here is the last line of defence: the parser already rejects
anything that would fail these constraints.
"""

from __future__ import annotations

from pydantic import BaseModel, Field

from fair_billing.domain.enums import EventKind
from fair_billing.foundation.timecodec import MAX_TIMESTAMP, format_hms

USERNAME_PATTERN = r"^[A-Za-z0-9]+$"


class Event(BaseModel):
    """A single Start or End observation for one user."""

    timestamp_seconds: int = Field(
        ...,
        ge=0,
        le=MAX_TIMESTAMP,
        description="Seconds since midnight",
    )
    username: str = Field(
        ...,
        min_length=1,
        pattern=USERNAME_PATTERN,
        description="Alphanumeric user token",
    )
    kind: EventKind

    model_config = {"frozen": True}

    @property
    def is_start(self) -> bool:
        return self.kind is EventKind.START

    @property
    def is_end(self) -> bool:
        return self.kind is EventKind.END

    @property
    def event_time(self) -> str:
        """The timestamp rendered back to ``HH:MM:SS``."""
        return format_hms(self.timestamp_seconds)

    def __str__(self) -> str:
        return f"{self.event_time} {self.username} {self.kind.value}"
