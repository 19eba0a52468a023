"""LineParser — translates one raw log line into a canonical Event.

Expected line format (surrounding whitespace ignored):

    14:02:03 ALICE99 Start

Malformed input is routine log noise, not an error: parse() returns None
for anything it cannot translate and never raises.
"""

from __future__ import annotations

import re

from fair_billing.domain.enums import EventKind
from fair_billing.domain.event import Event
from fair_billing.foundation import timecodec

# Whitespace recognised by the ASCII line grammar
_ASCII_WHITESPACE = " \t\r\n\x0b\x0c"

_LINE_PATTERN = re.compile(
    r"(?P<time>\d{2}:\d{2}:\d{2})\s+(?P<username>[A-Za-z0-9]+)\s+(?P<kind>\S+)",
    re.ASCII,
)


class LineParser:
    """Maps session log lines to Events.

    Args:
        case_sensitive: Match the Start/End token exactly (default) or
            ignore its case.
    """

    def __init__(self, case_sensitive: bool = True) -> None:
        self._case_sensitive = case_sensitive

    @property
    def case_sensitive(self) -> bool:
        return self._case_sensitive

    def parse(self, line: str | None) -> Event | None:
        """Return the Event described by *line*, or None if it is malformed."""
        if line is None:
            return None

        match = _LINE_PATTERN.fullmatch(line.strip(_ASCII_WHITESPACE))
        if match is None:
            return None

        timestamp = timecodec.decode(match.group("time"))
        if timestamp is None:
            return None

        kind = EventKind.from_token(match.group("kind"), case_sensitive=self._case_sensitive)
        if kind is None:
            return None

        return Event(
            timestamp_seconds=timestamp,
            username=match.group("username"),
            kind=kind,
        )
