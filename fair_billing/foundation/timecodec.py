"""Time-of-day codec.

Converts between ``HH:MM:SS`` text and seconds since midnight on a single
24-hour clock.  Decoding never raises: anything that is not a valid time of
day comes back as ``None`` and the caller drops the line.
"""

from __future__ import annotations

import re

SECONDS_PER_MINUTE = 60
SECONDS_PER_HOUR = 60 * SECONDS_PER_MINUTE
SECONDS_PER_DAY = 24 * SECONDS_PER_HOUR
MAX_TIMESTAMP = SECONDS_PER_DAY - 1

_TIME_PATTERN = re.compile(r"(\d+):(\d+):(\d+)", re.ASCII)


def encode(hours: int, minutes: int, seconds: int) -> int:
    """Return seconds since midnight for a validated clock reading.

    Raises:
        ValueError: If any component is outside its clock range.
    """
    if not 0 <= hours <= 23:
        raise ValueError(f"hours out of range: {hours}")
    if not 0 <= minutes <= 59:
        raise ValueError(f"minutes out of range: {minutes}")
    if not 0 <= seconds <= 59:
        raise ValueError(f"seconds out of range: {seconds}")
    return hours * SECONDS_PER_HOUR + minutes * SECONDS_PER_MINUTE + seconds


def decode(text: str | None) -> int | None:
    """Parse ``HH:MM:SS`` into seconds since midnight, or None if invalid."""
    if text is None:
        return None
    match = _TIME_PATTERN.fullmatch(text.strip())
    if match is None:
        return None
    hours, minutes, seconds = (int(part) for part in match.groups())
    try:
        return encode(hours, minutes, seconds)
    except ValueError:
        return None


def format_hms(timestamp_seconds: int) -> str:
    """Render seconds since midnight back to zero-padded ``HH:MM:SS``."""
    if not 0 <= timestamp_seconds <= MAX_TIMESTAMP:
        raise ValueError(f"timestamp outside a single day: {timestamp_seconds}")
    hours, remainder = divmod(timestamp_seconds, SECONDS_PER_HOUR)
    minutes, seconds = divmod(remainder, SECONDS_PER_MINUTE)
    return f"{hours:02d}:{minutes:02d}:{seconds:02d}"
