"""LogReader — drives the line parser over a log source.

The reader yields a time-ordered EventStream.  Ordering is enforced by an
incremental filter, not a sort: an event whose timestamp is earlier than the
last accepted event is dropped exactly like a malformed line.

Only two failures ever reach the caller: the source does not exist, or it
cannot be read.  Everything that goes wrong inside a line is absorbed here.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from pathlib import Path

from fair_billing.adapters.line_parser import LineParser
from fair_billing.domain.event import Event

logger = logging.getLogger(__name__)


class ReaderStats:
    """Per-read ingestion counters for diagnostics."""

    __slots__ = ("lines_read", "accepted", "malformed", "out_of_order")

    def __init__(self) -> None:
        self.lines_read: int = 0
        self.accepted: int = 0
        self.malformed: int = 0
        self.out_of_order: int = 0

    @property
    def dropped(self) -> int:
        return self.malformed + self.out_of_order

    def to_dict(self) -> dict:
        return {
            "lines_read": self.lines_read,
            "accepted": self.accepted,
            "malformed": self.malformed,
            "out_of_order": self.out_of_order,
        }


class LogSourceError(Exception):
    """Raised when the log source as a whole cannot be consumed."""

    def __init__(self, path: Path | str, reason: str) -> None:
        self.path = Path(path)
        self.reason = reason
        super().__init__(f"{reason}: {path}")


class SourceNotFoundError(LogSourceError):
    """The log file does not exist."""

    def __init__(self, path: Path | str) -> None:
        super().__init__(path, "File not found")


class SourceUnreadableError(LogSourceError):
    """The log file exists but could not be read or decoded."""

    def __init__(self, path: Path | str) -> None:
        super().__init__(path, "Unable to read file")


class LogReader:
    """Builds an EventStream from raw log lines.

    Usage:
        reader = LogReader()
        events = reader.read_path("sessions.log")
        print(reader.stats.to_dict())
    """

    def __init__(self, parser: LineParser | None = None, encoding: str = "utf-8") -> None:
        self._parser = parser or LineParser()
        self._encoding = encoding
        self._stats = ReaderStats()

    @property
    def stats(self) -> ReaderStats:
        """Counters for the most recent read."""
        return self._stats

    def read_path(self, path: Path | str) -> list[Event]:
        """Read and filter every line of the file at *path*.

        Raises:
            SourceNotFoundError: If *path* does not exist.
            SourceUnreadableError: If *path* cannot be opened or decoded.
        """
        path = Path(path)
        try:
            with path.open("r", encoding=self._encoding) as handle:
                return self.read_lines(handle)
        except FileNotFoundError as exc:
            logger.warning("Log file not found: %s", path)
            raise SourceNotFoundError(path) from exc
        except (OSError, UnicodeDecodeError) as exc:
            logger.warning("Log file unreadable: %s (%s)", path, exc)
            raise SourceUnreadableError(path) from exc

    def read_lines(self, lines: Iterable[str]) -> list[Event]:
        """Parse *lines* and keep only events in non-decreasing time order."""
        self._stats = ReaderStats()
        events: list[Event] = []
        last_timestamp = -1

        for line_number, line in enumerate(lines, start=1):
            self._stats.lines_read += 1
            event = self._parser.parse(line)
            if event is None:
                self._stats.malformed += 1
                logger.debug("Dropped malformed line %d: %r", line_number, line.rstrip("\r\n"))
                continue

            if event.timestamp_seconds < last_timestamp:
                self._stats.out_of_order += 1
                logger.debug(
                    "Dropped out-of-order line %d: %s precedes %d",
                    line_number,
                    event.event_time,
                    last_timestamp,
                )
                continue

            events.append(event)
            last_timestamp = event.timestamp_seconds
            self._stats.accepted += 1

        logger.info(
            "Read %d line(s): %d accepted, %d malformed, %d out of order",
            self._stats.lines_read,
            self._stats.accepted,
            self._stats.malformed,
            self._stats.out_of_order,
        )
        return events
