"""ReportFormatter — plain-text rendering of a ResultSet.

Rendering only: one ``USERNAME SESSIONCOUNT TOTALDURATION`` line per user,
in ResultSet order.  No computation happens here.
"""

from __future__ import annotations

import logging
from typing import TextIO

from fair_billing.domain.summary import ResultSet, UserSummary

logger = logging.getLogger(__name__)


class ReportFormatter:
    """Formats billing summaries for the output stream."""

    @staticmethod
    def format_line(summary: UserSummary) -> str:
        return f"{summary.username} {summary.session_count} {summary.total_duration_seconds}"

    def format(self, results: ResultSet) -> list[str]:
        """Return the report lines, without line terminators."""
        return [self.format_line(summary) for summary in results]

    def write(self, results: ResultSet, output: TextIO) -> None:
        """Write the report to a text stream, one terminated line per user."""
        lines = self.format(results)
        for line in lines:
            output.write(line + "\n")
        logger.debug("Wrote %d report line(s)", len(lines))
