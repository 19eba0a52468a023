"""fair-billing — per-user session billing from a Start/End log.

This is the command-line entry point.  It wires the LogReader,
SessionMatcher and ReportFormatter together:

    fair-billing sessions.log

The report goes to stdout; errors and diagnostics go to stderr.
"""

from __future__ import annotations

import argparse
import logging
import sys
from typing import NoReturn, TextIO

from fair_billing.adapters.line_parser import LineParser
from fair_billing.adapters.log_reader import LogReader, SourceNotFoundError, SourceUnreadableError
from fair_billing.config import settings
from fair_billing.core.session_matcher import SessionMatcher
from fair_billing.report.formatter import ReportFormatter

logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_FAILURE = 1

# ── Logging ──────────────────────────────────────────────────────────────────

_LOG_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"


def configure_logging(verbosity: int = 0) -> None:
    """Log to stderr at the configured level, lowered once per -v."""
    base = logging.getLevelName(settings.log_level.upper())
    if not isinstance(base, int):
        base = logging.WARNING
    level = max(logging.DEBUG, base - 10 * verbosity)
    logging.basicConfig(level=level, format=_LOG_FORMAT, stream=sys.stderr)


# ── Application ──────────────────────────────────────────────────────────────

def run(
    path: str,
    output: TextIO,
    error: TextIO,
    case_sensitive: bool | None = None,
    encoding: str | None = None,
) -> int:
    """Bill the log at *path*, writing the report to *output*.

    Returns the process exit status.
    """
    if case_sensitive is None:
        case_sensitive = settings.case_sensitive_kind
    reader = LogReader(
        parser=LineParser(case_sensitive=case_sensitive),
        encoding=encoding or settings.encoding,
    )

    try:
        events = reader.read_path(path)
    except SourceNotFoundError:
        print(f"Error: File not found: {path}", file=error)
        return EXIT_FAILURE
    except SourceUnreadableError:
        print(f"Error: Unable to read file: {path}", file=error)
        return EXIT_FAILURE

    results = SessionMatcher().match(events)
    ReportFormatter().write(results, output)
    logger.info("Billed %d user(s) from %s", len(results), path)
    return EXIT_OK


# ── CLI ──────────────────────────────────────────────────────────────────────

class _ArgumentParser(argparse.ArgumentParser):
    """ArgumentParser that exits with status 1 on usage errors."""

    def error(self, message: str) -> NoReturn:
        self.print_usage(sys.stderr)
        self.exit(EXIT_FAILURE, f"{self.prog}: error: {message}\n")


def build_parser() -> argparse.ArgumentParser:
    parser = _ArgumentParser(
        prog=settings.app_name,
        description="Count billable sessions and total billed seconds per user.",
    )
    parser.add_argument("log_file", help="Path to the session log file")
    parser.add_argument(
        "-v", "--verbose",
        action="count",
        default=0,
        help="Log more detail to stderr; repeat for debug output.",
    )
    parser.add_argument(
        "--ignore-case",
        action="store_true",
        help="Accept Start/End tokens in any letter case.",
    )
    return parser


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    configure_logging(args.verbose)
    case_sensitive = False if args.ignore_case else None
    return run(args.log_file, sys.stdout, sys.stderr, case_sensitive=case_sensitive)


def cli() -> None:
    sys.exit(main())


if __name__ == "__main__":
    cli()
