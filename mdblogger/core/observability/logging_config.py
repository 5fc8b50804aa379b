"""
Logging configuration — console and optional file output for mdblogger.

main.py calls ``setup_logging`` once per invocation; modules log through
``logging.getLogger(__name__)``.

Console level, highest precedence first:
    --debug / --verbose / --quiet  >  MDB_LOG_LEVEL  >  WARNING

MDB_LOG_FILE adds a file handler (level from MDB_LOG_FILE_LEVEL, or the
console level).  Missing-image and copy-failure records are WARNING and
ERROR, so they show up even without flags.
"""

from __future__ import annotations

import logging
import os
import sys

ENV_LEVEL = "MDB_LOG_LEVEL"
ENV_FILE = "MDB_LOG_FILE"
ENV_FILE_LEVEL = "MDB_LOG_FILE_LEVEL"

# (max level, format, datefmt): first row whose level >= console level wins
_CONSOLE_FORMATS: tuple[tuple[int, str, str | None], ...] = (
    (logging.DEBUG, "%(asctime)s %(levelname)-5s %(name)s:%(lineno)d  %(message)s", "%H:%M:%S"),
    (logging.INFO, "%(asctime)s [%(name)s] %(message)s", "%H:%M:%S"),
    (logging.CRITICAL, "%(levelname)s: %(message)s", None),
)

_FILE_FORMAT = logging.Formatter(
    "%(asctime)s %(levelname)-5s %(name)s:%(lineno)d  %(message)s",
    datefmt="%Y-%m-%d %H:%M:%S",
)


def resolve_level(debug: bool = False, verbose: bool = False, quiet: bool = False) -> str:
    """Pick the console level from CLI flags, then the environment."""
    if debug:
        return "DEBUG"
    if verbose:
        return "INFO"
    if quiet:
        return "ERROR"
    return os.environ.get(ENV_LEVEL, "WARNING")


def setup_logging(
    level: str = "WARNING",
    log_file: str | None = None,
    log_file_level: str | None = None,
) -> None:
    """Replace the root logger's handlers with mdblogger's.

    Args:
        level: Console level name; unknown names mean WARNING.
        log_file: Optional path that also receives records.
        log_file_level: Level for ``log_file`` (default: ``level``).
    """
    console_level = _parse_level(level)
    root = logging.getLogger()
    root.handlers.clear()
    root.addHandler(_console_handler(console_level))

    lowest = console_level
    if log_file:
        file_level = _parse_level(log_file_level) if log_file_level else console_level
        fh = logging.FileHandler(log_file, encoding="utf-8")
        fh.setLevel(file_level)
        fh.setFormatter(_FILE_FORMAT)
        root.addHandler(fh)
        lowest = min(lowest, file_level)

    # Root must pass anything either handler wants
    root.setLevel(lowest)
    logging.raiseExceptions = False


def _console_handler(level: int) -> logging.Handler:
    fmt, datefmt = next(
        (f, d) for threshold, f, d in _CONSOLE_FORMATS if level <= threshold
    )
    handler = logging.StreamHandler(sys.stderr)
    handler.setLevel(level)
    handler.setFormatter(logging.Formatter(fmt, datefmt=datefmt))
    return handler


def _parse_level(level: str | None) -> int:
    numeric = getattr(logging, (level or "").upper(), None)
    return numeric if isinstance(numeric, int) else logging.WARNING
