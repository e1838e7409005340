"""
Logging configuration — one root setup for the CLI process.

Modules log through ``logging.getLogger(__name__)`` and never configure
handlers themselves. Step progress is logged at INFO, each command line
at DEBUG, and a failing tool's stderr at ERROR, so the default WARNING
console stays quiet until something breaks.

Level precedence:
    --debug > --verbose > --quiet > PROTOGEN_LOG_LEVEL > WARNING

A log file (PROTOGEN_LOG_FILE) can record more detail than the console
via PROTOGEN_LOG_FILE_LEVEL.
"""

from __future__ import annotations

import logging
import os
import sys

LOG_LEVEL_ENV = "PROTOGEN_LOG_LEVEL"
LOG_FILE_ENV = "PROTOGEN_LOG_FILE"
LOG_FILE_LEVEL_ENV = "PROTOGEN_LOG_FILE_LEVEL"

_FMT_CONSOLE = "%(message)s"
_FMT_STEPS = "%(asctime)s %(message)s"
_FMT_DETAIL = "%(asctime)s %(levelname)-5s %(name)s:%(lineno)d — %(message)s"


def resolve_level(debug: bool = False, verbose: bool = False, quiet: bool = False) -> str:
    """Pick the console level from CLI flags, then the environment."""
    if debug:
        return "DEBUG"
    if verbose:
        return "INFO"
    if quiet:
        return "ERROR"
    return os.environ.get(LOG_LEVEL_ENV, "WARNING")


def setup_logging(
    level: str = "WARNING",
    log_file: str | None = None,
    log_file_level: str | None = None,
) -> None:
    """Install the console handler (stderr) and, optionally, a file handler.

    Calling it again replaces the previous handlers.
    """
    console_level = _parse_level(level)

    console = logging.StreamHandler(sys.stderr)
    console.setLevel(console_level)
    console.setFormatter(_console_formatter(console_level))

    root = logging.getLogger()
    root.handlers.clear()
    root.addHandler(console)
    root_level = console_level

    if log_file:
        file_level = _parse_level(log_file_level) if log_file_level else console_level
        fh = logging.FileHandler(log_file, encoding="utf-8")
        fh.setLevel(file_level)
        fh.setFormatter(logging.Formatter(_FMT_DETAIL, datefmt="%Y-%m-%d %H:%M:%S"))
        root.addHandler(fh)
        root_level = min(root_level, file_level)

    root.setLevel(root_level)
    logging.raiseExceptions = False


def _console_formatter(level: int) -> logging.Formatter:
    if level <= logging.DEBUG:
        return logging.Formatter(_FMT_DETAIL, datefmt="%H:%M:%S")
    if level <= logging.INFO:
        return logging.Formatter(_FMT_STEPS, datefmt="%H:%M:%S")
    return logging.Formatter(_FMT_CONSOLE)


def _parse_level(level: str | None) -> int:
    """Level name → numeric level; unknown names fall back to WARNING."""
    numeric = getattr(logging, (level or "").upper(), None)
    return numeric if isinstance(numeric, int) else logging.WARNING
