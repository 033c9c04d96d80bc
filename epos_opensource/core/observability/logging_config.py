"""
Logging configuration — central setup for the CLI.

Called once at startup by main.py with the global flags.  Every module
that does ``logger = logging.getLogger(__name__)`` inherits this config.

Console level, in precedence order:
    --debug / --verbose / --quiet  >  EPOS_LOG_LEVEL  >  WARNING

The log file is EPOS_LOG_FILE when set, else the per-user ``log.log``
passed in by the caller; its level is EPOS_LOG_FILE_LEVEL (default INFO).
"""

from __future__ import annotations

import logging
import os
import sys
from pathlib import Path

ENV_LEVEL = "EPOS_LOG_LEVEL"
ENV_FILE = "EPOS_LOG_FILE"
ENV_FILE_LEVEL = "EPOS_LOG_FILE_LEVEL"

LOG_DIR_MODE = 0o750

# SQLAlchemy echoes every statement at INFO; alembic announces each revision
_NOISY_LOGGERS = ("sqlalchemy", "alembic")

# ── Formats ─────────────────────────────────────────────────────

# (format, datefmt) per console level; the first entry at or above the level wins
_CONSOLE_FORMATS = (
    (logging.DEBUG, "%(asctime)s %(levelname)-5s %(name)s:%(lineno)d %(message)s", "%H:%M:%S"),
    (logging.INFO, "%(asctime)s [%(name)s] %(message)s", "%H:%M:%S"),
)
_CONSOLE_DEFAULT = ("%(message)s", None)

_FILE_FORMAT = "%(asctime)s %(levelname)-5s %(process)d %(name)s:%(lineno)d %(message)s"
_FILE_DATEFMT = "%Y-%m-%d %H:%M:%S"


def setup_logging(
    debug: bool = False,
    verbose: bool = False,
    quiet: bool = False,
    log_file: str | Path | None = None,
) -> None:
    """Install the console and file handlers on the root logger.

    Args:
        debug: ``--debug``; DEBUG on the console and third-party loggers
            left at their own levels.
        verbose: ``--verbose``; INFO on the console.
        quiet: ``--quiet``; ERROR on the console.
        log_file: Default log file, used unless EPOS_LOG_FILE is set.
            ``None`` with no env override means console only.
    """
    console_level = _console_level(debug, verbose, quiet)
    root = logging.getLogger()
    root.handlers.clear()
    root.addHandler(_console_handler(console_level))

    lowest = console_level
    target = os.environ.get(ENV_FILE) or log_file
    if target:
        file_level = _parse_level(os.environ.get(ENV_FILE_LEVEL), logging.INFO)
        root.addHandler(_file_handler(Path(target), file_level))
        lowest = min(lowest, file_level)
    root.setLevel(lowest)

    if not debug:
        for name in _NOISY_LOGGERS:
            logging.getLogger(name).setLevel(logging.WARNING)

    logging.raiseExceptions = False


def _console_level(debug: bool, verbose: bool, quiet: bool) -> int:
    if debug:
        return logging.DEBUG
    if verbose:
        return logging.INFO
    if quiet:
        return logging.ERROR
    return _parse_level(os.environ.get(ENV_LEVEL), logging.WARNING)


def _console_handler(level: int) -> logging.Handler:
    fmt, datefmt = _CONSOLE_DEFAULT
    for threshold, f, d in _CONSOLE_FORMATS:
        if level <= threshold:
            fmt, datefmt = f, d
            break
    handler = logging.StreamHandler(sys.stderr)
    handler.setLevel(level)
    handler.setFormatter(logging.Formatter(fmt, datefmt=datefmt))
    return handler


def _file_handler(path: Path, level: int) -> logging.Handler:
    path.parent.mkdir(mode=LOG_DIR_MODE, parents=True, exist_ok=True)
    handler = logging.FileHandler(path, encoding="utf-8")
    handler.setLevel(level)
    handler.setFormatter(logging.Formatter(_FILE_FORMAT, datefmt=_FILE_DATEFMT))
    return handler


def _parse_level(name: str | None, default: int) -> int:
    """Map a level name to its number; unknown or empty names give *default*."""
    if not name:
        return default
    numeric = logging.getLevelName(name.strip().upper())
    return numeric if isinstance(numeric, int) else default
