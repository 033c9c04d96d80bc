"""
Display — severity-labelled lines for the user's terminal.

The core never prints directly; it talks to a ``Display``. The console
implementation renders ``[LABEL]  message`` lines with click colors.
Tests use ``RecordingDisplay`` from ``adapters.mock``.
"""

from __future__ import annotations

import logging
import threading
from abc import ABC, abstractmethod

import click

logger = logging.getLogger(__name__)


class Display(ABC):
    """Abstract output surface.

    Severity methods take a finished message; ``write`` forwards text
    verbatim (child process output, tables).
    """

    @abstractmethod
    def info(self, message: str) -> None:
        """Neutral information."""

    @abstractmethod
    def warn(self, message: str) -> None:
        """Something the user should look at; not a failure."""

    @abstractmethod
    def error(self, message: str) -> None:
        """A failure."""

    @abstractmethod
    def step(self, message: str) -> None:
        """A step of a longer operation is starting."""

    @abstractmethod
    def done(self, message: str) -> None:
        """A step or operation finished successfully."""

    @abstractmethod
    def debug(self, message: str) -> None:
        """Diagnostic detail, shown only when debugging."""

    @abstractmethod
    def write(self, text: str) -> None:
        """Write *text* to standard output unchanged."""


class ConsoleDisplay(Display):
    """Colored terminal output via click.

    Errors go to stderr and are also logged; everything else goes to
    stdout. Writes from different threads are serialized.
    """

    def __init__(self, debug: bool = False, color: bool | None = None):
        self._debug = debug
        self._color = color
        self._lock = threading.Lock()

    def _label(self, label: str, message: str, fg: str, bold: bool = False, err: bool = False) -> None:
        with self._lock:
            click.secho(f"[{label}]", fg=fg, bold=bold, nl=False, err=err, color=self._color)
            click.echo(f"  {message}", err=err, color=self._color)

    def info(self, message: str) -> None:
        self._label("INFO", message, fg="blue")

    def warn(self, message: str) -> None:
        self._label("WARN", message, fg="yellow", bold=True)

    def error(self, message: str) -> None:
        logger.info("error shown to user: %s", message)
        self._label("ERROR", message, fg="red", bold=True, err=True)

    def step(self, message: str) -> None:
        self._label("STEP", message, fg="cyan")

    def done(self, message: str) -> None:
        self._label("DONE", message, fg="green")

    def debug(self, message: str) -> None:
        logger.debug("%s", message)
        if self._debug:
            self._label("DEBUG", message, fg="magenta", bold=True)

    def write(self, text: str) -> None:
        with self._lock:
            click.echo(text, nl=False, color=self._color)
