"""
Opener — hand URLs, files and directories to the user's own tools.

The commands come from the configuration (``openURLCommand`` and
friends). A command containing ``%s`` gets the target substituted in
place; otherwise the target is appended as the last argument. The child
inherits the terminal so interactive viewers work.
"""

from __future__ import annotations

import logging
import shlex

from epos_opensource.adapters.shell.command import Command, start_detached
from epos_opensource.core.errors import CommandError
from epos_opensource.core.models.config import Config

logger = logging.getLogger(__name__)

PLACEHOLDER = "%s"


def build_open_args(command: str, target: str) -> list[str]:
    """Turn a configured open command and a target into argv."""
    target = target.strip()
    parts = shlex.split(command)
    if not parts:
        raise ValueError("open command is empty")
    if PLACEHOLDER in parts:
        return [target if part == PLACEHOLDER else part for part in parts]
    return [*parts, target]


class Opener:
    """Open things with the commands from a Config."""

    def __init__(self, config: Config):
        self._tui = config.tui

    def open_url(self, url: str) -> None:
        self._open(self._tui.open_url_command, url)

    def open_file(self, path: str) -> None:
        self._open(self._tui.open_file_command, path)

    def open_directory(self, path: str) -> None:
        self._open(self._tui.open_directory_command, path)

    def _open(self, command: str, target: str) -> None:
        args = build_open_args(command, target)
        logger.info("Opening %s with %s", target, args[0])
        proc = start_detached(Command(args=args))
        returncode = proc.wait()
        if returncode != 0:
            raise CommandError(
                f"{args[0]} failed to open {target}: exit status {returncode}",
                args[0],
                returncode=returncode,
            )
