"""
Command runner — execute external binaries on the user's behalf.

This is the SINGLE PLACE where child processes are started. Two entry
points:

    run_command(cmd, capture=...)   start, drain, wait, classify stderr
    start_detached(cmd)             start only; the caller owns the pipes

stderr handling depends on the binary. ``docker`` writes ordinary
status messages to stderr, so its lines are shown as they arrive. Any
other binary has its stderr buffered until exit: shown as errors when it
failed, as warnings when it succeeded with streamed stdout, and dropped
when it succeeded with captured stdout. The policy is a predicate on the
executable path and can be replaced per call.
"""

from __future__ import annotations

import codecs
import logging
import os
import platform
import shutil
import subprocess
import threading
from collections.abc import Callable
from dataclasses import dataclass, field
from pathlib import Path
from typing import IO, Any

from epos_opensource.adapters.display import ConsoleDisplay, Display
from epos_opensource.core.errors import CommandError

logger = logging.getLogger(__name__)

STATUS_ON_STDERR = frozenset({"docker", "docker.exe"})

_CHUNK_SIZE = 4096
_CREATE_NO_WINDOW = getattr(subprocess, "CREATE_NO_WINDOW", 0x08000000)


@dataclass
class Command:
    """An external invocation: argv, extra environment, working directory."""

    args: list[str]
    env: dict[str, str] = field(default_factory=dict)
    cwd: str | Path | None = None

    def __post_init__(self) -> None:
        if not self.args:
            raise ValueError("command needs at least an executable")


def uses_stderr_for_status(executable: str) -> bool:
    """True for binaries that report normal progress on stderr."""
    return Path(executable).name in STATUS_ON_STDERR


def configure_platform(
    popen_kwargs: dict[str, Any],
    env: dict[str, str],
    system: str | None = None,
) -> None:
    """Apply per-OS start-up tweaks before a child is spawned.

    On Windows the console window is suppressed and compose is told to
    report status on stdout. Elsewhere nothing changes.
    """
    if (system or platform.system()) != "Windows":
        return
    popen_kwargs["creationflags"] = popen_kwargs.get("creationflags", 0) | _CREATE_NO_WINDOW
    env.setdefault("COMPOSE_STATUS_STDOUT", "1")


def resolve_executable(name: str, env: dict[str, str] | None = None) -> str:
    """Locate *name* on PATH; return it unchanged when not found."""
    search_path = env.get("PATH") if env else None
    return shutil.which(name, path=search_path) or name


def _child_env(command: Command) -> dict[str, str]:
    # caller-supplied variables extend the inherited environment
    return {**os.environ, **command.env}


def _exit_description(returncode: int) -> str:
    if returncode < 0:
        return f"terminated by signal {-returncode}"
    return f"exit status {returncode}"


# ── Blocking runner ─────────────────────────────────────────────


def run_command(
    command: Command,
    *,
    capture: bool = False,
    display: Display | None = None,
    stderr_as_output: Callable[[str], bool] | None = None,
) -> str:
    """Run *command* to completion.

    Args:
        command: What to run.
        capture: Return stdout instead of forwarding it to the display.
        display: Where output, warnings and errors go (console by default).
        stderr_as_output: Policy deciding, from the executable path, whether
            stderr lines are shown live as normal output. Defaults to
            ``uses_stderr_for_status``.

    Returns:
        Captured stdout, or ``""`` when streaming.

    Raises:
        CommandError: If the binary cannot be started or exits with failure.
            In capture mode the stdout read so far is on ``.stdout``.
    """
    display = display or ConsoleDisplay()
    env = _child_env(command)
    executable = resolve_executable(command.args[0], env)
    passthrough = (stderr_as_output or uses_stderr_for_status)(executable)

    popen_kwargs: dict[str, Any] = {"cwd": command.cwd}
    configure_platform(popen_kwargs, env)

    argv = [executable, *command.args[1:]]
    logger.debug("Running %s (cwd=%s, capture=%s)", argv, command.cwd, capture)

    try:
        proc = subprocess.Popen(
            argv,
            stdout=subprocess.PIPE,
            stderr=subprocess.PIPE,
            env=env,
            **popen_kwargs,
        )
    except OSError as e:
        raise CommandError(f"failed to start {executable}: {e}", executable) from e

    write_lock = threading.Lock()
    stderr_lines: list[str] = []

    def emit(text: str) -> None:
        with write_lock:
            display.write(text)

    def drain_stderr() -> None:
        assert proc.stderr is not None
        for raw in proc.stderr:
            line = raw.decode("utf-8", errors="replace").rstrip("\r\n")
            if passthrough:
                emit(line + "\n")
            else:
                stderr_lines.append(line)

    reader = threading.Thread(
        target=drain_stderr,
        name=f"stderr-{Path(executable).name}",
        daemon=True,
    )
    reader.start()

    assert proc.stdout is not None
    try:
        if capture:
            stdout = proc.stdout.read().decode("utf-8", errors="replace")
        else:
            _forward(proc.stdout, emit)
            stdout = ""
        returncode = proc.wait()
    finally:
        reader.join()
        proc.stdout.close()
        if proc.stderr is not None:
            proc.stderr.close()

    if not passthrough and stderr_lines:
        if returncode != 0:
            for line in stderr_lines:
                display.error(line)
        elif not capture:
            for line in stderr_lines:
                display.warn(line)

    if returncode != 0:
        logger.debug("%s exited with %d", executable, returncode)
        raise CommandError(
            f"{executable} execution failed: {_exit_description(returncode)}",
            executable,
            returncode=returncode,
            stdout=stdout,
        )
    return stdout


def _forward(stream: IO[bytes], emit: Callable[[str], None]) -> None:
    """Copy *stream* to *emit* chunk by chunk, without waiting for newlines."""
    decoder = codecs.getincrementaldecoder("utf-8")(errors="replace")
    read = getattr(stream, "read1", stream.read)
    while True:
        chunk = read(_CHUNK_SIZE)
        if not chunk:
            break
        text = decoder.decode(chunk)
        if text:
            emit(text)
    tail = decoder.decode(b"", final=True)
    if tail:
        emit(tail)


# ── Detached start ──────────────────────────────────────────────


def start_detached(command: Command, **popen_kwargs: Any) -> subprocess.Popen:
    """Start *command* and return immediately.

    The same environment and platform configuration as ``run_command``
    is applied. stdio is not rewired: stdin, stdout and stderr are
    inherited unless the caller passes its own (e.g. ``stdout=PIPE``).

    Raises:
        CommandError: If the binary cannot be started.
    """
    env = _child_env(command)
    executable = resolve_executable(command.args[0], env)
    popen_kwargs.setdefault("cwd", command.cwd)
    configure_platform(popen_kwargs, env)

    argv = [executable, *command.args[1:]]
    logger.debug("Starting %s detached (cwd=%s)", argv, popen_kwargs.get("cwd"))
    try:
        return subprocess.Popen(argv, env=env, **popen_kwargs)
    except OSError as e:
        raise CommandError(f"failed to start {executable}: {e}", executable) from e
