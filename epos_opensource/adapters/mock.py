"""
Recording display — test double for the Display adapter.

Captures every message by severity plus everything written verbatim,
so tests can assert on what the user would have seen.
"""

from __future__ import annotations

import threading

from epos_opensource.adapters.display import Display


class RecordingDisplay(Display):
    """Display that records instead of printing."""

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self.messages: list[tuple[str, str]] = []
        self._output: list[str] = []

    def _record(self, severity: str, message: str) -> None:
        with self._lock:
            self.messages.append((severity, message))

    def info(self, message: str) -> None:
        self._record("info", message)

    def warn(self, message: str) -> None:
        self._record("warn", message)

    def error(self, message: str) -> None:
        self._record("error", message)

    def step(self, message: str) -> None:
        self._record("step", message)

    def done(self, message: str) -> None:
        self._record("done", message)

    def debug(self, message: str) -> None:
        self._record("debug", message)

    def write(self, text: str) -> None:
        with self._lock:
            self._output.append(text)

    # ── Inspection ──────────────────────────────────────────────

    @property
    def output(self) -> str:
        """Everything passed to write(), concatenated."""
        return "".join(self._output)

    def by_severity(self, severity: str) -> list[str]:
        return [msg for sev, msg in self.messages if sev == severity]

    @property
    def warnings(self) -> list[str]:
        return self.by_severity("warn")

    @property
    def errors(self) -> list[str]:
        return self.by_severity("error")

    def reset(self) -> None:
        with self._lock:
            self.messages.clear()
            self._output.clear()
