"""
Error taxonomy — every failure the core can report.

Services raise these; the CLI catches ``EposError`` and renders the
message at error severity. Not-found and duplicate are kept apart from
``StoreError`` because the existence predicates react to them.
"""

from __future__ import annotations


class EposError(Exception):
    """Base class for all errors raised by epos-opensource."""


# ── Validation ──────────────────────────────────────────────────


class InvalidInputError(EposError):
    """A user-supplied value failed validation."""


class InvalidNameError(InvalidInputError):
    """Environment name is empty or uses characters outside the allowed set."""


class InvalidHostError(InvalidInputError):
    """Host is neither an IP literal nor a valid hostname."""


class InvalidPathError(InvalidInputError):
    """Base class for filesystem path checks."""

    def __init__(self, message: str, path: str):
        super().__init__(message)
        self.path = path


class PathNotFoundError(InvalidPathError):
    """The path does not exist."""


class NotADirectoryPathError(InvalidPathError):
    """The path exists but is not a directory."""


class NotAFilePathError(InvalidPathError):
    """The path exists but is a directory, not a file."""


# ── Registry ────────────────────────────────────────────────────


class EnvironmentNotFoundError(EposError):
    """The registry has no row with this name for this platform."""

    def __init__(self, kind: str, name: str):
        super().__init__(f"no {kind} environment with name '{name}' exists")
        self.kind = kind
        self.name = name


class DuplicateEnvironmentError(EposError):
    """The registry already has a row with this name for this platform."""

    def __init__(self, kind: str, name: str):
        super().__init__(f"a {kind} environment with name '{name}' already exists")
        self.kind = kind
        self.name = name


class StoreError(EposError):
    """Opening, migrating or querying the registry database failed."""

    def __init__(self, message: str, path: str = "", close_error: BaseException | None = None):
        super().__init__(message)
        self.path = path
        self.close_error = close_error


# ── Child processes ─────────────────────────────────────────────


class CommandError(EposError):
    """An external binary could not be started or exited with failure."""

    def __init__(
        self,
        message: str,
        executable: str,
        returncode: int | None = None,
        stdout: str = "",
    ):
        super().__init__(message)
        self.executable = executable
        self.returncode = returncode
        self.stdout = stdout


# ── Configuration ───────────────────────────────────────────────


class ConfigError(EposError):
    """Raised when the user configuration is invalid or unreadable."""

    def __init__(self, message: str, path: str = ""):
        super().__init__(message)
        self.path = path
