"""
Platform paths — where epos-opensource keeps its state and config.

Resolved once at program entry into a ``Platform`` value and passed to
the registry, the config loader and the logging setup:

    - macOS:   ~/Library/Application Support/epos-opensource  (config: ~/.config)
    - Windows: %APPDATA%\\epos-opensource                    (config: %APPDATA%)
    - other:   ${XDG_DATA_HOME:-~/.local/share}/epos-opensource
               (config: ${XDG_CONFIG_HOME:-~/.config})
"""

from __future__ import annotations

import os
import platform as _platform
from collections.abc import Mapping
from dataclasses import dataclass
from pathlib import Path

APP_NAME = "epos-opensource"
DB_FILE = "db.db"
LOG_FILE = "log.log"
CONFIG_FILE = f"{APP_NAME}.yaml"

DARWIN = "Darwin"
WINDOWS = "Windows"


@dataclass(frozen=True)
class Platform:
    """Resolved per-user directories for one OS."""

    system: str
    data_dir: Path
    config_dir: Path

    @property
    def db_path(self) -> Path:
        return self.data_dir / DB_FILE

    @property
    def log_path(self) -> Path:
        return self.data_dir / LOG_FILE

    @property
    def config_path(self) -> Path:
        return self.config_dir / CONFIG_FILE

    @property
    def is_windows(self) -> bool:
        return self.system == WINDOWS

    @property
    def is_darwin(self) -> bool:
        return self.system == DARWIN

    @classmethod
    def detect(
        cls,
        system: str | None = None,
        environ: Mapping[str, str] | None = None,
        home: Path | None = None,
    ) -> Platform:
        """Resolve the data and config directories for the running OS.

        Args:
            system: ``platform.system()`` value; detected when omitted.
            environ: Environment variables; ``os.environ`` when omitted.
            home: Home directory; ``Path.home()`` when omitted.

        Raises:
            RuntimeError: On Windows when ``APPDATA`` is not set.
        """
        system = system or _platform.system()
        environ = os.environ if environ is None else environ

        if system == WINDOWS:
            appdata = environ.get("APPDATA", "")
            if not appdata:
                raise RuntimeError("APPDATA is not set")
            return cls(
                system=system,
                data_dir=Path(appdata) / APP_NAME,
                config_dir=Path(appdata),
            )

        home = home or Path.home()
        if system == DARWIN:
            return cls(
                system=system,
                data_dir=home / "Library" / "Application Support" / APP_NAME,
                config_dir=home / ".config",
            )

        data_home = environ.get("XDG_DATA_HOME") or str(home / ".local" / "share")
        config_home = environ.get("XDG_CONFIG_HOME") or str(home / ".config")
        return cls(
            system=system,
            data_dir=Path(data_home) / APP_NAME,
            config_dir=Path(config_home),
        )
