"""
Configuration loader — reads epos-opensource.yaml into a Config model.

A missing file means defaults. A file that is not valid YAML also falls
back to defaults (with a warning in the log). A file that parses but
does not describe a valid configuration raises ``ConfigError``.
"""

from __future__ import annotations

import logging
import os
from pathlib import Path

import yaml
from pydantic import ValidationError

from epos_opensource.core.errors import ConfigError
from epos_opensource.core.models.config import Config, FilePickerMode, TUIConfig
from epos_opensource.core.platform import DARWIN, WINDOWS

logger = logging.getLogger(__name__)

__all__ = [
    "ConfigError",
    "default_config",
    "load_config",
    "save_config",
    "validate_config",
]

_DARWIN_OPEN = "open"
_LINUX_OPEN = "xdg-open"


def default_config(system: str) -> Config:
    """Return the default configuration for an OS (``platform.system()`` value)."""
    if system == DARWIN:
        url_cmd = dir_cmd = file_cmd = _DARWIN_OPEN
    elif system == WINDOWS:
        url_cmd = "cmd /c start"
        dir_cmd = file_cmd = "explorer"
    else:
        url_cmd = dir_cmd = file_cmd = _LINUX_OPEN

    return Config(
        tui=TUIConfig(
            open_url_command=url_cmd,
            open_directory_command=dir_cmd,
            open_file_command=file_cmd,
            file_picker_mode=FilePickerMode.NATIVE.value,
        )
    )


def validate_config(cfg: Config) -> None:
    """Check the semantic rules the schema alone does not enforce.

    Raises:
        ConfigError: On an empty open command or an unknown picker mode.
    """
    tui = cfg.tui
    if not tui.open_url_command.strip():
        raise ConfigError("openURLCommand cannot be empty")
    if not tui.open_directory_command.strip():
        raise ConfigError("openDirectoryCommand cannot be empty")
    if not tui.open_file_command.strip():
        raise ConfigError("openFileCommand cannot be empty")
    valid_modes = {m.value for m in FilePickerMode}
    if tui.file_picker_mode not in valid_modes:
        raise ConfigError(
            f"filePickerMode must be one of {', '.join(sorted(valid_modes))}, "
            f"got {tui.file_picker_mode!r}"
        )


def load_config(path: Path, system: str) -> Config:
    """Load the user configuration, falling back to defaults.

    Args:
        path: Path to epos-opensource.yaml.
        system: OS used to pick defaults.

    Returns:
        A validated Config.

    Raises:
        ConfigError: If the file cannot be read, or parses but is invalid.
    """
    if not path.is_file():
        logger.debug("No config file at %s — using defaults", path)
        return default_config(system)

    try:
        raw = path.read_text(encoding="utf-8")
    except OSError as e:
        raise ConfigError(f"Cannot read {path}: {e}", str(path)) from e

    try:
        data = yaml.safe_load(raw)
    except yaml.YAMLError as e:
        logger.warning("Invalid YAML in %s: %s — using defaults", path, e)
        return default_config(system)

    if not isinstance(data, dict):
        raise ConfigError(
            f"invalid config {path}: expected a YAML mapping, got {type(data).__name__}",
            str(path),
        )

    try:
        cfg = Config.model_validate(data)
    except ValidationError as e:
        raise ConfigError(f"invalid config {path}: {e}", str(path)) from e

    try:
        validate_config(cfg)
    except ConfigError as e:
        raise ConfigError(f"invalid config {path}: {e}", str(path)) from e

    logger.debug("Loaded config from %s", path)
    return cfg


def save_config(cfg: Config, path: Path) -> None:
    """Write the configuration as YAML, readable by the owner only.

    Raises:
        ConfigError: If the configuration is invalid or cannot be written.
    """
    validate_config(cfg)

    content = yaml.safe_dump(cfg.to_yaml_dict(), sort_keys=False, default_flow_style=False)
    try:
        path.parent.mkdir(mode=0o750, parents=True, exist_ok=True)
        fd = os.open(path, os.O_WRONLY | os.O_CREAT | os.O_TRUNC, 0o600)
        with os.fdopen(fd, "w", encoding="utf-8") as f:
            f.write(content)
        os.chmod(path, 0o600)
    except OSError as e:
        raise ConfigError(f"Cannot write {path}: {e}", str(path)) from e

    logger.info("Config saved to %s", path)
