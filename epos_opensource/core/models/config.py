"""
Configuration models — the shape of ``epos-opensource.yaml``.

Keys in the file are camelCase (``openURLCommand``); Python attributes
are snake_case. Both spellings are accepted on input.
"""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field


class FilePickerMode(str, Enum):
    """How the interactive file picker is presented."""

    NATIVE = "native"
    TUI = "tui"


class TUIConfig(BaseModel):
    """Commands and modes used by the interactive surface."""

    model_config = ConfigDict(populate_by_name=True)

    open_url_command: str = Field(alias="openURLCommand")
    open_directory_command: str = Field(alias="openDirectoryCommand")
    open_file_command: str = Field(alias="openFileCommand")
    file_picker_mode: str = Field(alias="filePickerMode")


class Config(BaseModel):
    """Root of the user configuration file."""

    model_config = ConfigDict(populate_by_name=True)

    tui: TUIConfig

    def to_yaml_dict(self) -> dict:
        """Serialize with the on-disk key names."""
        return self.model_dump(mode="json", by_alias=True)
