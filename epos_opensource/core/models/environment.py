"""
Environment models — one row of the registry each.

Container environments run under Docker Compose on the workstation.
Cluster environments are deployed to a Kubernetes context. Both are
keyed by ``name`` within their own platform; a container and a cluster
environment may share a name.
"""

from __future__ import annotations

import os
from typing import ClassVar, Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator

from epos_opensource.core.validation import NAME_PATTERN


def _join_url(base: str, segment: str) -> str:
    """Append a path segment to a URL, keeping exactly one slash between."""
    if not base:
        return ""
    return base.rstrip("/") + "/" + segment


class _EnvironmentBase(BaseModel):
    """Fields shared by both platforms."""

    model_config = ConfigDict(frozen=True)

    platform: ClassVar[str] = ""

    name: str = Field(min_length=1)
    directory: str
    api_url: str
    gui_url: str
    backoffice_url: str

    @field_validator("name")
    @classmethod
    def _check_name(cls, value: str) -> str:
        if not NAME_PATTERN.fullmatch(value):
            raise ValueError("only letters, digits, '.', '_' and '-' allowed")
        return value

    @field_validator("directory")
    @classmethod
    def _check_directory(cls, value: str) -> str:
        if not os.path.isabs(value):
            raise ValueError(f"directory must be an absolute path, got {value!r}")
        return value

    @property
    def gateway_url(self) -> str:
        """API gateway UI, as shown in environment listings."""
        return _join_url(self.api_url, "ui")

    @property
    def backoffice_home_url(self) -> str:
        return _join_url(self.backoffice_url, "home")


class ContainerEnvironment(_EnvironmentBase):
    """An environment orchestrated by Docker Compose."""

    platform: ClassVar[str] = "docker"

    api_port: int = Field(ge=1, le=65535)
    gui_port: int = Field(ge=1, le=65535)
    backoffice_port: int = Field(ge=1, le=65535)


class ClusterEnvironment(_EnvironmentBase):
    """An environment deployed against a Kubernetes context."""

    platform: ClassVar[str] = "kubernetes"

    context: str = Field(min_length=1)
    protocol: Literal["http", "https"]
