"""
Shared test fixtures and configuration.
"""

import os
import stat
import textwrap
from pathlib import Path

import pytest

from epos_opensource.adapters.mock import RecordingDisplay
from epos_opensource.core import context
from epos_opensource.core.models.environment import ClusterEnvironment, ContainerEnvironment
from epos_opensource.core.persistence.registry import Registry
from epos_opensource.core.platform import Platform


@pytest.fixture
def platform(tmp_path: Path) -> Platform:
    """A Linux platform rooted in a temp directory."""
    p = Platform(
        system="Linux",
        data_dir=tmp_path / "data" / "epos-opensource",
        config_dir=tmp_path / "config",
    )
    context.set_platform(p)
    yield p
    context.reset_platform()


@pytest.fixture
def registry(platform: Platform) -> Registry:
    return Registry.for_platform(platform)


@pytest.fixture
def display() -> RecordingDisplay:
    return RecordingDisplay()


@pytest.fixture
def env_dir(tmp_path: Path) -> Path:
    """An existing environment directory."""
    d = tmp_path / "envs" / "dev"
    d.mkdir(parents=True)
    return d


def make_container(name: str = "dev", directory: str = "/tmp/dev", **overrides) -> ContainerEnvironment:
    values = dict(
        name=name,
        directory=directory,
        api_url="http://localhost:33000/api/v1",
        gui_url="http://localhost:32000",
        backoffice_url="http://localhost:34000",
        api_port=33000,
        gui_port=32000,
        backoffice_port=34000,
    )
    values.update(overrides)
    return ContainerEnvironment(**values)


def make_cluster(name: str = "dev", directory: str = "/tmp/dev", **overrides) -> ClusterEnvironment:
    values = dict(
        name=name,
        directory=directory,
        context="kind-epos",
        api_url="http://epos.local/dev/api/v1",
        gui_url="http://epos.local/dev/dataportal",
        backoffice_url="http://epos.local/dev/backoffice",
        protocol="http",
    )
    values.update(overrides)
    return ClusterEnvironment(**values)


def write_script(directory: Path, name: str, body: str) -> Path:
    """Write an executable shell script called *name* into *directory*."""
    directory.mkdir(parents=True, exist_ok=True)
    path = directory / name
    path.write_text("#!/bin/sh\n" + textwrap.dedent(body))
    path.chmod(path.stat().st_mode | stat.S_IXUSR | stat.S_IXGRP | stat.S_IXOTH)
    return path


@pytest.fixture
def bin_dir(tmp_path: Path, monkeypatch) -> Path:
    """A directory prepended to PATH for fake binaries."""
    d = tmp_path / "bin"
    d.mkdir()
    monkeypatch.setenv("PATH", f"{d}{os.pathsep}{os.environ.get('PATH', '')}")
    return d
