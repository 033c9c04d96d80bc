"""
Input validation — environment names, hosts and filesystem paths.

Everything here is a pure predicate on strings except ``validate_path``
and ``validate_file``, which stat the filesystem. Each function returns
``None`` on success and raises an ``InvalidInputError`` subclass
otherwise.
"""

from __future__ import annotations

import ipaddress
import re
from pathlib import Path

from epos_opensource.core.errors import (
    InvalidHostError,
    InvalidNameError,
    NotADirectoryPathError,
    NotAFilePathError,
    PathNotFoundError,
)

NAME_PATTERN = re.compile(r"^[A-Za-z0-9._-]+$")

_LABEL = r"[A-Za-z0-9](?:[A-Za-z0-9-]*[A-Za-z0-9])?"
HOSTNAME_PATTERN = re.compile(rf"^(?:{_LABEL}\.)*{_LABEL}$")


def validate_name(name: str) -> None:
    """Check an environment name: non-empty, letters, digits, '.', '_' and '-' only."""
    if not name:
        raise InvalidNameError("environment name must not be empty")
    # fullmatch so a trailing newline is not accepted
    if not NAME_PATTERN.fullmatch(name):
        raise InvalidNameError(
            f"invalid environment name {name!r}: only letters, digits, '.', '_' and '-' allowed"
        )


def validate_host(host: str) -> None:
    """Check an optional custom host: an IPv4/IPv6 literal or a hostname."""
    if not host:
        return
    try:
        ipaddress.ip_address(host)
        return
    except ValueError:
        pass
    if not HOSTNAME_PATTERN.fullmatch(host):
        raise InvalidHostError(f"custom host {host!r} is not a valid ip or hostname")


def validate_path(path: str | Path) -> None:
    """Check that an optional path points to an existing directory."""
    if not path:
        return
    p = Path(path)
    if not p.exists():
        raise PathNotFoundError(f"directory {p} does not exist", str(p))
    if not p.is_dir():
        raise NotADirectoryPathError(f"{p} exists but is not a directory", str(p))


def validate_file(path: str | Path) -> None:
    """Check that an optional path points to an existing regular file."""
    if not path:
        return
    p = Path(path)
    if not p.exists():
        raise PathNotFoundError(f"file {p} does not exist", str(p))
    if p.is_dir():
        raise NotAFilePathError(f"path {str(p)!r} is a directory, not a file", str(p))
