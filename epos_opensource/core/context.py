"""
Process context — the Platform chosen at startup.

The entry point resolves the Platform once and registers it here:

    - CLI:    main.py   → context.set_platform(Platform.detect())
    - Tests:  conftest  → context.set_platform(<tmp_path platform>)

Core services take the Platform (or a Registry built from it) as an
argument; this module only serves callers that sit above them.
"""

from __future__ import annotations

from typing import Optional

from epos_opensource.core.platform import Platform

_platform: Optional[Platform] = None


def set_platform(platform: Platform) -> None:
    """Register the platform for the current process."""
    global _platform
    _platform = platform


def get_platform() -> Platform:
    """Return the registered platform, detecting it on first use."""
    global _platform
    if _platform is None:
        _platform = Platform.detect()
    return _platform


def reset_platform() -> None:
    """Forget the registered platform (tests)."""
    global _platform
    _platform = None
