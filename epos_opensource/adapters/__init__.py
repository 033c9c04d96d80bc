"""
Adapters — everything that touches the world outside the process.

    from epos_opensource.adapters import Command, run_command, Display
"""

from epos_opensource.adapters.display import ConsoleDisplay, Display
from epos_opensource.adapters.mock import RecordingDisplay
from epos_opensource.adapters.shell.command import Command, run_command, start_detached

__all__ = [
    "Command",
    "ConsoleDisplay",
    "Display",
    "RecordingDisplay",
    "run_command",
    "start_detached",
]
