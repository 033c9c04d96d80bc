"""
Docker adapter — the compose operations the registry needs.

Uses the docker CLI through the command runner, never the Docker API.
Compose reports progress on stderr; the runner shows it live.
"""

from __future__ import annotations

import logging
import shutil

from epos_opensource.adapters.display import Display
from epos_opensource.adapters.shell.command import Command, run_command
from epos_opensource.core.errors import CommandError
from epos_opensource.core.models.environment import ContainerEnvironment

logger = logging.getLogger(__name__)

DOCKER = "docker"


def is_available() -> bool:
    """Whether the docker CLI is on PATH."""
    return shutil.which(DOCKER) is not None


def daemon_version(display: Display | None = None) -> str:
    """Return the server version reported by the docker daemon.

    Raises:
        CommandError: If docker is missing or the daemon is not reachable.
    """
    out = run_command(
        Command(args=[DOCKER, "version", "--format", "{{.Server.Version}}"]),
        capture=True,
        display=display,
    )
    return out.strip()


def compose_down(env: ContainerEnvironment, display: Display | None = None) -> None:
    """Stop the compose project of *env* and remove its volumes.

    Raises:
        CommandError: If compose fails; the stack may be partially up.
    """
    logger.info("Stopping compose project %s in %s", env.name, env.directory)
    try:
        run_command(
            Command(
                args=[DOCKER, "compose", "-p", env.name, "down", "-v"],
                cwd=env.directory,
            ),
            display=display,
        )
    except CommandError as e:
        raise CommandError(
            f"docker compose down failed for '{env.name}': {e}",
            e.executable,
            returncode=e.returncode,
        ) from e
