"""
kubectl adapter — context lookup and namespace teardown.

Each cluster environment lives in a namespace named after it, on the
context recorded in the registry.
"""

from __future__ import annotations

import logging

from epos_opensource.adapters.display import Display
from epos_opensource.adapters.shell.command import Command, run_command
from epos_opensource.core.errors import CommandError

logger = logging.getLogger(__name__)

KUBECTL = "kubectl"


def current_context(display: Display | None = None) -> str:
    """Return the active kubectl context."""
    out = run_command(
        Command(args=[KUBECTL, "config", "current-context"]),
        capture=True,
        display=display,
    )
    return out.strip()


def list_contexts(display: Display | None = None) -> list[str]:
    out = run_command(
        Command(args=[KUBECTL, "config", "get-contexts", "-o", "name"]),
        capture=True,
        display=display,
    )
    return [line.strip() for line in out.splitlines() if line.strip()]


def context_exists(context: str, display: Display | None = None) -> bool:
    return context in list_contexts(display=display)


def delete_namespace(namespace: str, context: str, display: Display | None = None) -> None:
    """Delete *namespace* on *context* and wait for it to go away.

    Raises:
        CommandError: If kubectl fails.
    """
    logger.info("Deleting namespace %s on context %s", namespace, context)
    try:
        run_command(
            Command(
                args=[
                    KUBECTL, "delete", "namespace", namespace,
                    "--context", context,
                    "--ignore-not-found",
                    "--wait=true",
                ],
            ),
            display=display,
        )
    except CommandError as e:
        raise CommandError(
            f"failed to delete namespace {namespace}: {e}",
            e.executable,
            returncode=e.returncode,
        ) from e
