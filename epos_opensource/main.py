"""
epos-opensource — CLI entrypoint.

Usage:
    epos-opensource --help
    epos-opensource list
    epos-opensource docker get my-env
    epos-opensource k8s delete my-env
"""

from __future__ import annotations

import json

import click

from epos_opensource import __version__
from epos_opensource.core.observability.logging_config import setup_logging


@click.group()
@click.version_option(version=__version__, prog_name="epos-opensource")
@click.option("--verbose", "-v", is_flag=True, help="Enable verbose output.")
@click.option("--quiet", "-q", is_flag=True, help="Suppress non-essential output.")
@click.option("--debug", is_flag=True, help="Enable debug logging (very verbose).")
@click.pass_context
def cli(ctx: click.Context, verbose: bool, quiet: bool, debug: bool) -> None:
    """epos-opensource — manage local EPOS environments."""
    from epos_opensource.adapters.display import ConsoleDisplay
    from epos_opensource.core.context import set_platform
    from epos_opensource.core.persistence.registry import Registry
    from epos_opensource.core.platform import Platform

    platform = Platform.detect()
    set_platform(platform)

    ctx.ensure_object(dict)
    ctx.obj["verbose"] = verbose
    ctx.obj["quiet"] = quiet
    ctx.obj["debug"] = debug
    ctx.obj["platform"] = platform
    ctx.obj["registry"] = Registry.for_platform(platform)
    ctx.obj["display"] = ConsoleDisplay(debug=debug)

    # ── Logging setup (once, at process start) ──────────────────
    setup_logging(debug=debug, verbose=verbose, quiet=quiet, log_file=platform.log_path)


@cli.command("list")
@click.option("--json-output", "--json", "as_json", is_flag=True, help="Output as JSON.")
@click.pass_context
def list_all(ctx: click.Context, as_json: bool) -> None:
    """List every installed environment, Docker and Kubernetes."""
    from epos_opensource.core.errors import EposError
    from epos_opensource.core.services.environments import list_environments
    from epos_opensource.ui.cli.common import fail, get_registry
    from epos_opensource.ui.cli.render import echo_table, environment_dict

    try:
        envs = list_environments(get_registry(ctx))
    except EposError as e:
        fail(ctx, e)

    if as_json:
        click.echo(json.dumps([environment_dict(e) for e in envs], indent=2))
        return

    if not envs:
        click.secho("No environments installed", fg="yellow")
        return

    click.secho(f"📋 Environments ({len(envs)})", fg="cyan", bold=True)
    echo_table(
        ("Platform", "Name", "Directory", "GUI URL"),
        [[e.platform, e.name, e.directory, e.gui_url] for e in envs],
    )
    click.echo()


# ── Register sub-command groups from epos_opensource/ui/cli/ ──────────

from epos_opensource.ui.cli.config import config
from epos_opensource.ui.cli.docker import docker
from epos_opensource.ui.cli.k8s import k8s

cli.add_command(docker)
cli.add_command(k8s)
cli.add_command(config)


if __name__ == "__main__":
    cli()
