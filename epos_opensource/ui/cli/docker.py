"""
CLI commands for Docker Compose environments.

Thin wrappers over ``epos_opensource.core.services.environments``.
"""

from __future__ import annotations

import json

import click

from epos_opensource.core.errors import EposError
from epos_opensource.ui.cli.common import fail, get_display, get_platform, get_registry
from epos_opensource.ui.cli.render import (
    CONTAINER_HEADERS,
    URL_HEADERS,
    container_rows,
    echo_table,
    environment_dict,
    url_rows,
)

OPEN_TARGETS = ("gui", "api", "backoffice", "directory")


@click.group()
def docker() -> None:
    """Docker environments — list, inspect, open, register, delete."""


# ── Read ────────────────────────────────────────────────────────


@docker.command("list")
@click.option("--json-output", "--json", "as_json", is_flag=True, help="Output as JSON.")
@click.pass_context
def list_cmd(ctx: click.Context, as_json: bool) -> None:
    """List installed Docker environments."""
    try:
        envs = get_registry(ctx).list_container()
    except EposError as e:
        fail(ctx, e)

    if as_json:
        click.echo(json.dumps([environment_dict(e) for e in envs], indent=2))
        return

    if not envs:
        click.secho("No Docker environments installed", fg="yellow")
        return

    click.secho(f"🐳 Docker environments ({len(envs)})", fg="cyan", bold=True)
    echo_table(CONTAINER_HEADERS, container_rows(envs))
    click.echo()


@docker.command("get")
@click.argument("name")
@click.option("--json-output", "--json", "as_json", is_flag=True, help="Output as JSON.")
@click.pass_context
def get_cmd(ctx: click.Context, name: str, as_json: bool) -> None:
    """Show the URLs and directory of one Docker environment."""
    from epos_opensource.core.services.environments import get_container

    try:
        env = get_container(get_registry(ctx), name)
    except EposError as e:
        fail(ctx, e)

    if as_json:
        click.echo(json.dumps(environment_dict(env), indent=2))
        return

    click.secho(f"🐳 {env.name}", fg="cyan", bold=True)
    click.echo(f"   Directory: {env.directory}")
    click.echo(f"   Ports:     api {env.api_port}, gui {env.gui_port}, backoffice {env.backoffice_port}")
    click.echo()
    echo_table(URL_HEADERS, url_rows(env))
    click.echo()


# ── Open ────────────────────────────────────────────────────────


@docker.command("open")
@click.argument("name")
@click.argument("target", type=click.Choice(OPEN_TARGETS), default="gui")
@click.pass_context
def open_cmd(ctx: click.Context, name: str, target: str) -> None:
    """Open an environment's GUI, API, backoffice or directory."""
    from epos_opensource.adapters.shell.opener import Opener
    from epos_opensource.core.config.loader import load_config
    from epos_opensource.core.services.environments import get_container

    platform = get_platform(ctx)
    try:
        env = get_container(get_registry(ctx), name)
        opener = Opener(load_config(platform.config_path, platform.system))
        if target == "directory":
            opener.open_directory(env.directory)
        else:
            url = {
                "gui": env.gui_url,
                "api": env.gateway_url,
                "backoffice": env.backoffice_home_url,
            }[target]
            if not url:
                click.secho(f"Environment {name} has no {target} URL", fg="yellow")
                return
            opener.open_url(url)
    except EposError as e:
        fail(ctx, e)


# ── Register / delete ───────────────────────────────────────────


@docker.command("register")
@click.argument("name")
@click.argument("directory", type=click.Path(file_okay=False, resolve_path=True))
@click.option("--api-url", required=True, help="Base URL of the API gateway.")
@click.option("--gui-url", required=True, help="URL of the data portal.")
@click.option("--backoffice-url", default="", help="Base URL of the backoffice (optional).")
@click.option("--api-port", type=int, required=True)
@click.option("--gui-port", type=int, required=True)
@click.option("--backoffice-port", type=int, required=True)
@click.pass_context
def register_cmd(
    ctx: click.Context,
    name: str,
    directory: str,
    api_url: str,
    gui_url: str,
    backoffice_url: str,
    api_port: int,
    gui_port: int,
    backoffice_port: int,
) -> None:
    """Record an existing compose deployment under NAME."""
    from pydantic import ValidationError

    from epos_opensource.core.errors import InvalidInputError
    from epos_opensource.core.models.environment import ContainerEnvironment
    from epos_opensource.core.services.environments import register_container

    try:
        env = ContainerEnvironment(
            name=name,
            directory=directory,
            api_url=api_url,
            gui_url=gui_url,
            backoffice_url=backoffice_url,
            api_port=api_port,
            gui_port=gui_port,
            backoffice_port=backoffice_port,
        )
    except ValidationError as e:
        fail(ctx, InvalidInputError(f"invalid environment {name!r}: {e}"))

    try:
        register_container(get_registry(ctx), env)
    except EposError as e:
        fail(ctx, e)
    get_display(ctx).done(f"Registered docker environment: {name}")


@docker.command("delete")
@click.argument("names", nargs=-1, required=True)
@click.pass_context
def delete_cmd(ctx: click.Context, names: tuple[str, ...]) -> None:
    """Stop and remove one or more Docker environments."""
    from epos_opensource.core.services.environments import delete_containers

    try:
        delete_containers(get_registry(ctx), names, get_display(ctx))
    except EposError as e:
        fail(ctx, e)
