"""
CLI commands for Kubernetes environments.

Thin wrappers over ``epos_opensource.core.services.environments``.
"""

from __future__ import annotations

import json

import click

from epos_opensource.core.errors import EposError
from epos_opensource.ui.cli.common import fail, get_display, get_platform, get_registry
from epos_opensource.ui.cli.render import (
    CLUSTER_HEADERS,
    URL_HEADERS,
    cluster_rows,
    echo_table,
    environment_dict,
    url_rows,
)

OPEN_TARGETS = ("gui", "api", "backoffice", "directory")


@click.group()
def k8s() -> None:
    """Kubernetes environments — list, inspect, open, register, delete."""


# ── Read ────────────────────────────────────────────────────────


@k8s.command("list")
@click.option("--json-output", "--json", "as_json", is_flag=True, help="Output as JSON.")
@click.pass_context
def list_cmd(ctx: click.Context, as_json: bool) -> None:
    """List installed Kubernetes environments."""
    try:
        envs = get_registry(ctx).list_cluster()
    except EposError as e:
        fail(ctx, e)

    if as_json:
        click.echo(json.dumps([environment_dict(e) for e in envs], indent=2))
        return

    if not envs:
        click.secho("No Kubernetes environments installed", fg="yellow")
        return

    click.secho(f"☸️  Kubernetes environments ({len(envs)})", fg="cyan", bold=True)
    echo_table(CLUSTER_HEADERS, cluster_rows(envs))
    click.echo()


@k8s.command("get")
@click.argument("name")
@click.option("--json-output", "--json", "as_json", is_flag=True, help="Output as JSON.")
@click.pass_context
def get_cmd(ctx: click.Context, name: str, as_json: bool) -> None:
    """Show the URLs, context and directory of one Kubernetes environment."""
    from epos_opensource.core.services.environments import get_cluster

    try:
        env = get_cluster(get_registry(ctx), name)
    except EposError as e:
        fail(ctx, e)

    if as_json:
        click.echo(json.dumps(environment_dict(env), indent=2))
        return

    click.secho(f"☸️  {env.name}", fg="cyan", bold=True)
    click.echo(f"   Context:   {env.context}")
    click.echo(f"   Protocol:  {env.protocol}")
    click.echo(f"   Directory: {env.directory}")
    click.echo()
    echo_table(URL_HEADERS, url_rows(env))
    click.echo()


# ── Open ────────────────────────────────────────────────────────


@k8s.command("open")
@click.argument("name")
@click.argument("target", type=click.Choice(OPEN_TARGETS), default="gui")
@click.pass_context
def open_cmd(ctx: click.Context, name: str, target: str) -> None:
    """Open an environment's GUI, API, backoffice or directory."""
    from epos_opensource.adapters.shell.opener import Opener
    from epos_opensource.core.config.loader import load_config
    from epos_opensource.core.services.environments import get_cluster

    platform = get_platform(ctx)
    try:
        env = get_cluster(get_registry(ctx), name)
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


@k8s.command("register")
@click.argument("name")
@click.argument("directory", type=click.Path(file_okay=False, resolve_path=True))
@click.option("--context", "kube_context", required=True, help="kubectl context the environment runs on.")
@click.option("--protocol", type=click.Choice(["http", "https"]), default="http", show_default=True)
@click.option("--api-url", required=True, help="Base URL of the API gateway.")
@click.option("--gui-url", required=True, help="URL of the data portal.")
@click.option("--backoffice-url", default="", help="Base URL of the backoffice (optional).")
@click.pass_context
def register_cmd(
    ctx: click.Context,
    name: str,
    directory: str,
    kube_context: str,
    protocol: str,
    api_url: str,
    gui_url: str,
    backoffice_url: str,
) -> None:
    """Record an existing cluster deployment under NAME."""
    from pydantic import ValidationError

    from epos_opensource.core.errors import InvalidInputError
    from epos_opensource.core.models.environment import ClusterEnvironment
    from epos_opensource.core.services.environments import register_cluster

    try:
        env = ClusterEnvironment(
            name=name,
            directory=directory,
            context=kube_context,
            protocol=protocol,
            api_url=api_url,
            gui_url=gui_url,
            backoffice_url=backoffice_url,
        )
    except ValidationError as e:
        fail(ctx, InvalidInputError(f"invalid environment {name!r}: {e}"))

    try:
        register_cluster(get_registry(ctx), env)
    except EposError as e:
        fail(ctx, e)
    get_display(ctx).done(f"Registered kubernetes environment: {name}")


@k8s.command("delete")
@click.argument("names", nargs=-1, required=True)
@click.option("--context", "kube_context", default=None, help="Override the recorded kubectl context.")
@click.pass_context
def delete_cmd(ctx: click.Context, names: tuple[str, ...], kube_context: str | None) -> None:
    """Delete the namespace of one or more Kubernetes environments."""
    from epos_opensource.adapters.cluster.kubectl import context_exists
    from epos_opensource.core.errors import InvalidInputError
    from epos_opensource.core.services.environments import delete_clusters

    display = get_display(ctx)
    try:
        if kube_context and not context_exists(kube_context, display=display):
            raise InvalidInputError(f"kubectl context {kube_context!r} does not exist")
        delete_clusters(get_registry(ctx), names, display, context=kube_context)
    except EposError as e:
        fail(ctx, e)
