"""
CLI commands for the user configuration file (epos-opensource.yaml).
"""

from __future__ import annotations

import json
from pathlib import Path

import click
import yaml

from epos_opensource.core.errors import EposError
from epos_opensource.ui.cli.common import fail, get_display, get_platform


@click.group()
def config() -> None:
    """Configuration — show, initialize, import."""


@config.command("path")
@click.pass_context
def path_cmd(ctx: click.Context) -> None:
    """Print where the configuration file lives."""
    click.echo(str(get_platform(ctx).config_path))


@config.command("show")
@click.option("--json-output", "--json", "as_json", is_flag=True, help="Output as JSON.")
@click.pass_context
def show_cmd(ctx: click.Context, as_json: bool) -> None:
    """Show the effective configuration (defaults when no file exists)."""
    from epos_opensource.core.config.loader import load_config

    platform = get_platform(ctx)
    try:
        cfg = load_config(platform.config_path, platform.system)
    except EposError as e:
        fail(ctx, e)

    data = cfg.to_yaml_dict()
    if as_json:
        click.echo(json.dumps(data, indent=2))
        return
    click.echo(yaml.safe_dump(data, sort_keys=False, default_flow_style=False), nl=False)


@config.command("init")
@click.option("--force", is_flag=True, help="Overwrite an existing file.")
@click.pass_context
def init_cmd(ctx: click.Context, force: bool) -> None:
    """Write the platform defaults to the configuration file."""
    from epos_opensource.core.config.loader import default_config, save_config

    platform = get_platform(ctx)
    path = platform.config_path
    if path.exists() and not force:
        click.secho(f"⚠️  {path} already exists (use --force to overwrite)", fg="yellow")
        return
    try:
        save_config(default_config(platform.system), path)
    except EposError as e:
        fail(ctx, e)
    get_display(ctx).done(f"Wrote default configuration to {path}")


@config.command("import")
@click.argument("source")
@click.pass_context
def import_cmd(ctx: click.Context, source: str) -> None:
    """Validate SOURCE and install it as the configuration file."""
    from epos_opensource.core.config.loader import load_config, save_config
    from epos_opensource.core.validation import validate_file

    platform = get_platform(ctx)
    try:
        validate_file(source)
        cfg = load_config(Path(source), platform.system)
        save_config(cfg, platform.config_path)
    except EposError as e:
        fail(ctx, e)
    get_display(ctx).done(f"Imported configuration from {source}")
