"""
Helpers shared by the CLI command groups.
"""

from __future__ import annotations

import sys
from typing import NoReturn

import click

from epos_opensource.adapters.display import Display
from epos_opensource.core.errors import EposError
from epos_opensource.core.persistence.registry import Registry
from epos_opensource.core.platform import Platform


def get_registry(ctx: click.Context) -> Registry:
    return ctx.obj["registry"]


def get_display(ctx: click.Context) -> Display:
    return ctx.obj["display"]


def get_platform(ctx: click.Context) -> Platform:
    return ctx.obj["platform"]


def fail(ctx: click.Context, err: EposError) -> NoReturn:
    """Report *err* at error severity and exit with status 1."""
    get_display(ctx).error(str(err))
    sys.exit(1)
