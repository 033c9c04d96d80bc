"""
Table rendering for environment listings.

Plain padded columns via click; a column that is empty in every row is
left out (e.g. a stack deployed without a backoffice).
"""

from __future__ import annotations

from collections.abc import Sequence

import click

from epos_opensource.core.models.environment import ClusterEnvironment, ContainerEnvironment

_GAP = "  "


def visible_columns(headers: Sequence[str], rows: Sequence[Sequence[str]]) -> list[int]:
    """Indexes of the columns that have a value in at least one row."""
    return [i for i in range(len(headers)) if any(row[i] for row in rows)]


def render_table(headers: Sequence[str], rows: Sequence[Sequence[str]]) -> list[str]:
    """Format *rows* under *headers*, one string per output line."""
    keep = visible_columns(headers, rows) if rows else list(range(len(headers)))
    widths = [max([len(headers[i]), *(len(row[i]) for row in rows)]) for i in keep]

    def line(cells: Sequence[str]) -> str:
        return _GAP.join(cells[i].ljust(w) for i, w in zip(keep, widths)).rstrip()

    header = click.style(line(headers), bold=True)
    rule = _GAP.join("─" * w for w in widths)
    return [header, rule, *(line(row) for row in rows)]


# ── Environment tables ──────────────────────────────────────────

CONTAINER_HEADERS = ("Name", "Directory", "GUI URL", "API URL", "Backoffice URL")
CLUSTER_HEADERS = ("Name", "Context", "Directory", "GUI URL", "API URL", "Backoffice URL")
URL_HEADERS = ("Service", "URL")


def container_rows(envs: Sequence[ContainerEnvironment]) -> list[list[str]]:
    return [
        [e.name, e.directory, e.gui_url, e.gateway_url, e.backoffice_home_url]
        for e in envs
    ]


def cluster_rows(envs: Sequence[ClusterEnvironment]) -> list[list[str]]:
    return [
        [e.name, e.context, e.directory, e.gui_url, e.gateway_url, e.backoffice_home_url]
        for e in envs
    ]


def url_rows(env: ContainerEnvironment | ClusterEnvironment) -> list[list[str]]:
    """The user-facing entry points of one environment."""
    rows = [
        ["GUI", env.gui_url],
        ["API", env.gateway_url],
        ["Backoffice", env.backoffice_home_url],
    ]
    return [row for row in rows if row[1]]


def environment_dict(env: ContainerEnvironment | ClusterEnvironment) -> dict:
    """JSON-ready view of an environment, derived URLs included."""
    data = env.model_dump()
    data["platform"] = env.platform
    data["gateway_url"] = env.gateway_url
    data["backoffice_home_url"] = env.backoffice_home_url
    return data


def echo_table(headers: Sequence[str], rows: Sequence[Sequence[str]]) -> None:
    for text in render_table(headers, rows):
        click.echo(f"   {text}")
