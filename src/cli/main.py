"""CLI principal (Typer).

Ejemplos::

    aot-client list observations -f "value=lt,42" -f "timestamp=ge,2018-04-21T15:00:00"
    aot-client list nodes --all --json
    aot-client get sensor metsense.bmp180.temperature
"""

from __future__ import annotations

import asyncio
import json
import logging
from enum import Enum
from typing import Any, NoReturn

import httpx
import typer
from rich.console import Console
from rich.logging import RichHandler

from adapters.aot_client import AotClient
from cli.doctor import app as doctor_app
from cli.ui_components import build_detail_panel, build_items_table, print_banner
from core.domain.errors import AotHttpError
from core.domain.filters import F, FilterSet
from core.domain.models import Envelope
from core.services.pagination import collect_data

app = typer.Typer(no_args_is_help=True, help="Array of Things REST API client.")
app.add_typer(doctor_app, name="doctor")

_console = Console()
_err_console = Console(stderr=True)


class ListResource(str, Enum):
    PROJECTS = "projects"
    NODES = "nodes"
    SENSORS = "sensors"
    OBSERVATIONS = "observations"
    RAW_OBSERVATIONS = "raw-observations"

    @property
    def method_name(self) -> str:
        return "list_" + self.value.replace("-", "_")


class DetailResource(str, Enum):
    PROJECT = "project"
    NODE = "node"
    SENSOR = "sensor"

    @property
    def method_name(self) -> str:
        return f"get_{self.value}_details"


def parse_filter_option(raw: str) -> FilterSet:
    """`"timestamp=ge,2018-04-21T15:00:00"` -> `F("timestamp", "ge", "2018-04-21T15:00:00")`."""

    key, sep, tokens = raw.partition("=")
    key = key.strip()
    if not sep or not key:
        raise typer.BadParameter(f"expected KEY=TOKEN[,TOKEN...], got {raw!r}")
    values = [token.strip() for token in tokens.split(",")] if tokens else []
    return F(key, *values)


def build_filters(filters: list[str] | None, overrides: list[str] | None) -> FilterSet | None:
    """AND de todos los `--filter` y luego OR de todos los `--override`."""

    if not filters and not overrides:
        return None

    combined = FilterSet()
    for raw in filters or []:
        combined.and_(parse_filter_option(raw))
    for raw in overrides or []:
        combined.or_(parse_filter_option(raw))
    return combined


def _build_client(hostname: str | None) -> AotClient:
    return AotClient(hostname)


def _configure_logging(verbose: bool) -> None:
    if not verbose:
        return
    logging.basicConfig(
        level=logging.DEBUG,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=_err_console, show_path=False)],
    )


async def _run_list(
    hostname: str | None,
    resource: ListResource,
    filters: FilterSet | None,
    follow_all: bool,
) -> tuple[Envelope, list[Any]]:
    async with _build_client(hostname) as client:
        first = await getattr(client, resource.method_name)(filters=filters)
        if follow_all:
            return first, await collect_data(client, first)

    data = first.get("data")
    items = data if isinstance(data, list) else ([] if data is None else [data])
    return first, items


async def _run_get(
    hostname: str | None,
    resource: DetailResource,
    identifier: str,
    filters: FilterSet | None,
) -> Envelope:
    async with _build_client(hostname) as client:
        return await getattr(client, resource.method_name)(identifier, filters=filters)


def _fail(message: str) -> NoReturn:
    _err_console.print(f"[red]{message}[/red]")
    raise typer.Exit(code=1)


@app.callback()
def main(
    ctx: typer.Context,
    hostname: str | None = typer.Option(None, "--hostname", help="Override API base URL."),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Log every request."),
) -> None:
    """Array of Things REST API client."""

    _configure_logging(verbose)
    ctx.obj = {"hostname": hostname}


@app.command("list")
def list_command(
    ctx: typer.Context,
    resource: ListResource = typer.Argument(..., help="Collection to list."),
    filter_: list[str] | None = typer.Option(None, "--filter", "-f", help="KEY=TOKEN[,TOKEN...] (AND)."),
    override: list[str] | None = typer.Option(None, "--override", "-o", help="KEY=TOKEN[,TOKEN...] (OR)."),
    follow_all: bool = typer.Option(False, "--all", help="Follow pagination until the last page."),
    as_json: bool = typer.Option(False, "--json", help="Print raw JSON instead of a table."),
) -> None:
    """List a collection (one page, or every page with --all)."""

    hostname = (ctx.obj or {}).get("hostname")
    filters = build_filters(filter_, override)

    try:
        envelope, items = asyncio.run(_run_list(hostname, resource, filters, follow_all))
    except AotHttpError as exc:
        _fail(f"API error: HTTP {exc.status_code} ({exc.url})")
    except (httpx.HTTPError, json.JSONDecodeError) as exc:
        _fail(f"Request failed: {exc}")

    if as_json:
        payload: Any = items if follow_all else envelope
        typer.echo(json.dumps(payload, ensure_ascii=False, indent=2))
        return

    if _console.is_terminal:
        print_banner(_console)
    _console.print(build_items_table(resource.value, items))
    _console.print(f"[dim]{len(items)} item(s)[/dim]")


@app.command("get")
def get_command(
    ctx: typer.Context,
    resource: DetailResource = typer.Argument(..., help="Kind of resource."),
    identifier: str = typer.Argument(..., help="Project slug, node VSN or sensor path."),
    filter_: list[str] | None = typer.Option(None, "--filter", "-f", help="KEY=TOKEN[,TOKEN...] (AND)."),
    as_json: bool = typer.Option(False, "--json", help="Print raw JSON instead of a panel."),
) -> None:
    """Show the details of a single project, node or sensor."""

    hostname = (ctx.obj or {}).get("hostname")
    filters = build_filters(filter_, None)

    try:
        envelope = asyncio.run(_run_get(hostname, resource, identifier, filters))
    except AotHttpError as exc:
        _fail(f"API error: HTTP {exc.status_code} ({exc.url})")
    except (httpx.HTTPError, json.JSONDecodeError) as exc:
        _fail(f"Request failed: {exc}")

    if as_json:
        typer.echo(json.dumps(envelope, ensure_ascii=False, indent=2))
        return

    data = envelope.get("data")
    if isinstance(data, dict):
        _console.print(build_detail_panel(f"{resource.value} {identifier}", data))
    else:
        _console.print(data)


def run() -> None:
    app()
