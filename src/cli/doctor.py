"""Doctor command for environment diagnostics."""

from __future__ import annotations

import asyncio

import httpx
import typer
from rich.console import Console
from rich.table import Table

from adapters.aot_client import AotClient
from core.config import AppSettings, get_user_env_file, write_user_env_vars
from core.domain.errors import AotHttpError

app = typer.Typer(no_args_is_help=True, help="Environment diagnostics and configuration checks.")

_console = Console()


async def _check_api(settings: AppSettings) -> tuple[bool, str]:
    try:
        async with AotClient(settings=settings) as client:
            envelope = await client.list_projects()
    except AotHttpError as exc:
        return False, f"HTTP {exc.status_code}"
    except (httpx.HTTPError, ValueError) as exc:
        return False, str(exc)

    data = envelope.get("data")
    count = len(data) if isinstance(data, list) else 0
    return True, f"{count} project(s) listed"


@app.command()
def run() -> None:
    """Show the effective settings and check that the API answers."""

    settings = AppSettings()

    table = Table(title="AoT client Doctor")
    table.add_column("Check", style="bright_green", no_wrap=True)
    table.add_column("Status", style="white")
    table.add_column("Details", style="dim")

    table.add_row("Hostname", "OK", settings.hostname)
    if settings.http_timeout_seconds is None:
        table.add_row("Timeout", "OK", "No time limit")
    else:
        table.add_row("Timeout", "OK", f"{settings.http_timeout_seconds:g}s")
    table.add_row("User config", "OK" if get_user_env_file().exists() else "OPTIONAL", str(get_user_env_file()))

    ok_api, detail_api = asyncio.run(_check_api(settings))
    table.add_row("API connectivity", "OK" if ok_api else "FAIL", detail_api)

    _console.print(table)

    if not ok_api:
        raise typer.Exit(code=1)


@app.command(name="set-hostname")
def set_hostname(
    hostname: str = typer.Argument(..., help="API base URL, e.g. https://api.arrayofthings.org/api"),
) -> None:
    """Store the API hostname in the user config .env."""

    hostname = hostname.strip().rstrip("/")
    if not hostname.startswith(("http://", "https://")):
        raise typer.BadParameter("hostname must start with http:// or https://")

    env_path = write_user_env_vars({"AOT_CLIENT_HOSTNAME": hostname})
    _console.print(f"[green]Saved hostname to:[/green] {env_path}")
