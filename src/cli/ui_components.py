"""Componentes de UI para CLI (Rich).

Por qué separar componentes:
- Evita mezclar lógica de comandos con detalles visuales.
- Permite reutilizar tablas/paneles en múltiples comandos.
"""

from __future__ import annotations

import json
from typing import Any, Sequence

from rich.align import Align
from rich.console import Console
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

_MAX_COLUMNS = 8


def print_banner(console: Console) -> None:
    """Imprime el banner de bienvenida (solo en modo interactivo)."""

    title = Text("AoT client", style="bold cyan")
    subtitle = Text("Array of Things • Projects • Nodes • Sensors • Observations", style="dim")
    body = Align.center(Text.assemble(title, "\n", subtitle), vertical="middle")
    console.print(Panel(body, border_style="cyan", padding=(1, 4)))


def _cell(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, (dict, list)):
        return json.dumps(value, ensure_ascii=False)
    return str(value)


def build_items_table(title: str, items: Sequence[dict[str, Any]]) -> Table:
    """Tabla con una fila por item; columnas = claves del primer item."""

    table = Table(title=title)
    columns: list[str] = []
    if items and isinstance(items[0], dict):
        columns = list(items[0].keys())[:_MAX_COLUMNS]

    for index, column in enumerate(columns):
        table.add_column(column, style="cyan" if index == 0 else "white", no_wrap=index == 0)

    for item in items:
        if isinstance(item, dict):
            table.add_row(*(_cell(item.get(column)) for column in columns))
    return table


def build_detail_panel(title: str, item: dict[str, Any]) -> Panel:
    """Panel clave/valor para un único objeto (llamadas de detalle)."""

    body = Text()
    for key, value in item.items():
        body.append(f"{key}: ", style="bold")
        body.append(_cell(value) + "\n")
    return Panel(body, title=Text(title, style="bold yellow"), border_style="yellow")
