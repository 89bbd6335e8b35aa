"""Componentes de UI para CLI (Rich).

Por qué separar componentes:
- Evita mezclar lógica de comandos con detalles visuales.
- Los componentes solo leen snapshots de estado; nunca llaman a servicios.
"""

from __future__ import annotations

from typing import Iterable

from rich.align import Align
from rich.console import Console
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from core.domain.models import Item
from core.domain.state import HealthProbeState, Phase


def print_banner(console: Console) -> None:
    """Imprime el banner de bienvenida."""

    title = Text("EVE Profit Calculator 2.0", style="bold cyan")
    subtitle = Text("Modern Trading Analysis for EVE Online", style="dim")
    body = Align.center(Text.assemble(title, "\n", subtitle), vertical="middle")
    console.print(Panel(body, border_style="cyan", padding=(1, 4)))


def build_items_table(items: Iterable[Item]) -> Table:
    rows = list(items)
    table = Table(title=f"Search Results ({len(rows)} items)")
    table.add_column("Type ID", style="cyan", no_wrap=True)
    table.add_column("Name", style="white")
    table.add_column("Group", style="magenta")
    table.add_column("Volume (m³)", justify="right")
    table.add_column("Published", style="green")
    for item in rows:
        table.add_row(
            str(item.type_id),
            item.type_name,
            str(item.group_id),
            f"{item.volume:g}",
            "yes" if item.published else "database item",
        )
    return table


def build_item_panel(item: Item, *, title: str = "Selected Item") -> Panel:
    """Detalle de un item (nombre, ids, volumen y, si existen, masa/descripción)."""

    body = Text()
    body.append("Name: ", style="bold")
    body.append(f"{item.type_name}\n")
    body.append("Type ID: ", style="bold")
    body.append(f"{item.type_id}\n")
    body.append("Group ID: ", style="bold")
    body.append(f"{item.group_id}\n")
    body.append("Volume: ", style="bold")
    body.append(f"{item.volume:g} m³")
    if item.mass:
        body.append("\nMass: ", style="bold")
        body.append(f"{item.mass:g} kg")
    if item.description:
        body.append("\nDescription: ", style="bold")
        body.append(item.description.strip())
    return Panel(body, title=title, border_style="green")


def build_health_panel(state: HealthProbeState) -> Panel:
    if state.phase is Phase.SUCCESS and state.health is not None:
        body = Text("Backend Connected\n", style="bold green")
        body.append(f"Status: {state.health.status}\n")
        body.append(f"Timestamp: {state.health.time.isoformat()}")
        if state.health.version:
            body.append(f"\nVersion: {state.health.version}", style="dim")
        return Panel(body, title="Backend Status", border_style="green")

    if state.phase is Phase.ERROR:
        return Panel(Text(state.error_message or "", style="red"), title="Backend Status", border_style="red")

    return Panel(Text("Checking backend connection...", style="dim"), title="Backend Status")
