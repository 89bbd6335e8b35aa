"""CLI de consulta de items (Typer + Rich).

Capa de presentación: construye transporte, servicios y workflows de forma
explícita, emite intents (submit, select, retry) y pinta los snapshots de
estado. No contiene lógica de negocio.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Optional

import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape

from adapters.http_client import ApiClient
from cli import doctor
from cli.ui_components import build_health_panel, build_item_panel, build_items_table, print_banner
from core.config import AppSettings
from core.domain.errors import ApiRequestError
from core.domain.models import Item
from core.domain.state import HealthProbeState, Phase, SearchState
from core.services.health_service import HealthService
from core.services.health_workflow import HealthProbeWorkflow
from core.services.items_service import ItemsService
from core.services.search_workflow import SearchWorkflow

app = typer.Typer(no_args_is_help=True, help="Search and inspect EVE Online items via the profit backend.")
app.command(name="doctor")(doctor.run)

_console = Console()


def configure_logging(level: str) -> None:
    logging.basicConfig(
        level=level.upper(),
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=Console(stderr=True), rich_tracebacks=True)],
        force=True,
    )


@app.callback()
def main(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Log every API request (DEBUG)."),
    banner: bool = typer.Option(False, "--banner", help="Show the welcome banner."),
) -> None:
    settings = AppSettings()
    configure_logging("DEBUG" if verbose else settings.log_level)
    if banner:
        print_banner(_console)


async def _probe_health(settings: AppSettings) -> HealthProbeState:
    async with ApiClient(settings) as client:
        workflow = HealthProbeWorkflow(HealthService(client))
        return await workflow.start()


async def _run_search(
    settings: AppSettings,
    query: str,
    select: int | None,
) -> tuple[SearchState, Item | None]:
    async with ApiClient(settings) as client:
        workflow = SearchWorkflow(ItemsService(client))
        state = await workflow.submit(query)

    if select is not None:
        match = next((item for item in state.results if item.type_id == select), None)
        if match is not None:
            workflow.select_item(match)
    return state, workflow.selected_item


async def _lookup_item(settings: AppSettings, type_id: int) -> Item:
    async with ApiClient(settings) as client:
        result = await ItemsService(client).get_item_by_id(type_id)
    return result.unwrap()


@app.command()
def health() -> None:
    """Probe the backend health endpoint."""

    state = asyncio.run(_probe_health(AppSettings()))
    _console.print(build_health_panel(state))
    if state.phase is Phase.ERROR:
        raise typer.Exit(code=1)


@app.command()
def search(
    query: str = typer.Argument(..., help="Item name or fragment (e.g. Tritanium, Veldspar)."),
    select: Optional[int] = typer.Option(None, "--select", "-s", help="type_id of a result to show in detail."),
) -> None:
    """Search items by name."""

    state, selected = asyncio.run(_run_search(AppSettings(), query, select))

    if state.phase is Phase.ERROR:
        _console.print(f"[red]{escape(state.error_message or '')}[/red]")
        raise typer.Exit(code=1)

    _console.print(build_items_table(state.results))

    if select is not None:
        if selected is None:
            _console.print(f"[yellow]No result with type_id {select}.[/yellow]")
            raise typer.Exit(code=1)
        _console.print(build_item_panel(selected))


@app.command()
def item(type_id: int = typer.Argument(..., help="EVE type_id (e.g. 34 for Tritanium).")) -> None:
    """Look up a single item by type_id."""

    try:
        found = asyncio.run(_lookup_item(AppSettings(), type_id))
    except ApiRequestError as exc:
        _console.print(f"[red]Lookup failed ({exc.kind.value} {exc.status}):[/red] {escape(str(exc))}")
        raise typer.Exit(code=1) from exc

    _console.print(build_item_panel(found, title=found.type_name))


def run() -> None:
    app()
