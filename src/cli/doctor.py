"""Doctor command for backend diagnostics."""

from __future__ import annotations

import asyncio

import typer
from rich.console import Console
from rich.table import Table

from adapters.http_client import ApiClient
from core.config import AppSettings
from core.domain.result import ApiResult, Err
from core.services.health_service import HealthService

_console = Console()


async def _run_checks(settings: AppSettings) -> list[tuple[str, ApiResult]]:
    async with ApiClient(settings) as client:
        health = HealthService(client)
        results = await asyncio.gather(
            health.get_health_status(),
            health.check_database_connection(),
            health.check_esi_connection(),
        )
    return list(zip(("Backend health", "SDE database", "ESI connection"), results))


def _describe(result: ApiResult) -> tuple[bool, str]:
    if isinstance(result, Err):
        error = result.error
        return False, f"{error.kind.value} ({error.status}): {error.message}"
    return True, result.value.status


def run() -> None:
    """Run backend diagnostics (health, SDE database, ESI)."""

    settings = AppSettings()

    table = Table(title="EVE Items Doctor")
    table.add_column("Check", style="bright_green", no_wrap=True)
    table.add_column("Status", style="white")
    table.add_column("Details", style="dim")

    table.add_row("API root", "OK", settings.api_root)
    table.add_row("Timeout", "OK", f"{settings.http_timeout_seconds:g}s")

    failures = 0
    for name, result in asyncio.run(_run_checks(settings)):
        ok, detail = _describe(result)
        table.add_row(name, "OK" if ok else "FAIL", detail)
        if not ok:
            failures += 1

    _console.print(table)

    if failures:
        _console.print(
            "\n[yellow]Note:[/yellow] NETWORK_ERROR means the backend is not running at the API root above."
        )
        raise typer.Exit(code=1)
