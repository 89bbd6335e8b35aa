"""Snapshots de estado de los workflows (búsqueda, health probe).

Los snapshots son inmutables: cada transición produce uno nuevo y los
observadores (CLI, tests) nunca ven un estado a medio actualizar.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from core.domain.models import HealthStatus, Item


class Phase(str, Enum):
    IDLE = "idle"
    LOADING = "loading"
    SUCCESS = "success"
    ERROR = "error"


@dataclass(frozen=True)
class SearchState:
    """State of the item search workflow.

    `results` and `error_message` are never populated at the same time.
    """

    phase: Phase = Phase.IDLE
    query: str = ""
    results: tuple[Item, ...] = ()
    error_message: str | None = None

    @property
    def is_loading(self) -> bool:
        return self.phase is Phase.LOADING


@dataclass(frozen=True)
class HealthProbeState:
    """State of the backend health probe."""

    phase: Phase = Phase.IDLE
    health: HealthStatus | None = None
    error_message: str | None = None

    @property
    def is_loading(self) -> bool:
        return self.phase is Phase.LOADING
