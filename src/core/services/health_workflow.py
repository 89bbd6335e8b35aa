"""Health probe del backend.

Se ejecuta una vez por sesión (`start`) y solo vuelve a correr por un
`retry` explícito del usuario. No hay reintentos automáticos.
"""

from __future__ import annotations

import logging
from typing import Callable

from core.domain.models import HealthStatus
from core.domain.result import ApiResult, Err, Ok
from core.domain.state import HealthProbeState, Phase
from core.services.health_service import HealthService

logger = logging.getLogger(__name__)

UNKNOWN_HEALTH_ERROR_MESSAGE = "Unknown error occurred"

StateListener = Callable[[HealthProbeState], None]


def backend_error_message(message: str) -> str:
    return f"Backend Error: {message}"


class HealthProbeWorkflow:
    def __init__(
        self,
        health_service: HealthService,
        *,
        on_change: StateListener | None = None,
    ) -> None:
        self._health = health_service
        self._state = HealthProbeState()
        self._listeners: list[StateListener] = []
        if on_change is not None:
            self._listeners.append(on_change)
        self._started = False

    @property
    def state(self) -> HealthProbeState:
        return self._state

    @property
    def is_backend_available(self) -> bool:
        return self._state.phase is Phase.SUCCESS

    def subscribe(self, listener: StateListener) -> Callable[[], None]:
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    async def start(self) -> HealthProbeState:
        """Primer probe de la sesión; llamadas posteriores no hacen nada."""

        if self._started:
            return self._state
        self._started = True
        return await self._probe()

    async def retry(self) -> HealthProbeState:
        if self._state.is_loading:
            logger.debug("Health retry ignored: a probe is already in flight")
            return self._state
        self._started = True
        return await self._probe()

    async def _probe(self) -> HealthProbeState:
        self._transition(HealthProbeState(phase=Phase.LOADING))
        try:
            result = await self._health.get_health_status()
        except Exception:
            logger.exception("Unexpected failure while probing backend health")
            return self._transition(
                HealthProbeState(phase=Phase.ERROR, error_message=UNKNOWN_HEALTH_ERROR_MESSAGE)
            )
        return self._transition(self._settle(result))

    @staticmethod
    def _settle(result: ApiResult[HealthStatus]) -> HealthProbeState:
        if isinstance(result, Ok):
            return HealthProbeState(phase=Phase.SUCCESS, health=result.value)
        if isinstance(result, Err):
            return HealthProbeState(
                phase=Phase.ERROR,
                error_message=backend_error_message(result.error.message),
            )
        logger.error("Health probe settled with an unexpected value: %r", result)
        return HealthProbeState(phase=Phase.ERROR, error_message=UNKNOWN_HEALTH_ERROR_MESSAGE)

    def _transition(self, state: HealthProbeState) -> HealthProbeState:
        self._state = state
        for listener in list(self._listeners):
            try:
                listener(state)
            except Exception:
                logger.exception("Health state listener %r failed", listener)
        return state
