"""Servicio de health/diagnóstico del backend.

Pura delegación al transporte: los errores clasificados se propagan sin
reinterpretar.
"""

from __future__ import annotations

from core.domain.models import HealthStatus, ServiceStatus
from core.domain.result import ApiResult
from core.interfaces.transport import ApiTransport

HEALTH_PATH = "/health"
DATABASE_TEST_PATH = "/sde/test"
ESI_TEST_PATH = "/esi/test"


class HealthService:
    def __init__(self, transport: ApiTransport) -> None:
        self._transport = transport

    async def get_health_status(self) -> ApiResult[HealthStatus]:
        return await self._transport.get(HEALTH_PATH, HealthStatus)

    async def check_database_connection(self) -> ApiResult[ServiceStatus]:
        return await self._transport.get(DATABASE_TEST_PATH, ServiceStatus)

    async def check_esi_connection(self) -> ApiResult[ServiceStatus]:
        return await self._transport.get(ESI_TEST_PATH, ServiceStatus)
