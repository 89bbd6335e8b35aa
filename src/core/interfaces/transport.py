"""Contrato del transporte HTTP.

Por qué Protocol:
- Los servicios dependen de este contrato estructural, no de httpx.
- En tests se sustituye por un fake que devuelve `ApiResult` en memoria.
"""

from __future__ import annotations

from typing import Any, Mapping, Protocol, TypeVar, runtime_checkable

from core.domain.result import ApiResult

T = TypeVar("T")


@runtime_checkable
class ApiTransport(Protocol):
    """Contrato mínimo del cliente de la API.

    Reglas de diseño:
    - Ambos métodos son asíncronos porque hacen I/O (HTTP).
    - Nunca lanzan errores de la librería: un fallo es siempre un `Err`.
    """

    async def get(
        self,
        path: str,
        response_type: type[T],
        *,
        params: Mapping[str, Any] | None = None,
    ) -> ApiResult[T]:
        ...

    async def post(
        self,
        path: str,
        response_type: type[T],
        body: Any = None,
    ) -> ApiResult[T]:
        ...
