"""Taxonomía cerrada de errores del transporte.

Se diferencian tres casos:
- El backend respondió con semántica de error (status preservado).
- El backend no es alcanzable (status forzado a 0).
- La petición ni siquiera pudo construirse/enviarse (status forzado a 0).

El transporte es el único punto que clasifica; el resto del sistema solo
transporta el `ApiError` resultante.
"""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, Field
from pydantic.config import ConfigDict

NETWORK_UNREACHABLE_MESSAGE = "Network error - Backend server not reachable"


class ErrorKind(str, Enum):
    """Kinds a failed transport call can be classified as."""

    SERVER_ERROR = "SERVER_ERROR"
    NETWORK_ERROR = "NETWORK_ERROR"
    REQUEST_ERROR = "REQUEST_ERROR"


class ApiError(BaseModel):
    """Classified error produced exactly once per failed transport call."""

    model_config = ConfigDict(frozen=True)

    status: int = Field(
        ...,
        ge=0,
        description="HTTP status del backend, o 0 si no hubo respuesta.",
    )
    message: str = Field(..., description="Texto del error, listo para mostrar.")
    kind: ErrorKind

    @classmethod
    def server(cls, status: int, message: str) -> "ApiError":
        return cls(status=status, message=message, kind=ErrorKind.SERVER_ERROR)

    @classmethod
    def network(cls) -> "ApiError":
        return cls(status=0, message=NETWORK_UNREACHABLE_MESSAGE, kind=ErrorKind.NETWORK_ERROR)

    @classmethod
    def request(cls, message: str) -> "ApiError":
        return cls(status=0, message=message, kind=ErrorKind.REQUEST_ERROR)


class ApiRequestError(Exception):
    """Exception form of an `ApiError`, raised only by `ApiResult.unwrap()`."""

    def __init__(self, error: ApiError) -> None:
        super().__init__(error.message)
        self.error = error

    @property
    def status(self) -> int:
        return self.error.status

    @property
    def kind(self) -> ErrorKind:
        return self.error.kind
