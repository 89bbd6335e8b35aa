"""Modelos del dominio (Pydantic v2).

Por qué Pydantic en el dominio:
- Validación estricta del payload del backend en el borde, sin acoplar el
  Core a httpx.
- Los modelos son inmutables (frozen): el cliente nunca modifica un Item.

Nota:
- Estos modelos describen *qué* devuelve el backend, no *cómo* se obtiene.
"""

from __future__ import annotations

from datetime import datetime
from typing import Generic, TypeVar

from pydantic import AliasChoices, BaseModel, Field
from pydantic.config import ConfigDict

T = TypeVar("T")


class Item(BaseModel):
    """Item del SDE de EVE tal y como lo entrega el backend.

    Campos extra (`group_name`, `category_id`, ...) se conservan sin tocar:
    para el cliente el item es un dato opaco.
    """

    model_config = ConfigDict(frozen=True, extra="allow")

    type_id: int = Field(
        ...,
        description="Identificador estable y único del tipo (typeID).",
    )
    type_name: str = Field(
        ...,
        description="Nombre visible del item.",
    )
    group_id: int = Field(
        ...,
        description="Grupo del SDE al que pertenece el item.",
    )
    volume: float = Field(
        ...,
        description="Volumen en m³.",
    )
    published: bool | None = Field(
        default=None,
        description="Si el item está publicado en el mercado.",
    )
    mass: float | None = Field(
        default=None,
        description="Masa en kg, si el backend la incluye.",
    )
    description: str | None = Field(
        default=None,
        description="Descripción del SDE, si está disponible.",
    )


class HealthStatus(BaseModel):
    """Snapshot of the backend health endpoint.

    The backend has shipped the timestamp both as `time` and `timestamp`;
    either one populates `time`.
    """

    model_config = ConfigDict(frozen=True, extra="ignore", populate_by_name=True)

    status: str = Field(..., description="Estado reportado (p.ej. 'healthy').")
    time: datetime = Field(
        ...,
        validation_alias=AliasChoices("time", "timestamp"),
        description="Momento en que el backend respondió.",
    )
    version: str | None = Field(default=None, description="Versión del backend.")
    service: str | None = Field(default=None, description="Nombre del servicio.")


class ServiceStatus(BaseModel):
    """Respuesta de los endpoints de diagnóstico (`/sde/test`, `/esi/test`)."""

    model_config = ConfigDict(frozen=True, extra="allow", populate_by_name=True)

    status: str = Field(
        ...,
        validation_alias=AliasChoices("status", "sde_status", "esi_status"),
        description="`sde_status` / `esi_status` según el endpoint",
    )


class ApiEnvelope(BaseModel, Generic[T]):
    """Envoltorio `{success, data}` que usan los endpoints de items."""

    model_config = ConfigDict(frozen=True, extra="ignore")

    success: bool
    data: T
    message: str | None = None
    error: str | None = None


class ItemEnvelope(ApiEnvelope[Item]):
    pass


class ItemSearchEnvelope(ApiEnvelope[list[Item] | None]):
    # `data` puede venir null o ausente cuando no hay coincidencias.
    data: list[Item] | None = None
