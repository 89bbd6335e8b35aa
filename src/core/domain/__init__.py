"""Modelos y entidades del dominio.

Por qué:
- Aquí viven las estructuras de datos puras y estrictas (Pydantic v2).
- El dominio no conoce HTTP ni la CLI: solo items, health y errores clasificados.
"""

from core.domain.errors import ApiError, ApiRequestError, ErrorKind
from core.domain.models import (
    ApiEnvelope,
    HealthStatus,
    Item,
    ItemEnvelope,
    ItemSearchEnvelope,
    ServiceStatus,
)
from core.domain.result import ApiResult, Err, Ok
from core.domain.state import HealthProbeState, Phase, SearchState

__all__ = [
    "ApiEnvelope",
    "ApiError",
    "ApiRequestError",
    "ApiResult",
    "Err",
    "ErrorKind",
    "HealthProbeState",
    "HealthStatus",
    "Item",
    "ItemEnvelope",
    "ItemSearchEnvelope",
    "Ok",
    "Phase",
    "SearchState",
    "ServiceStatus",
]
