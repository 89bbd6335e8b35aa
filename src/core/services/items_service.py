"""Servicio de items (lookup por id y búsqueda).

Responsabilidad:
- Quitar el envoltorio `{success, data}` del backend.
- Normalizar "sin resultados" (`data` null/ausente) a una lista vacía.

Sin validación en cliente, sin caché, sin reintentos: un ID inválido o
desconocido lo rechaza el backend (400/404) y llega como SERVER_ERROR.
"""

from __future__ import annotations

from core.domain.models import Item, ItemEnvelope, ItemSearchEnvelope
from core.domain.result import ApiResult
from core.interfaces.transport import ApiTransport

ITEMS_PATH = "/items"
SEARCH_PATH = "/items/search"

TRITANIUM_TYPE_ID = 34


def _search_data(envelope: ItemSearchEnvelope) -> list[Item]:
    return list(envelope.data or [])


class ItemsService:
    def __init__(self, transport: ApiTransport) -> None:
        self._transport = transport

    async def get_item_by_id(self, item_id: int) -> ApiResult[Item]:
        result = await self._transport.get(f"{ITEMS_PATH}/{item_id}", ItemEnvelope)
        return result.map(lambda envelope: envelope.data)

    async def search_items(self, query: str) -> ApiResult[list[Item]]:
        # httpx URL-encodes `q`.
        result = await self._transport.get(SEARCH_PATH, ItemSearchEnvelope, params={"q": query})
        return result.map(_search_data)

    async def find_tritanium(self) -> ApiResult[Item]:
        """Lookup rápido del mineral base (Tritanium, typeID 34)."""

        return await self.get_item_by_id(TRITANIUM_TYPE_ID)
