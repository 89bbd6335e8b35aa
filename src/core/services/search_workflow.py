"""Workflow de búsqueda de items (máquina de estados).

Estados: idle -> loading -> {success, error} -> loading -> ...

Reglas:
- Solo una búsqueda en vuelo por instancia: un `submit` durante `loading`
  se ignora. La comprobación ocurre antes del primer `await`, así que en un
  único event loop no hay carreras ni hace falta numerar peticiones.
- Una consulta en blanco nunca toca la red.
- Este es el único punto que convierte errores en mensajes para el usuario;
  ninguna excepción llega a la capa de presentación.
"""

from __future__ import annotations

import logging
from typing import Callable

from core.domain.models import Item
from core.domain.result import ApiResult, Err, Ok
from core.domain.state import Phase, SearchState
from core.services.items_service import ItemsService

logger = logging.getLogger(__name__)

EMPTY_QUERY_MESSAGE = "Please enter a search term"
UNKNOWN_SEARCH_ERROR_MESSAGE = "Unknown search error occurred"

StateListener = Callable[[SearchState], None]
ItemSelectListener = Callable[[Item], None]


def no_results_message(query: str) -> str:
    return f'No items found for "{query}"'


def search_failed_message(message: str) -> str:
    return f"Search failed: {message}"


class SearchWorkflow:
    """Estado observable + intents (`submit`, `select_item`) de la búsqueda."""

    def __init__(
        self,
        items_service: ItemsService,
        *,
        on_change: StateListener | None = None,
        on_item_select: ItemSelectListener | None = None,
    ) -> None:
        self._items = items_service
        self._state = SearchState()
        self._listeners: list[StateListener] = []
        if on_change is not None:
            self._listeners.append(on_change)
        self._on_item_select = on_item_select
        self._selected_item: Item | None = None

    @property
    def state(self) -> SearchState:
        return self._state

    @property
    def selected_item(self) -> Item | None:
        return self._selected_item

    def subscribe(self, listener: StateListener) -> Callable[[], None]:
        """Registra un observador; devuelve la función para darlo de baja."""

        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    async def submit(self, query: str) -> SearchState:
        if self._state.is_loading:
            logger.debug("Search for %r ignored: a search is already in flight", query)
            return self._state

        if not query.strip():
            return self._transition(
                SearchState(phase=Phase.ERROR, query=query, error_message=EMPTY_QUERY_MESSAGE)
            )

        self._transition(SearchState(phase=Phase.LOADING, query=query))
        try:
            result = await self._items.search_items(query)
        except Exception:
            logger.exception("Unexpected failure while searching for %r", query)
            return self._transition(
                SearchState(phase=Phase.ERROR, query=query, error_message=UNKNOWN_SEARCH_ERROR_MESSAGE)
            )

        return self._transition(self._settle(query, result))

    def select_item(self, item: Item) -> None:
        """Notifica el item elegido; no cambia fase ni resultados."""

        self._selected_item = item
        if self._on_item_select is None:
            return
        try:
            self._on_item_select(item)
        except Exception:
            logger.exception("Item select listener %r failed", self._on_item_select)

    @staticmethod
    def _settle(query: str, result: ApiResult[list[Item]]) -> SearchState:
        if isinstance(result, Err):
            return SearchState(
                phase=Phase.ERROR,
                query=query,
                error_message=search_failed_message(result.error.message),
            )
        if isinstance(result, Ok):
            items = tuple(result.value)
            if not items:
                return SearchState(phase=Phase.ERROR, query=query, error_message=no_results_message(query))
            return SearchState(phase=Phase.SUCCESS, query=query, results=items)

        logger.error("Search for %r settled with an unexpected value: %r", query, result)
        return SearchState(phase=Phase.ERROR, query=query, error_message=UNKNOWN_SEARCH_ERROR_MESSAGE)

    def _transition(self, state: SearchState) -> SearchState:
        self._state = state
        for listener in list(self._listeners):
            try:
                listener(state)
            except Exception:
                logger.exception("Search state listener %r failed", listener)
        return state
