"""Shared fixtures and helpers for tests."""

from __future__ import annotations

import asyncio
from pathlib import Path
from typing import Any, Callable

import httpx
import pytest

from adapters.http_client import ApiClient
from core.config import AppSettings
from core.domain.models import Item
from core.domain.result import ApiResult

_TESTS_ROOT = Path(__file__).parent

Handler = Callable[[httpx.Request], httpx.Response]


def pytest_collection_modifyitems(items: list[pytest.Item]) -> None:
    for item in items:
        rel = Path(str(item.fspath)).relative_to(_TESTS_ROOT)
        if rel.parts and rel.parts[0] == "unit":
            item.add_marker(pytest.mark.unit)


def make_item(type_id: int = 34, type_name: str = "Tritanium", **overrides: Any) -> Item:
    data: dict[str, Any] = {
        "type_id": type_id,
        "type_name": type_name,
        "group_id": 18,
        "volume": 0.01,
    }
    data.update(overrides)
    return Item(**data)


def item_payload(type_id: int = 34, type_name: str = "Tritanium", **overrides: Any) -> dict[str, Any]:
    return make_item(type_id, type_name, **overrides).model_dump(mode="json", exclude_none=True)


def make_api_client(settings: AppSettings, handler: Handler) -> ApiClient:
    return ApiClient(settings, transport=httpx.MockTransport(handler))


@pytest.fixture
def settings() -> AppSettings:
    return AppSettings(_env_file=None)


@pytest.fixture
def tritanium() -> Item:
    return make_item(34, "Tritanium")


@pytest.fixture
def pyerite() -> Item:
    return make_item(35, "Pyerite")


class FakeTransport:
    """In-memory `ApiTransport` that replays canned results."""

    def __init__(self, *results: ApiResult[Any]) -> None:
        self._results = list(results)
        self.calls: list[tuple[str, str, Any, Any]] = []

    async def get(self, path: str, response_type: Any, *, params: Any = None) -> ApiResult[Any]:
        self.calls.append(("GET", path, response_type, params))
        return self._results.pop(0)

    async def post(self, path: str, response_type: Any, body: Any = None) -> ApiResult[Any]:
        self.calls.append(("POST", path, response_type, body))
        return self._results.pop(0)


class FakeItemsService:
    """Items service double; `gate` holds the call open until it is set."""

    def __init__(
        self,
        result: ApiResult[list[Item]] | None = None,
        *,
        exc: Exception | None = None,
        gate: asyncio.Event | None = None,
    ) -> None:
        self.result = result
        self.exc = exc
        self.gate = gate
        self.queries: list[str] = []

    async def search_items(self, query: str) -> ApiResult[list[Item]]:
        self.queries.append(query)
        if self.gate is not None:
            await self.gate.wait()
        if self.exc is not None:
            raise self.exc
        assert self.result is not None
        return self.result


class FakeHealthService:
    def __init__(self, *results: Any, gate: asyncio.Event | None = None) -> None:
        self._results = list(results)
        self.gate = gate
        self.calls = 0

    async def get_health_status(self) -> Any:
        self.calls += 1
        if self.gate is not None:
            await self.gate.wait()
        result = self._results.pop(0)
        if isinstance(result, Exception):
            raise result
        return result
