"""Wrapper de httpx: el transporte único hacia el backend.

Por qué un wrapper:
- Estandariza base URL, versión, timeout y headers JSON en un solo sitio.
- Es el único punto que clasifica fallos (`ApiError`); nada por encima ve
  excepciones de httpx.
- Facilita testeo: se puede inyectar un `httpx.AsyncClient` con
  `httpx.MockTransport`.

Pipeline por llamada (composición explícita, sin interceptores mutables):
log de salida -> llamada -> log de entrada + clasificación.
"""

from __future__ import annotations

import logging
from functools import lru_cache
from typing import Any, Mapping, TypeVar

import httpx
from pydantic import TypeAdapter, ValidationError

from core.config import AppSettings
from core.domain.errors import ApiError
from core.domain.result import ApiResult, Err, Ok

logger = logging.getLogger(__name__)

T = TypeVar("T")

JSON_HEADERS: dict[str, str] = {
    "Content-Type": "application/json",
    "Accept": "application/json",
}

# The request went out but no response came back.
_NO_RESPONSE_ERRORS: tuple[type[Exception], ...] = (
    httpx.TimeoutException,
    httpx.NetworkError,
    httpx.RemoteProtocolError,
    httpx.ProxyError,
)


def build_async_client(
    settings: AppSettings | None = None,
    *,
    transport: httpx.AsyncBaseTransport | None = None,
    extra_headers: dict[str, str] | None = None,
) -> httpx.AsyncClient:
    """Crea un `httpx.AsyncClient` apuntando a `<base>/api/<version>`.

    Por qué un builder:
    - Centraliza timeouts/headers para que todos los servicios se comporten igual.
    - `transport` permite sustituir la red en tests (`httpx.MockTransport`).
    - No sigue redirecciones: un 3xx es una respuesta del backend y se
      clasifica como SERVER_ERROR con su status.
    """

    settings = settings or AppSettings()
    headers: dict[str, str] = {"User-Agent": settings.user_agent, **JSON_HEADERS}
    if extra_headers:
        headers.update(extra_headers)
    return httpx.AsyncClient(
        base_url=settings.api_root,
        timeout=httpx.Timeout(settings.http_timeout_seconds),
        follow_redirects=False,
        headers=headers,
        transport=transport,
    )


def classify_error(exc: Exception) -> ApiError:
    """Traduce una excepción de la llamada HTTP a la taxonomía cerrada.

    Orden:
    1) Hubo respuesta (cualquier status) -> SERVER_ERROR con ese status.
    2) Se envió pero no hubo respuesta -> NETWORK_ERROR, status 0.
    3) La petición no pudo construirse -> REQUEST_ERROR, status 0.
    """

    if isinstance(exc, httpx.HTTPStatusError):
        return ApiError.server(exc.response.status_code, _server_message(exc.response, str(exc)))
    if isinstance(exc, _NO_RESPONSE_ERRORS):
        return ApiError.network()
    return ApiError.request(str(exc) or exc.__class__.__name__)


def _server_message(response: httpx.Response, fallback: str) -> str:
    # Backend error envelope: {"success": false, "error": "..."}
    try:
        body = response.json()
    except ValueError:
        body = None
    if isinstance(body, dict):
        for key in ("error", "message"):
            value = body.get(key)
            if isinstance(value, str) and value.strip():
                return value.strip()

    text = response.text.strip()
    return text or fallback


@lru_cache(maxsize=None)
def _adapter(response_type: Any) -> TypeAdapter[Any]:
    return TypeAdapter(response_type)


class ApiClient:
    """Cliente tipado de la API del backend.

    `get`/`post` devuelven siempre un `ApiResult`: `Ok` con el cuerpo
    decodificado en `response_type`, o `Err` con un único `ApiError`.
    No hay reintentos: un intento fallido es exactamente un error.
    """

    def __init__(
        self,
        settings: AppSettings | None = None,
        *,
        client: httpx.AsyncClient | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._settings = settings or AppSettings()
        # An injected client belongs to the caller and is not closed here.
        self._owns_client = client is None
        self._client = client or build_async_client(self._settings, transport=transport)

    @property
    def base_url(self) -> str:
        return str(self._client.base_url)

    async def __aenter__(self) -> "ApiClient":
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        if self._owns_client:
            await self._client.aclose()

    async def get(
        self,
        path: str,
        response_type: type[T],
        *,
        params: Mapping[str, Any] | None = None,
    ) -> ApiResult[T]:
        return await self._dispatch("GET", path, response_type, params=params)

    async def post(
        self,
        path: str,
        response_type: type[T],
        body: Any = None,
    ) -> ApiResult[T]:
        return await self._dispatch("POST", path, response_type, json=body)

    async def _dispatch(
        self,
        method: str,
        path: str,
        response_type: type[T],
        **kwargs: Any,
    ) -> ApiResult[T]:
        logger.info("[API] %s %s", method, path)

        try:
            request = self._client.build_request(method, path, **kwargs)
            response = await self._client.send(request, stream=True)
        except Exception as exc:
            return self._fail(method, path, classify_error(exc))

        logger.info("[API] %s %s", response.status_code, path)
        try:
            try:
                await response.aread()
            except httpx.DecodingError as exc:
                message = f"Undecodable response body from {path}: {exc}"
                return self._fail(method, path, ApiError.server(response.status_code, message))
            response.raise_for_status()
        except Exception as exc:
            return self._fail(method, path, classify_error(exc))
        finally:
            await response.aclose()

        try:
            value = _adapter(response_type).validate_json(response.content)
        except ValidationError as exc:
            message = f"Invalid response body from {path}: {exc.error_count()} validation error(s)"
            return self._fail(method, path, ApiError.server(response.status_code, message))

        return Ok(value)

    @staticmethod
    def _fail(method: str, path: str, error: ApiError) -> Err:
        logger.warning(
            "[API] Response error: %s %s -> %s %s: %s",
            method,
            path,
            error.kind.value,
            error.status,
            error.message,
        )
        return Err(error)
