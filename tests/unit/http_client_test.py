"""Tests for the httpx transport and its error classification."""

from __future__ import annotations

import json
import logging

import httpx
import pytest

from adapters.http_client import ApiClient, build_async_client, classify_error
from conftest import make_api_client
from core.config import AppSettings
from core.domain.errors import NETWORK_UNREACHABLE_MESSAGE, ErrorKind
from core.domain.models import HealthStatus, ServiceStatus
from core.domain.result import Err, Ok


class _RawStream(httpx.AsyncByteStream):
    """Body served as-is, without httpx decoding it up front."""

    def __init__(self, data: bytes) -> None:
        self._data = data

    async def __aiter__(self):
        yield self._data


class TestBuildAsyncClient:
    @pytest.mark.asyncio
    async def test_defaults(self, settings: AppSettings) -> None:
        async with build_async_client(settings) as client:
            assert str(client.base_url) == "http://localhost:9000/api/v1/"
            assert client.timeout.read == 10.0
            assert client.headers["Content-Type"] == "application/json"
            assert client.headers["Accept"] == "application/json"
            assert client.follow_redirects is False

    def test_api_root_strips_slashes(self) -> None:
        settings = AppSettings(_env_file=None, api_base_url="http://backend:9000/", api_version="/v2/")
        assert settings.api_root == "http://backend:9000/api/v2"


class TestApiClientSuccess:
    @pytest.mark.asyncio
    async def test_get_decodes_into_response_type(self, settings: AppSettings) -> None:
        seen: list[httpx.Request] = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(request)
            return httpx.Response(200, json={"status": "healthy", "time": "2025-01-01T12:00:00Z"})

        async with make_api_client(settings, handler) as client:
            result = await client.get("/health", HealthStatus)

        assert isinstance(result, Ok)
        assert result.value.status == "healthy"
        assert str(seen[0].url) == "http://localhost:9000/api/v1/health"
        assert seen[0].headers["accept"] == "application/json"

    @pytest.mark.asyncio
    async def test_post_sends_json_body(self, settings: AppSettings) -> None:
        seen: list[httpx.Request] = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(request)
            return httpx.Response(201, json={"status": "created"})

        async with make_api_client(settings, handler) as client:
            result = await client.post("/esi/test", ServiceStatus, {"ping": True})

        assert result == Ok(ServiceStatus(status="created"))
        assert seen[0].method == "POST"
        assert json.loads(seen[0].content) == {"ping": True}

    @pytest.mark.asyncio
    async def test_logs_outbound_and_inbound(
        self, settings: AppSettings, caplog: pytest.LogCaptureFixture
    ) -> None:
        caplog.set_level(logging.INFO, logger="adapters.http_client")

        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(200, json={"status": "ok"})

        async with make_api_client(settings, handler) as client:
            await client.get("/sde/test", ServiceStatus)

        messages = [record.getMessage() for record in caplog.records]
        assert "[API] GET /sde/test" in messages
        assert "[API] 200 /sde/test" in messages


class TestApiClientServerErrors:
    @pytest.mark.asyncio
    async def test_500_with_error_envelope(self, settings: AppSettings) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(500, json={"success": False, "error": "Internal server error"})

        async with make_api_client(settings, handler) as client:
            result = await client.get("/items/34", ServiceStatus)

        assert isinstance(result, Err)
        assert result.error.kind is ErrorKind.SERVER_ERROR
        assert result.error.status == 500
        assert result.error.message == "Internal server error"

    @pytest.mark.asyncio
    async def test_404_plain_text_body(self, settings: AppSettings) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(404, text="404 page not found")

        async with make_api_client(settings, handler) as client:
            result = await client.get("/nope", ServiceStatus)

        assert isinstance(result, Err)
        assert result.error.status == 404
        assert result.error.message == "404 page not found"

    @pytest.mark.asyncio
    async def test_empty_body_falls_back_to_library_message(self, settings: AppSettings) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(502)

        async with make_api_client(settings, handler) as client:
            result = await client.get("/health", HealthStatus)

        assert isinstance(result, Err)
        assert result.error.kind is ErrorKind.SERVER_ERROR
        assert result.error.status == 502
        assert "502" in result.error.message

    @pytest.mark.asyncio
    async def test_undecodable_success_body_is_server_error(self, settings: AppSettings) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(200, text="<html>oops</html>")

        async with make_api_client(settings, handler) as client:
            result = await client.get("/health", HealthStatus)

        assert isinstance(result, Err)
        assert result.error.kind is ErrorKind.SERVER_ERROR
        assert result.error.status == 200

    @pytest.mark.asyncio
    async def test_corrupt_content_encoding_keeps_status(self, settings: AppSettings) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(
                500,
                headers={"Content-Encoding": "gzip"},
                stream=_RawStream(b"definitely not gzip"),
            )

        async with make_api_client(settings, handler) as client:
            result = await client.get("/health", HealthStatus)

        assert isinstance(result, Err)
        assert result.error.kind is ErrorKind.SERVER_ERROR
        assert result.error.status == 500
        assert result.error.message.startswith("Undecodable response body from /health")

    @pytest.mark.asyncio
    async def test_redirect_is_server_error(self, settings: AppSettings) -> None:
        calls: list[httpx.Request] = []

        def handler(request: httpx.Request) -> httpx.Response:
            calls.append(request)
            return httpx.Response(302, headers={"Location": "/api/v1/health"})

        async with make_api_client(settings, handler) as client:
            result = await client.get("/health", HealthStatus)

        assert isinstance(result, Err)
        assert result.error.kind is ErrorKind.SERVER_ERROR
        assert result.error.status == 302
        assert len(calls) == 1

    @pytest.mark.asyncio
    async def test_failure_is_not_retried(
        self, settings: AppSettings, caplog: pytest.LogCaptureFixture
    ) -> None:
        calls: list[httpx.Request] = []

        def handler(request: httpx.Request) -> httpx.Response:
            calls.append(request)
            return httpx.Response(503, text="busy")

        async with make_api_client(settings, handler) as client:
            await client.get("/health", HealthStatus)

        assert len(calls) == 1
        assert any(record.levelno == logging.WARNING for record in caplog.records)


class TestApiClientNoResponse:
    @pytest.mark.asyncio
    async def test_connect_error_is_network_error(self, settings: AppSettings) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("Connection refused", request=request)

        async with make_api_client(settings, handler) as client:
            result = await client.get("/health", HealthStatus)

        assert isinstance(result, Err)
        assert result.error.kind is ErrorKind.NETWORK_ERROR
        assert result.error.status == 0
        assert result.error.message == NETWORK_UNREACHABLE_MESSAGE

    @pytest.mark.asyncio
    async def test_timeout_is_network_error(self, settings: AppSettings) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ReadTimeout("timed out", request=request)

        async with make_api_client(settings, handler) as client:
            result = await client.get("/health", HealthStatus)

        assert isinstance(result, Err)
        assert result.error.kind is ErrorKind.NETWORK_ERROR
        assert result.error.status == 0


class TestApiClientRequestErrors:
    @pytest.mark.asyncio
    async def test_unserializable_body_is_request_error(self, settings: AppSettings) -> None:
        calls: list[httpx.Request] = []

        def handler(request: httpx.Request) -> httpx.Response:
            calls.append(request)
            return httpx.Response(200, json={"status": "ok"})

        async with make_api_client(settings, handler) as client:
            result = await client.post("/esi/test", ServiceStatus, object())

        assert isinstance(result, Err)
        assert result.error.kind is ErrorKind.REQUEST_ERROR
        assert result.error.status == 0
        assert "not JSON serializable" in result.error.message
        assert calls == []

    def test_invalid_url_is_request_error(self) -> None:
        error = classify_error(httpx.InvalidURL("Invalid port: 'abc'"))
        assert error.kind is ErrorKind.REQUEST_ERROR
        assert error.status == 0
        assert error.message == "Invalid port: 'abc'"

    def test_unsupported_protocol_is_request_error(self) -> None:
        error = classify_error(httpx.UnsupportedProtocol("Request URL has an unsupported protocol 'ftp://'."))
        assert error.kind is ErrorKind.REQUEST_ERROR

    def test_status_error_keeps_response_status(self) -> None:
        request = httpx.Request("GET", "http://localhost:9000/api/v1/items/abc")
        response = httpx.Response(400, json={"success": False, "error": "Invalid item ID format"}, request=request)
        exc = httpx.HTTPStatusError("Client error '400 Bad Request'", request=request, response=response)

        error = classify_error(exc)

        assert error.kind is ErrorKind.SERVER_ERROR
        assert error.status == 400
        assert error.message == "Invalid item ID format"


class TestApiClientLifecycle:
    @pytest.mark.asyncio
    async def test_injected_client_is_not_closed(self, settings: AppSettings) -> None:
        http = build_async_client(settings, transport=httpx.MockTransport(lambda r: httpx.Response(200)))
        async with ApiClient(settings, client=http):
            pass
        assert not http.is_closed
        await http.aclose()
