"""Testes unitários para infra/http.py.

Valida tentativa única, decodificação do body e mapeamento de erros.
"""

from __future__ import annotations

import json

import httpx
import pytest

from touchbase_pro.config.settings import Settings
from touchbase_pro.infra.http import (
    ApiRequest,
    HttpClient,
    HttpClientConfig,
    HttpError,
    UpstreamHttpError,
    _sanitize_url,
    create_http_client,
)


class TestHttpClientConfig:
    def test_default_values(self) -> None:
        """Valores padrão devem ser seguros."""
        config = HttpClientConfig()
        assert config.timeout_seconds == 30.0
        assert config.default_headers == {}
        assert config.verify_ssl is True


class TestHttpErrors:
    def test_upstream_keeps_status_and_body(self) -> None:
        error = UpstreamHttpError("HTTP 404", status_code=404, body={"message": "x"})
        assert isinstance(error, HttpError)
        assert error.status_code == 404
        assert error.body == {"message": "x"}
        assert str(error) == "HTTP 404"


class TestSanitizeUrl:
    def test_strips_query(self) -> None:
        assert _sanitize_url("https://api/x?token=secret") == "https://api/x"

    def test_without_query(self) -> None:
        assert _sanitize_url("https://api/x") == "https://api/x"


class TestHttpClientSend:
    @pytest.mark.asyncio
    async def test_none_json_body_sends_no_body(self) -> None:
        seen: list[httpx.Request] = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(request)
            return httpx.Response(200, json={"ok": True})

        async with HttpClient(transport=httpx.MockTransport(handler)) as client:
            result = await client.send(ApiRequest("GET", "https://api.test/x"))

        assert result == {"ok": True}
        assert seen[0].content == b""

    @pytest.mark.asyncio
    async def test_params_and_auth(self) -> None:
        seen: list[httpx.Request] = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(request)
            return httpx.Response(204)

        client = HttpClient(transport=httpx.MockTransport(handler))
        result = await client.send(
            ApiRequest(
                "POST",
                "https://api.test/x",
                auth=("u", "p"),
                json_body={"a": 1},
                params={"page": 2},
            )
        )
        await client.close()

        assert result == {}
        assert seen[0].url.params["page"] == "2"
        assert seen[0].headers["Authorization"].startswith("Basic ")
        assert json.loads(seen[0].content) == {"a": 1}

    @pytest.mark.asyncio
    async def test_text_response(self) -> None:
        client = HttpClient(
            transport=httpx.MockTransport(lambda request: httpx.Response(200, text="pong"))
        )
        assert await client.send(ApiRequest("GET", "https://api.test/ping")) == "pong"

    @pytest.mark.asyncio
    async def test_error_status_single_attempt(self) -> None:
        calls: list[int] = []

        def handler(request: httpx.Request) -> httpx.Response:
            calls.append(1)
            return httpx.Response(503, json={"error": "down"})

        client = HttpClient(transport=httpx.MockTransport(handler))
        with pytest.raises(UpstreamHttpError) as exc_info:
            await client.send(ApiRequest("GET", "https://api.test/x"))

        assert exc_info.value.status_code == 503
        assert exc_info.value.body == {"error": "down"}
        assert len(calls) == 1

    @pytest.mark.asyncio
    async def test_transport_failure(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("refused", request=request)

        client = HttpClient(transport=httpx.MockTransport(handler))
        with pytest.raises(UpstreamHttpError) as exc_info:
            await client.send(ApiRequest("GET", "https://api.test/x"))
        assert exc_info.value.status_code is None
        assert "ConnectError" in str(exc_info.value)

    @pytest.mark.asyncio
    async def test_timeout(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ReadTimeout("slow", request=request)

        client = HttpClient(transport=httpx.MockTransport(handler))
        with pytest.raises(UpstreamHttpError, match="Timeout"):
            await client.send(ApiRequest("GET", "https://api.test/x"))


class TestCreateHttpClient:
    def test_uses_settings_timeout(self) -> None:
        client = create_http_client(Settings(request_timeout_seconds=5.0))
        assert isinstance(client, HttpClient)
        assert client._config.timeout_seconds == 5.0
        assert client._config.default_headers["User-Agent"].startswith("touchbase_pro/")
