"""Cliente HTTP centralizado com timeout e logging.

Este módulo fornece o transporte usado pelos dispatchers upstream:
- Uma única tentativa por chamada (sem retry/backoff nesta camada)
- Timeout configurável
- Logging estruturado (sem credenciais nem payloads)
- Falhas HTTP e de transporte viram UpstreamHttpError
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any

import httpx

from touchbase_pro.observability.logging import get_logger

if TYPE_CHECKING:
    from touchbase_pro.config.settings import Settings

logger: logging.Logger = get_logger(__name__)


def _sanitize_url(url: str) -> str:
    """Remove query string da URL para logging seguro."""
    return url.split("?", 1)[0]


@dataclass
class HttpClientConfig:
    """Configuração do cliente HTTP."""

    timeout_seconds: float = 30.0
    default_headers: dict[str, str] = field(default_factory=dict)
    verify_ssl: bool = True


class HttpError(Exception):
    """Erro de requisição HTTP sem expor informações sensíveis."""

    def __init__(
        self,
        message: str,
        status_code: int | None = None,
    ) -> None:
        super().__init__(message)
        self.status_code = status_code


class UpstreamHttpError(HttpError):
    """Resposta não-2xx ou falha de transporte de uma API upstream.

    `body` guarda a resposta upstream (JSON decodificado ou texto) para que o
    host mostre o erro original ao usuário.
    """

    def __init__(
        self,
        message: str,
        status_code: int | None = None,
        body: Any = None,
    ) -> None:
        super().__init__(message, status_code=status_code)
        self.body = body


@dataclass(frozen=True)
class ApiRequest:
    """Requisição pronta para envio (URL absoluta, auth e body resolvidos).

    `json_body` None significa "sem body": o campo nem é enviado ao httpx.
    """

    method: str
    url: str
    headers: dict[str, str] = field(default_factory=dict)
    auth: tuple[str, str] | None = None
    json_body: dict[str, Any] | None = None
    params: dict[str, Any] = field(default_factory=dict)


def _decode_body(response: httpx.Response) -> Any:
    """Decodifica o body: JSON quando possível, texto caso contrário."""
    if not response.content:
        return {}
    try:
        return response.json()
    except (json.JSONDecodeError, UnicodeDecodeError):
        return response.text


def _log_request_success(method: str, url: str, status_code: int) -> None:
    """Loga sucesso de requisição."""
    logger.debug(
        "Requisição HTTP bem-sucedida",
        extra={
            "method": method,
            "url": _sanitize_url(url),
            "status_code": status_code,
        },
    )


def _log_http_failure(method: str, url: str, status_code: int) -> None:
    """Loga resposta não-2xx."""
    logger.warning(
        "Requisição HTTP falhou",
        extra={
            "method": method,
            "url": _sanitize_url(url),
            "status_code": status_code,
        },
    )


def _log_transport_error(method: str, url: str, error_type: str) -> None:
    """Loga erro de transporte (timeout, conexão, etc.)."""
    logger.error(
        "Erro de transporte em requisição HTTP",
        extra={
            "method": method,
            "url": _sanitize_url(url),
            "error_type": error_type,
        },
    )


class HttpClient:
    """Cliente HTTP assíncrono de tentativa única.

    Uso típico:
        async with HttpClient(config) as client:
            data = await client.send(ApiRequest("GET", url))
    """

    def __init__(
        self,
        config: HttpClientConfig | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        """Inicializa cliente com configuração (transport opcional para testes)."""
        self._config = config or HttpClientConfig()
        self._transport = transport
        self._client: httpx.AsyncClient | None = None

    async def _get_client(self) -> httpx.AsyncClient:
        """Retorna cliente httpx (lazy loading)."""
        if self._client is None or self._client.is_closed:
            self._client = httpx.AsyncClient(
                timeout=httpx.Timeout(self._config.timeout_seconds),
                headers=self._config.default_headers,
                verify=self._config.verify_ssl,
                transport=self._transport,
            )
        return self._client

    async def close(self) -> None:
        """Fecha o cliente e libera recursos."""
        if self._client and not self._client.is_closed:
            await self._client.aclose()
            self._client = None

    async def __aenter__(self) -> HttpClient:
        """Suporte a async context manager."""
        return self

    async def __aexit__(self, *args: Any) -> None:
        """Fecha cliente ao sair do context."""
        await self.close()

    async def send(self, request: ApiRequest) -> Any:
        """Executa a requisição e devolve o body decodificado.

        Raises:
            UpstreamHttpError: status não-2xx ou falha de transporte
        """
        client = await self._get_client()
        kwargs: dict[str, Any] = {"headers": request.headers}
        if request.params:
            kwargs["params"] = request.params
        if request.auth is not None:
            kwargs["auth"] = request.auth
        if request.json_body is not None:
            kwargs["json"] = request.json_body

        try:
            response = await client.request(request.method, request.url, **kwargs)
        except httpx.TimeoutException as exc:
            _log_transport_error(request.method, request.url, type(exc).__name__)
            raise UpstreamHttpError("Timeout") from exc
        except httpx.HTTPError as exc:
            _log_transport_error(request.method, request.url, type(exc).__name__)
            raise UpstreamHttpError(f"Erro de transporte: {type(exc).__name__}") from exc

        return self._process_response(response, request.method, request.url)

    def _process_response(
        self,
        response: httpx.Response,
        method: str,
        url: str,
    ) -> Any:
        """Retorna o body se sucesso, levanta UpstreamHttpError se não."""
        body = _decode_body(response)
        if response.is_success:
            _log_request_success(method, url, response.status_code)
            return body

        _log_http_failure(method, url, response.status_code)
        raise UpstreamHttpError(
            f"HTTP {response.status_code}",
            status_code=response.status_code,
            body=body,
        )


def create_http_client(settings: Settings | None = None) -> HttpClient:
    """Factory para criar cliente HTTP configurado.

    Args:
        settings: Configurações da aplicação. Se None, usa get_settings()
    """
    if settings is None:
        from touchbase_pro.config.settings import get_settings

        settings = get_settings()

    config = HttpClientConfig(
        timeout_seconds=float(settings.request_timeout_seconds),
        default_headers={
            "User-Agent": f"{settings.service_name}/{settings.version}",
        },
        verify_ssl=True,
    )

    logger.info(
        "Cliente HTTP criado",
        extra={"timeout_seconds": config.timeout_seconds},
    )

    return HttpClient(config)
