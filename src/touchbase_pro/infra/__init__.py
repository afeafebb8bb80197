"""Camada de infraestrutura: transporte HTTP para as APIs upstream.

Uso típico:
    from touchbase_pro.infra import create_http_client

Infraestrutura não decide regra de negócio; logs sem credenciais.
"""

from touchbase_pro.infra.http import (
    ApiRequest,
    HttpClient,
    HttpClientConfig,
    HttpError,
    UpstreamHttpError,
    create_http_client,
)

__all__ = [
    "ApiRequest",
    "HttpClient",
    "HttpClientConfig",
    "HttpError",
    "UpstreamHttpError",
    "create_http_client",
]
