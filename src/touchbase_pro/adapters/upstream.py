"""Dispatchers para as quatro APIs upstream.

Cada dispatcher fixa URL base, extração de credencial e esquema de auth, e
faz exatamente uma chamada HTTP via o transporte do contexto:
- Email TouchBasePro: Basic (API key de email como usuário)
- WhatsApp nativo TouchBasePro: Basic ou Bearer conforme o conjunto de credenciais
- WhatsApp Interakt.ai: Basic + Content-Type JSON, sem body em GET/HEAD
- SMS MyMobileAPI: Basic (usuário/senha próprios)

Sem retry: qualquer falha sobe como UpstreamHttpError.
"""

from __future__ import annotations

import logging
from typing import Any

from touchbase_pro.config.settings import Settings, get_settings
from touchbase_pro.domain.errors import CredentialsError
from touchbase_pro.infra.http import ApiRequest
from touchbase_pro.node.context import LoadOptionsContext
from touchbase_pro.observability.logging import get_logger

logger: logging.Logger = get_logger(__name__)

TOUCHBASE_CREDENTIALS = "touchBaseProApi"
WHATSAPP_CREDENTIALS = "touchBaseProWhatsAppApi"

_BODYLESS_METHODS = frozenset({"GET", "HEAD"})


def _credential(ctx: LoadOptionsContext, credential_set: str, key: str) -> str:
    """Lê um campo obrigatório do conjunto de credenciais."""
    value = ctx.get_credentials(credential_set).get(key)
    if not value:
        raise CredentialsError(f'Credential "{key}" is missing in "{credential_set}"')
    return value


async def _dispatch(ctx: LoadOptionsContext, request: ApiRequest) -> Any:
    logger.debug(
        "Dispatch upstream",
        extra={"method": request.method, "has_body": request.json_body is not None},
    )
    return await ctx.http.send(request)


async def touchbase_request(
    ctx: LoadOptionsContext,
    method: str,
    endpoint: str,
    body: dict[str, Any] | None = None,
    query: dict[str, Any] | None = None,
    settings: Settings | None = None,
) -> Any:
    """Chamada à API de Email TouchBasePro."""
    settings = settings or get_settings()
    api_key = _credential(ctx, TOUCHBASE_CREDENTIALS, "emailApiKey")
    request = ApiRequest(
        method=method,
        url=f"{settings.email_base_url}{endpoint}",
        auth=(api_key, settings.email_basic_password),
        json_body=body or {},
        params=query or {},
    )
    return await _dispatch(ctx, request)


async def touchbase_whatsapp_request(
    ctx: LoadOptionsContext,
    method: str,
    endpoint: str,
    body: dict[str, Any] | None = None,
    query: dict[str, Any] | None = None,
    credential_set: str = TOUCHBASE_CREDENTIALS,
    settings: Settings | None = None,
) -> Any:
    """Chamada ao endpoint WhatsApp nativo TouchBasePro.

    Conjunto combinado (touchBaseProApi) usa `Basic <whatsappApiKey>`; o
    conjunto dedicado (touchBaseProWhatsAppApi) usa `Bearer <apiKey>`.
    """
    settings = settings or get_settings()
    if credential_set == WHATSAPP_CREDENTIALS:
        authorization = f"Bearer {_credential(ctx, WHATSAPP_CREDENTIALS, 'apiKey')}"
    else:
        authorization = f"Basic {_credential(ctx, TOUCHBASE_CREDENTIALS, 'whatsappApiKey')}"

    request = ApiRequest(
        method=method,
        url=f"{settings.whatsapp_base_url}{endpoint}",
        headers={"Authorization": authorization},
        json_body=body or {},
        params=query or {},
    )
    return await _dispatch(ctx, request)


async def interakt_whatsapp_request(
    ctx: LoadOptionsContext,
    method: str,
    endpoint: str,
    body: dict[str, Any] | None = None,
    query: dict[str, Any] | None = None,
    settings: Settings | None = None,
) -> Any:
    """Chamada à API WhatsApp da Interakt.ai.

    Em GET/HEAD o body é omitido por completo (nem objeto vazio é enviado).
    """
    settings = settings or get_settings()
    api_key = _credential(ctx, TOUCHBASE_CREDENTIALS, "whatsappApiKey")
    upper_method = method.upper()
    request = ApiRequest(
        method=upper_method,
        url=f"{settings.interakt_base_url}{endpoint}",
        headers={
            "Authorization": f"Basic {api_key}",
            "Content-Type": "application/json",
        },
        json_body=None if upper_method in _BODYLESS_METHODS else (body or {}),
        params=query or {},
    )
    return await _dispatch(ctx, request)


async def touchbase_sms_request(
    ctx: LoadOptionsContext,
    method: str,
    endpoint: str,
    body: dict[str, Any] | None = None,
    query: dict[str, Any] | None = None,
    settings: Settings | None = None,
) -> Any:
    """Chamada à API SMS MyMobileAPI (host próprio, usuário/senha)."""
    settings = settings or get_settings()
    username = _credential(ctx, TOUCHBASE_CREDENTIALS, "smsUsername")
    password = _credential(ctx, TOUCHBASE_CREDENTIALS, "smsPassword")
    request = ApiRequest(
        method=method,
        url=f"{settings.sms_base_url}{endpoint}",
        auth=(username, password),
        json_body=body or {},
        params=query or {},
    )
    return await _dispatch(ctx, request)
