"""Operações de envio WhatsApp.

- `send_whatsapp_message`: node TouchBasePro (via Interakt), todas as
  categorias e subtipos.
- `send_native_whatsapp_message`: node TouchBasePro WhatsApp (endpoint
  nativo, credencial dedicada), apenas texto e template básico.

Toda validação acontece na construção do body, antes de qualquer chamada.
"""

from __future__ import annotations

import logging
from typing import Any

from pydantic import ValidationError as PydanticValidationError

from touchbase_pro.adapters.upstream import (
    WHATSAPP_CREDENTIALS,
    interakt_whatsapp_request,
    touchbase_whatsapp_request,
)
from touchbase_pro.adapters.whatsapp.fields import unwrap
from touchbase_pro.adapters.whatsapp.models import MessageRequest
from touchbase_pro.adapters.whatsapp.payload_builders import build_message_body
from touchbase_pro.domain.enums import MessageCategory, TemplateType
from touchbase_pro.domain.errors import ValidationError
from touchbase_pro.node.context import ExecutionContext
from touchbase_pro.observability.logging import get_logger

logger: logging.Logger = get_logger(__name__)

MESSAGE_ENDPOINT = "/message/"

# Parâmetros opcionais do formulário e seus defaults
_OPTIONAL_TEXT_PARAMS: dict[str, str] = {
    "message": "message",
    "mediaUrl": "media_url",
    "fileName": "file_name",
    "templateName": "template_name",
    "templateFileName": "template_file_name",
}
_OPTIONAL_GROUP_PARAMS: dict[str, str] = {
    "buttonMessage": "button_message",
    "listMessage": "list_message",
    "headerValues": "header_values",
    "buttonValues": "button_values",
    "carouselCards": "carousel_cards",
    "orderDetails": "order_details",
    "orderStatus": "order_status",
}


def _parse_request(fields: dict[str, Any], index: int) -> MessageRequest:
    """Valida os tipos dos parâmetros; tipo inválido é erro fatal do item."""
    try:
        return MessageRequest(**fields)
    except PydanticValidationError as exc:
        first = exc.errors()[0]
        field = ".".join(str(part) for part in first["loc"])
        raise ValidationError(
            f"Invalid value for {field}: {first['msg']}", item_index=index
        ) from exc


def read_message_request(ctx: ExecutionContext, index: int) -> MessageRequest:
    """Lê os parâmetros do item e monta o MessageRequest.

    O subtipo vem de `messageType` (simple) ou `templateType` (template);
    categoria desconhecida fica sem subtipo e é rejeitada pelo builder.
    """
    category = ctx.get_node_parameter("messageCategory", index)

    subtype: str | None = None
    if category == MessageCategory.SIMPLE:
        subtype = ctx.get_node_parameter("messageType", index)
    elif category == MessageCategory.TEMPLATE:
        subtype = ctx.get_node_parameter("templateType", index)

    fields: dict[str, Any] = {
        "country_code": ctx.get_node_parameter("countryCode", index),
        "phone_number": ctx.get_node_parameter("phoneNumber", index),
        "category": category,
        "subtype": subtype,
        "template_language": ctx.get_node_parameter("templateLanguage", index, "en") or "en",
        "variables": unwrap(ctx.get_node_parameter("variables", index, {}), "variable"),
    }
    for param, field in _OPTIONAL_TEXT_PARAMS.items():
        fields[field] = ctx.get_node_parameter(param, index, "")
    for param, field in _OPTIONAL_GROUP_PARAMS.items():
        fields[field] = ctx.get_node_parameter(param, index, {}) or {}

    return _parse_request(fields, index)


async def send_whatsapp_message(ctx: ExecutionContext, index: int) -> Any:
    """Envia uma mensagem WhatsApp (simple ou template) via Interakt."""
    request = read_message_request(ctx, index)
    body = build_message_body(request, index)

    logger.info(
        "Enviando mensagem WhatsApp",
        extra={"category": request.category, "subtype": request.subtype},
    )
    return await interakt_whatsapp_request(ctx, "POST", MESSAGE_ENDPOINT, body)


# Node dedicado: messageType text|template mapeado para categoria/subtipo
_NATIVE_MESSAGE_TYPES: dict[str, tuple[MessageCategory, str]] = {
    "text": (MessageCategory.SIMPLE, "text"),
    "template": (MessageCategory.TEMPLATE, TemplateType.BASIC.value),
}


def read_native_message_request(ctx: ExecutionContext, index: int) -> MessageRequest:
    """Parâmetros do node dedicado: telefone já com código do país."""
    message_type = ctx.get_node_parameter("messageType", index)
    if message_type not in _NATIVE_MESSAGE_TYPES:
        raise ValidationError(f"Unsupported message type: {message_type}", item_index=index)
    category, subtype = _NATIVE_MESSAGE_TYPES[message_type]

    fields: dict[str, Any] = {
        "phone_number": ctx.get_node_parameter("phoneNumber", index),
        "category": category,
        "subtype": subtype,
        "message": ctx.get_node_parameter("message", index, ""),
        "template_name": ctx.get_node_parameter("templateName", index, ""),
        "template_language": ctx.get_node_parameter("templateLanguage", index, "en") or "en",
        "variables": unwrap(ctx.get_node_parameter("variables", index, {}), "variable"),
    }
    return _parse_request(fields, index)


async def send_native_whatsapp_message(ctx: ExecutionContext, index: int) -> Any:
    """Envia texto ou template básico pelo endpoint WhatsApp nativo.

    O destino vai sempre em `fullPhoneNumber`, inclusive para template.
    """
    request = read_native_message_request(ctx, index)
    body = build_message_body(request, index)
    body.pop("countryCode", None)
    body.pop("phoneNumber", None)
    body["fullPhoneNumber"] = request.destination_phone

    logger.info("Enviando mensagem WhatsApp nativa", extra={"subtype": request.subtype})
    return await touchbase_whatsapp_request(
        ctx,
        "POST",
        MESSAGE_ENDPOINT,
        body,
        credential_set=WHATSAPP_CREDENTIALS,
    )
