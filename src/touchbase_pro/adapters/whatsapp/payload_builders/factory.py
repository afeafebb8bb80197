"""Factory para obter o builder correto por categoria e subtipo."""

from __future__ import annotations

from typing import Any, assert_never

from touchbase_pro.adapters.whatsapp.models import MessageRequest
from touchbase_pro.adapters.whatsapp.payload_builders.base import PayloadBuilder
from touchbase_pro.adapters.whatsapp.payload_builders.interactive import (
    ButtonPayloadBuilder,
    ListPayloadBuilder,
)
from touchbase_pro.adapters.whatsapp.payload_builders.media import MediaPayloadBuilder
from touchbase_pro.adapters.whatsapp.payload_builders.template import TemplatePayloadBuilder
from touchbase_pro.adapters.whatsapp.payload_builders.text import TextPayloadBuilder
from touchbase_pro.domain.enums import MessageCategory, SimpleMessageType
from touchbase_pro.domain.errors import ValidationError

# Mapeamento de subtipo simples para builder
_SIMPLE_BUILDERS: dict[SimpleMessageType, PayloadBuilder] = {
    SimpleMessageType.TEXT: TextPayloadBuilder(),
    SimpleMessageType.AUDIO: MediaPayloadBuilder(SimpleMessageType.AUDIO),
    SimpleMessageType.IMAGE: MediaPayloadBuilder(SimpleMessageType.IMAGE),
    SimpleMessageType.DOCUMENT: MediaPayloadBuilder(SimpleMessageType.DOCUMENT),
    SimpleMessageType.VIDEO: MediaPayloadBuilder(SimpleMessageType.VIDEO),
    SimpleMessageType.BUTTON: ButtonPayloadBuilder(),
    SimpleMessageType.LIST: ListPayloadBuilder(),
}

_TEMPLATE_BUILDER = TemplatePayloadBuilder()


def get_simple_builder(message_type: SimpleMessageType) -> PayloadBuilder:
    """Retorna o builder para o subtipo simples."""
    return _SIMPLE_BUILDERS[message_type]


def _parse_category(raw: str, index: int) -> MessageCategory:
    try:
        return MessageCategory(raw)
    except ValueError as exc:
        raise ValidationError(f"Unsupported message category: {raw}", item_index=index) from exc


def _parse_simple_type(raw: str | None, index: int) -> SimpleMessageType:
    try:
        return SimpleMessageType(raw)
    except ValueError as exc:
        raise ValidationError(f"Unsupported message type: {raw}", item_index=index) from exc


def build_message_body(request: MessageRequest, index: int) -> dict[str, Any]:
    """Constrói o body completo para `POST /message/`.

    Raises:
        ValidationError: categoria/subtipo desconhecido ou campo obrigatório ausente
    """
    category = _parse_category(request.category, index)

    match category:
        case MessageCategory.SIMPLE:
            builder = get_simple_builder(_parse_simple_type(request.subtype, index))
        case MessageCategory.TEMPLATE:
            builder = _TEMPLATE_BUILDER
        case _:
            assert_never(category)

    return builder.build(request, index).to_wire()
