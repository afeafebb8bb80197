"""Builder para mensagens de template WhatsApp.

Cada subtipo acrescenta ao objeto `template` apenas o que foi preenchido:
headers, arquivo, valores de botões, cards de carrossel ou status de pedido.
`order_details` vai no body externo, como irmão de `template`.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any, assert_never

from touchbase_pro.adapters.whatsapp.fields import unwrap, values_of
from touchbase_pro.adapters.whatsapp.models import (
    CardDescriptor,
    InteraktMessageBody,
    MessageRequest,
    TemplateDescriptor,
)
from touchbase_pro.adapters.whatsapp.payload_builders.base import build_base_body, require
from touchbase_pro.adapters.whatsapp.payload_builders.orders import (
    build_order_details,
    build_order_status,
)
from touchbase_pro.domain.enums import TemplateType
from touchbase_pro.domain.errors import ValidationError

TEMPLATE_WIRE_TYPE = "Template"


def extract_values(group: Any, record_key: str) -> list[Any] | None:
    """`group[record_key][].value` como lista; None se não houver registros."""
    records = unwrap(group, record_key)
    if not records:
        return None
    return values_of(records)


def extract_button_values(group: Any) -> dict[str, list[Any]] | None:
    """Mapeia `buttonIndex` → valores; None se não houver botões."""
    buttons = [button for button in unwrap(group, "buttonValue") if isinstance(button, Mapping)]
    if not buttons:
        return None
    mapping: dict[str, list[Any]] = {}
    for button in buttons:
        button_index = button.get("buttonIndex")
        key = "" if button_index is None else str(button_index)
        mapping[key] = values_of(unwrap(button.get("values"), "value"))
    return mapping


def build_card(card: dict[str, Any]) -> CardDescriptor:
    """Card de carrossel com as mesmas regras de extração do template."""
    return CardDescriptor(
        header_values=extract_values(card.get("cardHeaderValues"), "headerValue"),
        body_values=extract_values(card.get("cardBodyValues"), "bodyValue"),
        button_values=extract_button_values(card.get("cardButtonValues")),
    )


def parse_template_type(raw: str | None, index: int) -> TemplateType:
    """Converte o subtipo cru; desconhecido é erro fatal do item."""
    require(raw, "Template type is required for template messages", index)
    try:
        return TemplateType(raw)
    except ValueError as exc:
        raise ValidationError(f"Unsupported template type: {raw}", item_index=index) from exc


class TemplatePayloadBuilder:
    """Builder para mensagens de template aprovadas."""

    def build(self, request: MessageRequest, index: int) -> InteraktMessageBody:
        require(request.template_name, "Template name is required for template messages", index)
        template_type = parse_template_type(request.subtype, index)

        body = build_base_body(request, TEMPLATE_WIRE_TYPE)
        template = TemplateDescriptor(
            name=request.template_name,
            language_code=request.template_language,
            body_values=values_of(request.variables),
        )

        match template_type:
            case TemplateType.BASIC:
                pass
            case TemplateType.TEXT_HEADER | TemplateType.IMAGE_HEADER:
                template.header_values = extract_values(request.header_values, "headerValue")
            case TemplateType.DOCUMENT_HEADER:
                template.header_values = extract_values(request.header_values, "headerValue")
                template.file_name = request.template_file_name or None
            case TemplateType.AUTHENTICATION | TemplateType.DYNAMIC_CTA:
                template.button_values = extract_button_values(request.button_values)
            case TemplateType.ORDER_CAROUSEL:
                cards = unwrap(request.carousel_cards, "card")
                template.carousel_cards = [
                    build_card(card) for card in cards if isinstance(card, Mapping)
                ] or None
                body.order_details = build_order_details(request.order_details)
            case TemplateType.ORDER_STATUS:
                template.order_status = build_order_status(request.order_status)
            case TemplateType.ORDER_SINGLE_IMAGE:
                template.header_values = extract_values(request.header_values, "headerValue")
                body.order_details = build_order_details(request.order_details)
            case _:
                assert_never(template_type)

        body.template = template
        return body
