"""Builders para mensagens interativas (botões e lista).

IDs e títulos não preenchidos recebem placeholders em vez de falhar.
"""

from __future__ import annotations

from typing import Any

from touchbase_pro.adapters.whatsapp.fields import unwrap
from touchbase_pro.adapters.whatsapp.models import InteraktMessageBody, MessageRequest
from touchbase_pro.adapters.whatsapp.payload_builders.base import build_base_body, require
from touchbase_pro.domain.enums import SIMPLE_WIRE_TYPES, SimpleMessageType

DEFAULT_BODY_TEXT = "Please select an option"
DEFAULT_LIST_BUTTON = "View Options"


def _build_reply_button(button: dict[str, Any], position: int) -> dict[str, Any]:
    """Botão de resposta (`position` é 1-based)."""
    return {
        "type": "reply",
        "reply": {
            "id": button.get("buttonId") or f"id{position}",
            "title": button.get("buttonTitle") or f"Button {position}",
        },
    }


def _build_list_row(row: dict[str, Any]) -> dict[str, Any]:
    return {
        "id": row.get("rowId") or "unique_id",
        "title": row.get("rowTitle") or "Row Title",
        "description": row.get("rowDescription") or "Row Description",
    }


def _build_list_section(section: dict[str, Any]) -> dict[str, Any]:
    return {
        "title": section.get("sectionTitle") or "Section",
        "rows": [_build_list_row(row) for row in unwrap(section.get("rows"), "row")],
    }


class ButtonPayloadBuilder:
    """Builder para botões de resposta rápida."""

    def build(self, request: MessageRequest, index: int) -> InteraktMessageBody:
        config = request.button_message.get("buttonConfig")
        require(config, "Button configuration is required for button messages", index)

        buttons = unwrap(config.get("buttons"), "button")
        require(buttons, "At least one button is required for button messages", index)

        body = build_base_body(request, SIMPLE_WIRE_TYPES[SimpleMessageType.BUTTON])
        body.data = {
            "message": {
                "type": "button",
                "body": {"text": config.get("messageText") or DEFAULT_BODY_TEXT},
                "action": {
                    "buttons": [
                        _build_reply_button(button, position)
                        for position, button in enumerate(buttons, start=1)
                    ]
                },
            }
        }
        return body


class ListPayloadBuilder:
    """Builder para mensagens de lista com seções e linhas."""

    def build(self, request: MessageRequest, index: int) -> InteraktMessageBody:
        config = request.list_message.get("listConfig")
        require(config, "List configuration is required for list messages", index)

        sections = unwrap(config.get("sections"), "section")
        require(sections, "At least one section is required for list messages", index)

        body = build_base_body(request, SIMPLE_WIRE_TYPES[SimpleMessageType.LIST])
        body.data = {
            "message": {
                "type": "list",
                "body": {"text": config.get("messageText") or DEFAULT_BODY_TEXT},
                "action": {
                    "button": config.get("buttonText") or DEFAULT_LIST_BUTTON,
                    "sections": [_build_list_section(section) for section in sections],
                },
            }
        }
        return body
