"""Builder para mensagens de texto simples."""

from __future__ import annotations

from touchbase_pro.adapters.whatsapp.models import InteraktMessageBody, MessageRequest
from touchbase_pro.adapters.whatsapp.payload_builders.base import require
from touchbase_pro.domain.enums import SIMPLE_WIRE_TYPES, SimpleMessageType


class TextPayloadBuilder:
    """Builder para texto: único subtipo que envia o telefone já composto."""

    def build(self, request: MessageRequest, index: int) -> InteraktMessageBody:
        require(request.message, "Message is required for text messages", index)
        return InteraktMessageBody(
            full_phone_number=request.destination_phone,
            type=SIMPLE_WIRE_TYPES[SimpleMessageType.TEXT],
            data={"message": request.message},
        )
