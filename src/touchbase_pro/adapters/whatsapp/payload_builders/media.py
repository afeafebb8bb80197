"""Builders para mensagens de mídia (áudio, imagem, documento, vídeo)."""

from __future__ import annotations

from typing import Any

from touchbase_pro.adapters.whatsapp.models import InteraktMessageBody, MessageRequest
from touchbase_pro.adapters.whatsapp.payload_builders.base import build_base_body, require
from touchbase_pro.domain.enums import SIMPLE_WIRE_TYPES, SimpleMessageType

# Subtipos cujo `data.fileName` é sempre enviado (com nome padrão)
_DEFAULT_FILE_NAMES: dict[SimpleMessageType, str] = {
    SimpleMessageType.AUDIO: "Audio",
    SimpleMessageType.VIDEO: "Video",
}


class MediaPayloadBuilder:
    """Builder parametrizado pelo subtipo de mídia."""

    def __init__(self, message_type: SimpleMessageType) -> None:
        self.message_type = message_type

    def build(self, request: MessageRequest, index: int) -> InteraktMessageBody:
        require(
            request.message and request.media_url,
            f"Message and Media URL are required for {self.message_type.value} messages",
            index,
        )

        data: dict[str, Any] = {
            "message": request.message,
            "mediaUrl": request.media_url,
        }
        default_name = _DEFAULT_FILE_NAMES.get(self.message_type)
        if default_name is not None:
            data["fileName"] = request.file_name or default_name

        body = build_base_body(request, SIMPLE_WIRE_TYPES[self.message_type])
        body.data = data
        return body
