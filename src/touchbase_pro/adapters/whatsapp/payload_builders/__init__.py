"""Builders de body para a API WhatsApp (Interakt / TouchBasePro).

Um builder por subtipo de mensagem; a factory escolhe pela categoria.
"""

from touchbase_pro.adapters.whatsapp.payload_builders.base import (
    PayloadBuilder,
    build_base_body,
)
from touchbase_pro.adapters.whatsapp.payload_builders.factory import (
    build_message_body,
    get_simple_builder,
)

__all__ = [
    "PayloadBuilder",
    "build_base_body",
    "build_message_body",
    "get_simple_builder",
]
