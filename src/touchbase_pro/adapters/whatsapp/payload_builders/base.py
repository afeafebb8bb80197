"""Interfaces e utilidades base para builders de payload."""

from __future__ import annotations

from typing import Protocol

from touchbase_pro.adapters.whatsapp.models import InteraktMessageBody, MessageRequest
from touchbase_pro.domain.errors import ValidationError

CALLBACK_DATA = "n8n_whatsapp_message"


class PayloadBuilder(Protocol):
    """Protocolo para builders de body por subtipo de mensagem."""

    def build(self, request: MessageRequest, index: int) -> InteraktMessageBody:
        """Constrói o body do subtipo.

        Args:
            request: Parâmetros do item
            index: Índice do item (para erros de validação)

        Raises:
            ValidationError: Se faltar campo obrigatório
        """
        ...


def build_base_body(request: MessageRequest, wire_type: str) -> InteraktMessageBody:
    """Body base comum (todos exceto texto simples).

    Envia código do país e número como digitados; a API faz a composição.
    """
    return InteraktMessageBody(
        country_code=request.country_code,
        phone_number=request.phone_number,
        callback_data=CALLBACK_DATA,
        type=wire_type,
    )


def require(condition: object, message: str, index: int) -> None:
    """Levanta ValidationError com o índice do item se a condição falhar."""
    if not condition:
        raise ValidationError(message, item_index=index)
