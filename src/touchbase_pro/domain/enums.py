"""Enums de domínio: recursos, operações e subtipos de mensagem WhatsApp."""

from __future__ import annotations

from enum import StrEnum


class Resource(StrEnum):
    """Recursos expostos pelo node TouchBasePro."""

    EMAIL = "email"
    WHATSAPP = "whatsapp"
    SMS = "sms"


class Operation(StrEnum):
    """Operações executáveis (o recurso dono está em OPERATIONS_BY_RESOURCE)."""

    ADD_OR_UPDATE_SUBSCRIBER = "addOrUpdateSubscriber"
    SEND_WHATSAPP_MESSAGE = "sendWhatsAppMessage"
    GET_BALANCE = "getBalance"
    SEND_BULK_MESSAGES = "sendBulkMessages"
    GENERATE_AUTH_TOKEN = "generateAuthToken"


OPERATIONS_BY_RESOURCE: dict[Resource, frozenset[Operation]] = {
    Resource.EMAIL: frozenset({Operation.ADD_OR_UPDATE_SUBSCRIBER}),
    Resource.WHATSAPP: frozenset({Operation.SEND_WHATSAPP_MESSAGE}),
    Resource.SMS: frozenset(
        {
            Operation.GET_BALANCE,
            Operation.SEND_BULK_MESSAGES,
            Operation.GENERATE_AUTH_TOKEN,
        }
    ),
}


class MessageCategory(StrEnum):
    """Categoria da mensagem WhatsApp: livre (simple) ou template aprovado."""

    SIMPLE = "simple"
    TEMPLATE = "template"


class SimpleMessageType(StrEnum):
    """Subtipos de mensagem simples.

    O valor enviado no campo `type` do body está em SIMPLE_WIRE_TYPES.
    """

    TEXT = "text"
    AUDIO = "audio"
    IMAGE = "image"
    DOCUMENT = "document"
    VIDEO = "video"
    BUTTON = "button"
    LIST = "list"


SIMPLE_WIRE_TYPES: dict[SimpleMessageType, str] = {
    SimpleMessageType.TEXT: "Text",
    SimpleMessageType.AUDIO: "Audio",
    SimpleMessageType.IMAGE: "Image",
    SimpleMessageType.DOCUMENT: "Document",
    SimpleMessageType.VIDEO: "Video",
    SimpleMessageType.BUTTON: "InteractiveButton",
    SimpleMessageType.LIST: "InteractiveList",
}


class TemplateType(StrEnum):
    """Subtipos de template WhatsApp suportados."""

    BASIC = "basic"
    TEXT_HEADER = "textHeader"
    IMAGE_HEADER = "imageHeader"
    DOCUMENT_HEADER = "documentHeader"
    AUTHENTICATION = "authentication"
    DYNAMIC_CTA = "dynamicCTA"
    ORDER_CAROUSEL = "orderCarousel"
    ORDER_STATUS = "orderStatus"
    ORDER_SINGLE_IMAGE = "orderSingleImage"


class SubscriberOperation(StrEnum):
    """Sub-operação de assinante (add cria, update altera existente)."""

    ADD = "add"
    UPDATE = "update"
