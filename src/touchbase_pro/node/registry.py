"""Tabelas de operações e de resolvers de opções dos nodes.

Dois nodes são expostos:
- `touchBasePro`: resolve por (resource, operation)
- `touchBaseProWhatsApp`: resolve só por operation (endpoint nativo)
"""

from __future__ import annotations

from collections.abc import Awaitable, Callable
from typing import Any

from touchbase_pro.adapters.email.subscriber import add_or_update_subscriber, get_custom_fields
from touchbase_pro.adapters.sms.operations import (
    generate_auth_token,
    get_balance,
    send_bulk_messages,
)
from touchbase_pro.adapters.whatsapp.operations import (
    send_native_whatsapp_message,
    send_whatsapp_message,
)
from touchbase_pro.adapters.whatsapp.options import (
    get_template_language_options,
    get_template_variable_options,
    get_whatsapp_template_options,
)
from touchbase_pro.domain.enums import Operation, Resource
from touchbase_pro.domain.errors import OperationNotImplementedError
from touchbase_pro.node.context import ExecutionContext, LoadOptionsContext

OperationFn = Callable[[ExecutionContext, int], Awaitable[Any]]
OptionsFn = Callable[[LoadOptionsContext], Awaitable[list[dict[str, str]]]]

TOUCHBASE_NODE = "touchBasePro"
WHATSAPP_NODE = "touchBaseProWhatsApp"

TOUCHBASE_OPERATIONS: dict[tuple[Resource, Operation], OperationFn] = {
    (Resource.EMAIL, Operation.ADD_OR_UPDATE_SUBSCRIBER): add_or_update_subscriber,
    (Resource.WHATSAPP, Operation.SEND_WHATSAPP_MESSAGE): send_whatsapp_message,
    (Resource.SMS, Operation.GET_BALANCE): get_balance,
    (Resource.SMS, Operation.SEND_BULK_MESSAGES): send_bulk_messages,
    (Resource.SMS, Operation.GENERATE_AUTH_TOKEN): generate_auth_token,
}

WHATSAPP_NODE_OPERATIONS: dict[Operation, OperationFn] = {
    Operation.SEND_WHATSAPP_MESSAGE: send_native_whatsapp_message,
}

LOAD_OPTIONS: dict[str, dict[str, OptionsFn]] = {
    TOUCHBASE_NODE: {
        "getWhatsAppTemplateOptions": get_whatsapp_template_options,
        "getTemplateVariableOptions": get_template_variable_options,
        "getTemplateLanguageOptions": get_template_language_options,
        "getCustomFields": get_custom_fields,
    },
    WHATSAPP_NODE: {
        "getWhatsAppTemplateOptions": get_whatsapp_template_options,
        "getTemplateVariableOptions": get_template_variable_options,
        "getTemplateLanguageOptions": get_template_language_options,
    },
}


def resolve_operation(resource: str, operation: str, index: int) -> OperationFn:
    """Função do par (resource, operation) do node TouchBasePro.

    Raises:
        OperationNotImplementedError: par sem função registrada
    """
    try:
        key = (Resource(resource), Operation(operation))
    except ValueError:
        key = None
    func = TOUCHBASE_OPERATIONS.get(key) if key else None
    if func is None:
        raise OperationNotImplementedError(
            f'Operation "{operation}" not implemented for resource "{resource}"',
            item_index=index,
        )
    return func


def resolve_whatsapp_node_operation(operation: str, index: int) -> OperationFn:
    """Função da operação do node TouchBasePro WhatsApp."""
    try:
        func = WHATSAPP_NODE_OPERATIONS.get(Operation(operation))
    except ValueError:
        func = None
    if func is None:
        raise OperationNotImplementedError(
            f'Operation "{operation}" not implemented', item_index=index
        )
    return func


def touchbase_resolver(ctx: ExecutionContext, index: int) -> OperationFn:
    """Lê resource/operation do item e resolve no node TouchBasePro."""
    return resolve_operation(
        ctx.get_node_parameter("resource", index),
        ctx.get_node_parameter("operation", index),
        index,
    )


def whatsapp_node_resolver(ctx: ExecutionContext, index: int) -> OperationFn:
    """Lê operation do item e resolve no node TouchBasePro WhatsApp."""
    return resolve_whatsapp_node_operation(ctx.get_node_parameter("operation", index), index)


def get_options_method(node: str, method: str) -> OptionsFn | None:
    """Resolver de opções pelo nome do método (None se desconhecido)."""
    return LOAD_OPTIONS.get(node, {}).get(method)
