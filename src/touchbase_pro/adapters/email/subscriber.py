"""Assinantes de listas de email TouchBasePro.

`add` cria o assinante; `update` altera um existente, identificado pelo email
atual na URL. Campos customizados chegam como `fieldMeta = "nome::tipo"`.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any
from urllib.parse import quote

from touchbase_pro.adapters.upstream import touchbase_request
from touchbase_pro.adapters.whatsapp.fields import unwrap
from touchbase_pro.domain.enums import SubscriberOperation
from touchbase_pro.domain.errors import ValidationError
from touchbase_pro.node.context import ExecutionContext, LoadOptionsContext
from touchbase_pro.observability.logging import get_logger

logger: logging.Logger = get_logger(__name__)

FIELDS_PAGE_SIZE = 1000
FIELD_META_SEPARATOR = "::"


def _normalize_field_value(value: Any) -> Any:
    """Valores separados por vírgula viram `a|b|c` (partes vazias descartadas)."""
    if isinstance(value, str) and "," in value:
        return "|".join(part.strip() for part in value.split(",") if part.strip())
    return value


def _has_value(value: Any) -> bool:
    """Números e booleanos (inclusive 0 e False) sempre contam como preenchidos."""
    if value is None:
        return False
    if isinstance(value, str):
        return value.strip() != ""
    if isinstance(value, (list, tuple, Mapping)):
        return len(value) > 0
    return True


def build_custom_fields(entries: list[dict[str, Any]]) -> list[dict[str, Any]]:
    """Converte `customFields.field[]` em `[{name, value}]` sem valores vazios."""
    fields = []
    for entry in entries:
        if not isinstance(entry, Mapping):
            continue
        name = (entry.get("fieldMeta") or "").split(FIELD_META_SEPARATOR)[0]
        value = _normalize_field_value(entry.get("value"))
        if _has_value(value):
            fields.append({"name": name, "value": value})
    return fields


async def add_or_update_subscriber(ctx: ExecutionContext, index: int) -> Any:
    """Adiciona ou atualiza um assinante numa lista.

    Raises:
        ValidationError: sub-operação desconhecida ou `update` sem email atual
    """
    list_id = ctx.get_node_parameter("listId", index)
    raw_operation = ctx.get_node_parameter("subOperation", index)
    try:
        operation = SubscriberOperation(raw_operation)
    except ValueError as exc:
        raise ValidationError(
            f"Unsupported subscriber operation: {raw_operation}", item_index=index
        ) from exc

    custom_group = ctx.get_node_parameter("customFields", index, {})
    custom_fields = build_custom_fields(unwrap(custom_group, "field"))

    body: dict[str, Any]
    if operation is SubscriberOperation.ADD:
        body = {
            "email": ctx.get_node_parameter("email", index),
            "reSubscribe": ctx.get_node_parameter("reSubscribe", index),
            "allowTracking": ctx.get_node_parameter("consentToTrack", index),
            "status": ctx.get_node_parameter("status", index),
        }
        method = "POST"
        endpoint = f"/email/lists/{list_id}/subscribers"
    else:
        current_email = ctx.get_node_parameter("currentEmail", index, "")
        if not current_email:
            raise ValidationError(
                "Current subscriber email is required for update", item_index=index
            )
        body = {
            "reSubscribe": ctx.get_node_parameter("reSubscribe", index),
            "allowTracking": ctx.get_node_parameter("consentToTrack", index),
        }
        method = "PUT"
        endpoint = f"/email/lists/{list_id}/subscribers/{quote(current_email, safe='')}"

    if custom_fields:
        body["customFields"] = custom_fields

    logger.info(
        "Gravando assinante",
        extra={"sub_operation": operation.value, "custom_field_count": len(custom_fields)},
    )
    return await touchbase_request(ctx, method, endpoint, body)


async def get_custom_fields(ctx: LoadOptionsContext) -> list[dict[str, str]]:
    """Campos customizados da lista selecionada, paginando até `totalPages`.

    Erros upstream propagam (o host mostra o erro no dropdown).
    """
    list_id = ctx.get_current_node_parameter("listId")
    if not list_id:
        return []

    options: list[dict[str, str]] = []
    page = 1
    total_pages = 1
    while page <= total_pages:
        response = await touchbase_request(
            ctx,
            "GET",
            f"/email/lists/{list_id}/fields",
            query={"page": page, "pageSize": FIELDS_PAGE_SIZE},
        )
        fields = response.get("data") if isinstance(response, Mapping) else None
        if not isinstance(fields, list):
            break
        total_pages = response.get("totalPages") or 1
        options.extend(
            {"name": f"{field.get('name')}", "value": f"{field.get('name')}::{field.get('type')}"}
            for field in fields
        )
        page += 1

    return options
