"""Operações SMS (MyMobileAPI)."""

from __future__ import annotations

import logging
from typing import Any

from touchbase_pro.adapters.upstream import touchbase_sms_request
from touchbase_pro.adapters.whatsapp.fields import unwrap
from touchbase_pro.domain.errors import ValidationError
from touchbase_pro.node.context import ExecutionContext
from touchbase_pro.observability.logging import get_logger

logger: logging.Logger = get_logger(__name__)


def build_bulk_messages_body(records: list[dict[str, Any]]) -> dict[str, Any]:
    """Converte `messages.message[]` no body de `/v3/BulkMessages`."""
    return {
        "messages": [
            {
                "destination": record.get("phoneNumber"),
                "content": record.get("message"),
                "customerId": record.get("senderId"),
            }
            for record in records
        ]
    }


async def get_balance(ctx: ExecutionContext, index: int) -> Any:
    """Saldo de créditos SMS da conta."""
    return await touchbase_sms_request(ctx, "GET", "/v3/Balance")


async def send_bulk_messages(ctx: ExecutionContext, index: int) -> Any:
    """Envia um lote de SMS numa única chamada."""
    records = unwrap(ctx.get_node_parameter("messages", index, {}), "message")
    if not records:
        raise ValidationError("At least one message is required", item_index=index)

    logger.info("Enviando lote de SMS", extra={"message_count": len(records)})
    return await touchbase_sms_request(
        ctx, "POST", "/v3/BulkMessages", build_bulk_messages_body(records)
    )


async def generate_auth_token(ctx: ExecutionContext, index: int) -> Any:
    """Gera token de autenticação MyMobileAPI."""
    return await touchbase_sms_request(ctx, "POST", "/Authentication")
