"""Execução item a item de um node.

Itens são processados estritamente em ordem, um por vez: cada chamada HTTP
termina antes do próximo item começar.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from typing import Any

from touchbase_pro.domain.errors import NodeApiError, NodeOperationError
from touchbase_pro.infra.http import HttpError, UpstreamHttpError
from touchbase_pro.node.context import ExecutionContext
from touchbase_pro.node.registry import (
    OperationFn,
    touchbase_resolver,
    whatsapp_node_resolver,
)
from touchbase_pro.observability.logging import get_logger
from touchbase_pro.observability.middleware import item_scope

logger: logging.Logger = get_logger(__name__)

Resolver = Callable[[ExecutionContext, int], OperationFn]


def _annotate(exc: Exception, index: int) -> NodeOperationError:
    """Garante erro de node com o índice do item."""
    if isinstance(exc, NodeOperationError):
        if exc.item_index is None:
            exc.item_index = index
        return exc
    if isinstance(exc, UpstreamHttpError):
        return NodeApiError(str(exc), item_index=index, status_code=exc.status_code, body=exc.body)
    return NodeApiError(str(exc), item_index=index, status_code=getattr(exc, "status_code", None))


class NodeExecutor:
    """Executa a operação de cada item e coleta as saídas `{"json": ...}`."""

    def __init__(self, resolver: Resolver) -> None:
        self._resolver = resolver

    async def _run_item(self, ctx: ExecutionContext, index: int) -> dict[str, Any]:
        operation = self._resolver(ctx, index)
        response = await operation(ctx, index)
        if isinstance(response, dict):
            return response
        return {"data": response}

    async def execute(self, ctx: ExecutionContext) -> list[dict[str, Any]]:
        """Processa todos os itens.

        Raises:
            NodeOperationError: primeiro erro, quando continue_on_fail é False
        """
        outputs: list[dict[str, Any]] = []
        for index in range(ctx.item_count):
            with item_scope(index):
                try:
                    result = await self._run_item(ctx, index)
                except (NodeOperationError, HttpError) as exc:
                    error = _annotate(exc, index)
                    if not ctx.continue_on_fail:
                        if error is exc:
                            raise
                        raise error from exc
                    logger.warning(
                        "Item falhou, seguindo execução",
                        extra={"error_type": type(exc).__name__},
                    )
                    outputs.append({"json": {"error": error.message}})
                    continue
            outputs.append({"json": result})
        return outputs


def touchbase_executor() -> NodeExecutor:
    """Executor do node TouchBasePro (resource + operation)."""
    return NodeExecutor(touchbase_resolver)


def whatsapp_node_executor() -> NodeExecutor:
    """Executor do node TouchBasePro WhatsApp."""
    return NodeExecutor(whatsapp_node_resolver)
