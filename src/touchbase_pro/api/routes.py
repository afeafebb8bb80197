"""Rotas HTTP: execução de operações e resolução de opções dos nodes."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from fastapi import APIRouter, Depends, HTTPException, status
from pydantic import BaseModel, ConfigDict, Field

from touchbase_pro.api.dependencies import get_credentials, get_http_client, get_settings
from touchbase_pro.config.settings import Settings
from touchbase_pro.domain.errors import NodeApiError, NodeOperationError
from touchbase_pro.infra.http import HttpClient, HttpError, UpstreamHttpError
from touchbase_pro.node.context import StaticExecutionContext
from touchbase_pro.node.executor import NodeExecutor, touchbase_executor, whatsapp_node_executor
from touchbase_pro.node.registry import TOUCHBASE_NODE, WHATSAPP_NODE, get_options_method
from touchbase_pro.observability.logging import get_logger

logger = get_logger(__name__)

router = APIRouter()

_EXECUTORS: dict[str, NodeExecutor] = {
    TOUCHBASE_NODE: touchbase_executor(),
    WHATSAPP_NODE: whatsapp_node_executor(),
}


class ExecuteRequest(BaseModel):
    """Invocação de um node: parâmetros por item."""

    model_config = ConfigDict(populate_by_name=True)

    node: str = TOUCHBASE_NODE
    resource: str | None = None
    operation: str
    items: list[dict[str, Any]] = Field(default_factory=lambda: [{}])
    continue_on_fail: bool = Field(default=False, alias="continueOnFail")


class OptionsRequest(BaseModel):
    """Parâmetros atuais do formulário para um resolver de opções."""

    node: str = TOUCHBASE_NODE
    parameters: dict[str, Any] = Field(default_factory=dict)


def _item_parameters(payload: ExecuteRequest) -> list[dict[str, Any]]:
    """Mescla resource/operation em cada item (o item pode sobrescrever)."""
    shared: dict[str, Any] = {"operation": payload.operation}
    if payload.resource is not None:
        shared["resource"] = payload.resource
    return [{**shared, **item} for item in payload.items]


def _error_detail(exc: NodeOperationError) -> dict[str, Any]:
    detail: dict[str, Any] = {"message": exc.message, "itemIndex": exc.item_index}
    if isinstance(exc, NodeApiError):
        detail["statusCode"] = exc.status_code
        detail["body"] = exc.body
    return detail


@router.get("/health")
def health(settings: Settings = Depends(get_settings)) -> dict[str, str]:
    """Healthcheck simples."""
    return {"status": "ok", "service": settings.service_name, "version": settings.version}


@router.post("/v1/execute")
async def execute(
    payload: ExecuteRequest,
    http_client: HttpClient = Depends(get_http_client),
    credentials: Mapping[str, Mapping[str, str]] = Depends(get_credentials),
) -> dict[str, Any]:
    """Executa a operação para todos os itens, em ordem."""
    executor = _EXECUTORS.get(payload.node)
    if executor is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="unknown_node")

    ctx = StaticExecutionContext(
        items=_item_parameters(payload),
        credentials=credentials,
        http=http_client,
        continue_on_fail=payload.continue_on_fail,
    )

    try:
        items = await executor.execute(ctx)
    except NodeApiError as exc:
        logger.warning("Execução falhou no upstream", extra={"status_code": exc.status_code})
        raise HTTPException(
            status_code=status.HTTP_502_BAD_GATEWAY, detail=_error_detail(exc)
        ) from exc
    except NodeOperationError as exc:
        raise HTTPException(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY, detail=_error_detail(exc)
        ) from exc

    return {"items": items}


@router.post("/v1/options/{method}")
async def load_options(
    method: str,
    payload: OptionsRequest,
    http_client: HttpClient = Depends(get_http_client),
    credentials: Mapping[str, Mapping[str, str]] = Depends(get_credentials),
) -> dict[str, Any]:
    """Resolve as opções de um dropdown dinâmico."""
    resolver = get_options_method(payload.node, method)
    if resolver is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="unknown_method")

    ctx = StaticExecutionContext(
        items=[],
        credentials=credentials,
        http=http_client,
        current_parameters=payload.parameters,
    )

    try:
        options = await resolver(ctx)
    except NodeOperationError as exc:
        raise HTTPException(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY, detail=_error_detail(exc)
        ) from exc
    except HttpError as exc:
        detail: dict[str, Any] = {"message": str(exc), "statusCode": exc.status_code}
        if isinstance(exc, UpstreamHttpError):
            detail["body"] = exc.body
        raise HTTPException(status_code=status.HTTP_502_BAD_GATEWAY, detail=detail) from exc

    return {"options": options}
