"""Middlewares e contexto de observabilidade."""

from __future__ import annotations

import uuid
from collections.abc import Iterator
from contextlib import contextmanager
from contextvars import ContextVar

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import Response

_correlation_id: ContextVar[str] = ContextVar("correlation_id", default="")
_item_index: ContextVar[int | None] = ContextVar("item_index", default=None)


def get_correlation_id() -> str:
    """Retorna o correlation_id corrente (ou vazio)."""

    return _correlation_id.get()


def get_item_index() -> int | None:
    """Retorna o índice do item em execução (ou None fora de execução)."""

    return _item_index.get()


@contextmanager
def item_scope(index: int) -> Iterator[None]:
    """Marca o item corrente para que os logs carreguem item_index."""

    token = _item_index.set(index)
    try:
        yield
    finally:
        _item_index.reset(token)


class CorrelationIdMiddleware(BaseHTTPMiddleware):
    """Gera ou propaga correlation_id em cada request."""

    def __init__(self, app, header_name: str = "X-Correlation-ID") -> None:  # type: ignore[no-untyped-def]
        super().__init__(app)
        self._header_name = header_name.lower()

    async def dispatch(self, request: Request, call_next) -> Response:  # type: ignore[override]
        incoming = request.headers.get(self._header_name)
        correlation_id = incoming or str(uuid.uuid4())
        token = _correlation_id.set(correlation_id)
        try:
            response = await call_next(request)
        finally:
            _correlation_id.reset(token)

        response.headers[self._header_name] = correlation_id
        return response
