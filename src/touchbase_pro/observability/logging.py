"""Configuração de logging estruturado (JSON)."""

from __future__ import annotations

import logging

from pythonjsonlogger.json import JsonFormatter

from touchbase_pro.observability.middleware import get_correlation_id, get_item_index


class ExecutionContextFilter(logging.Filter):
    """Insere correlation_id, item_index e service no record de log.

    Importante: nunca adicionar credenciais ou conteúdo de mensagens nos logs.
    """

    def __init__(self, service_name: str) -> None:
        super().__init__()
        self._service_name = service_name

    def filter(self, record: logging.LogRecord) -> bool:  # noqa: A003
        existing = getattr(record, "correlation_id", None)
        record.correlation_id = existing if existing else get_correlation_id()
        if getattr(record, "item_index", None) is None:
            record.item_index = get_item_index()
        record.service = self._service_name
        return True


def configure_logging(level: str, service_name: str) -> None:
    """Configura logging JSON com campos padrao do serviço."""

    formatter = JsonFormatter(
        "%(asctime)s %(levelname)s %(name)s %(message)s "
        "%(correlation_id)s %(item_index)s %(service)s",
        rename_fields={"levelname": "level", "name": "logger"},
    )

    handler = logging.StreamHandler()
    handler.setLevel(level)
    handler.setFormatter(formatter)
    handler.addFilter(ExecutionContextFilter(service_name))

    root = logging.getLogger()
    root.setLevel(level)
    root.handlers = [handler]


def get_logger(name: str) -> logging.Logger:
    """Retorna logger simples; o filtro injeta service/correlation_id/item_index."""

    return logging.getLogger(name)


def log_degraded(
    logger: logging.Logger,
    component: str,
    reason: str | None = None,
) -> None:
    """Log observável de degradação (ex.: dropdown vazio por erro upstream).

    Args:
        logger: Logger instance
        component: Nome do componente (ex: "whatsapp_template_options")
        reason: Razão da degradação (ex: "HttpError"), sem PII
    """
    extra: dict[str, object] = {
        "degraded": True,
        "component": component,
    }
    if reason:
        extra["reason"] = reason

    logger.error(
        f"Degraded result for {component}",
        extra=extra,
    )
