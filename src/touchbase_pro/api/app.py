"""Fábrica da aplicação FastAPI."""

from __future__ import annotations

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI

from touchbase_pro.api.routes import router
from touchbase_pro.config.settings import Settings, get_settings
from touchbase_pro.infra.http import HttpClient, create_http_client
from touchbase_pro.observability.logging import configure_logging, get_logger
from touchbase_pro.observability.middleware import CorrelationIdMiddleware

logger = get_logger(__name__)


def create_app(
    settings: Settings | None = None,
    http_client: HttpClient | None = None,
) -> FastAPI:
    """Cria a aplicação FastAPI.

    Raises:
        ValueError: credenciais do ambiente inconsistentes
    """
    settings = settings or get_settings()
    configure_logging(settings.log_level, settings.service_name)

    validation_errors = settings.validate_credentials()
    if validation_errors:
        error_msg = "; ".join(validation_errors)
        raise ValueError(f"Configuração inválida: {error_msg}")

    client = http_client or create_http_client(settings)

    @asynccontextmanager
    async def lifespan(_: FastAPI) -> AsyncIterator[None]:
        yield
        await client.close()

    app = FastAPI(title=settings.service_name, version=settings.version, lifespan=lifespan)
    app.add_middleware(CorrelationIdMiddleware, header_name=settings.correlation_id_header)
    app.include_router(router)

    app.state.settings = settings
    app.state.http_client = client
    app.state.credentials = settings.credential_sets()

    logger.info("Aplicação criada", extra={"environment": settings.environment})
    return app
