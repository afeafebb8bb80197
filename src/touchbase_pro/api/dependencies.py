"""Dependências injetadas nas rotas."""

from __future__ import annotations

from collections.abc import Mapping

from fastapi import Request

from touchbase_pro.config.settings import Settings
from touchbase_pro.infra.http import HttpClient


def get_settings(request: Request) -> Settings:
    """Retorna settings da aplicação."""

    return request.app.state.settings


def get_http_client(request: Request) -> HttpClient:
    """Retorna o cliente HTTP compartilhado pelas operações."""

    return request.app.state.http_client


def get_credentials(request: Request) -> Mapping[str, Mapping[str, str]]:
    """Conjuntos de credenciais montados a partir do ambiente."""

    return request.app.state.credentials
