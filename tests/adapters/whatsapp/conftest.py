"""Fixtures para testes do adapter WhatsApp."""

from __future__ import annotations

from collections.abc import Callable
from typing import Any

import pytest

from touchbase_pro.adapters.whatsapp.models import MessageRequest


@pytest.fixture()
def simple_request() -> Callable[..., MessageRequest]:
    """Factory de MessageRequest simples para +91 9876543210."""

    def _make(subtype: str, **fields: Any) -> MessageRequest:
        return MessageRequest(
            country_code="+91",
            phone_number="9876543210",
            category="simple",
            subtype=subtype,
            **fields,
        )

    return _make


@pytest.fixture()
def template_request() -> Callable[..., MessageRequest]:
    """Factory de MessageRequest de template (`hello_world` por padrão)."""

    def _make(subtype: str | None, **fields: Any) -> MessageRequest:
        fields.setdefault("template_name", "hello_world")
        return MessageRequest(
            country_code="+91",
            phone_number="9876543210",
            category="template",
            subtype=subtype,
            **fields,
        )

    return _make


@pytest.fixture()
def send_params() -> Callable[..., dict[str, Any]]:
    """Parâmetros de item para `sendWhatsAppMessage` no node TouchBasePro."""

    def _make(**overrides: Any) -> dict[str, Any]:
        params: dict[str, Any] = {
            "resource": "whatsapp",
            "operation": "sendWhatsAppMessage",
            "countryCode": "+91",
            "phoneNumber": "9876543210",
            "messageCategory": "simple",
            "messageType": "text",
            "message": "Olá",
        }
        params.update(overrides)
        return params

    return _make
