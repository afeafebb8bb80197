from __future__ import annotations

import json
from collections.abc import Callable, Iterator, Mapping
from typing import Any

import httpx
import pytest

from touchbase_pro.config.settings import get_settings
from touchbase_pro.infra.http import HttpClient, HttpClientConfig
from touchbase_pro.node.context import StaticExecutionContext

CREDENTIALS: dict[str, dict[str, str]] = {
    "touchBaseProApi": {
        "emailApiKey": "email-key",
        "whatsappApiKey": "wa-key",
        "smsUsername": "sms-user",
        "smsPassword": "sms-pass",
    },
    "touchBaseProWhatsAppApi": {"apiKey": "native-key"},
}


class RecordingTransport:
    """Transporte httpx em memória que grava as requisições recebidas."""

    def __init__(self) -> None:
        self.requests: list[httpx.Request] = []
        self._responses: list[httpx.Response] = []

    def respond(self, status_code: int = 200, json_body: Any = None, text: str | None = None) -> None:
        """Enfileira uma resposta (a última se repete quando a fila acaba)."""
        if text is not None:
            self._responses.append(httpx.Response(status_code, text=text))
        elif json_body is None:
            self._responses.append(httpx.Response(status_code))
        else:
            self._responses.append(httpx.Response(status_code, json=json_body))

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if not self._responses:
            return httpx.Response(200, json={"result": True})
        if len(self._responses) == 1:
            return self._responses[0]
        return self._responses.pop(0)

    def client(self) -> HttpClient:
        return HttpClient(HttpClientConfig(), transport=httpx.MockTransport(self.handler))

    @property
    def last(self) -> httpx.Request:
        return self.requests[-1]

    def last_json(self) -> Any:
        return json.loads(self.last.content)


@pytest.fixture(autouse=True)
def _fresh_settings(monkeypatch: pytest.MonkeyPatch) -> Iterator[None]:
    for name in (
        "TOUCHBASE_EMAIL_BASE_URL",
        "TOUCHBASE_WHATSAPP_BASE_URL",
        "TOUCHBASE_INTERAKT_BASE_URL",
        "TOUCHBASE_SMS_BASE_URL",
        "TOUCHBASE_EMAIL_BASIC_PASSWORD",
    ):
        monkeypatch.delenv(name, raising=False)
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture()
def recorder() -> RecordingTransport:
    return RecordingTransport()


@pytest.fixture()
def make_context(
    recorder: RecordingTransport,
) -> Callable[..., StaticExecutionContext]:
    def _make(
        items: list[Mapping[str, Any]] | None = None,
        continue_on_fail: bool = False,
        current: Mapping[str, Any] | None = None,
        credentials: Mapping[str, Mapping[str, str]] | None = None,
    ) -> StaticExecutionContext:
        return StaticExecutionContext(
            items=items if items is not None else [{}],
            credentials=CREDENTIALS if credentials is None else credentials,
            http=recorder.client(),
            continue_on_fail=continue_on_fail,
            current_parameters=current,
        )

    return _make
