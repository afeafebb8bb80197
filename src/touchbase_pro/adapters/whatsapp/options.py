"""Resolvers de opções dinâmicas (dropdowns) para templates WhatsApp.

Rodam durante a renderização do formulário: qualquer erro upstream é logado
e degrada para lista vazia, nunca falha a UI.

A listagem de templates da Interakt já respondeu em envelopes diferentes
conforme a versão da API. Os envelopes conhecidos são tentados em ordem fixa:
`results.templates`, `data`, lista crua, `templates`.
"""

from __future__ import annotations

import logging
import re
from collections.abc import Callable
from typing import Any

from touchbase_pro.adapters.upstream import interakt_whatsapp_request
from touchbase_pro.domain.errors import NodeOperationError
from touchbase_pro.infra.http import HttpError
from touchbase_pro.node.context import LoadOptionsContext
from touchbase_pro.observability.logging import get_logger, log_degraded

logger: logging.Logger = get_logger(__name__)

Option = dict[str, str]

TEMPLATES_ENDPOINT = "/track/organization/templates"
TEMPLATE_LISTING_QUERY: dict[str, Any] = {
    "offset": 0,
    "autosubmitted_for": "all",
    "approval_status": "APPROVED",
    "language": "all",
}

_PLACEHOLDER_PATTERN = re.compile(r"\{\{(\d+)\}\}")

TEMPLATE_LANGUAGES: list[Option] = [
    {"name": "English", "value": "en"},
    {"name": "Spanish", "value": "es"},
    {"name": "French", "value": "fr"},
    {"name": "German", "value": "de"},
    {"name": "Italian", "value": "it"},
    {"name": "Portuguese", "value": "pt"},
    {"name": "Hindi", "value": "hi"},
    {"name": "Arabic", "value": "ar"},
    {"name": "Chinese (Simplified)", "value": "zh"},
    {"name": "Japanese", "value": "ja"},
    {"name": "Korean", "value": "ko"},
]


def _results_templates(response: Any) -> list[Any] | None:
    if isinstance(response, dict):
        results = response.get("results")
        if isinstance(results, dict) and isinstance(results.get("templates"), list):
            return results["templates"]
    return None


def _data(response: Any) -> list[Any] | None:
    if isinstance(response, dict) and isinstance(response.get("data"), list):
        return response["data"]
    return None


def _bare_list(response: Any) -> list[Any] | None:
    return response if isinstance(response, list) else None


def _templates(response: Any) -> list[Any] | None:
    if isinstance(response, dict) and isinstance(response.get("templates"), list):
        return response["templates"]
    return None


# Envelopes conhecidos, em ordem de prioridade
TEMPLATE_ENVELOPES: tuple[tuple[str, Callable[[Any], list[Any] | None]], ...] = (
    ("results.templates", _results_templates),
    ("data", _data),
    ("list", _bare_list),
    ("templates", _templates),
)


def unwrap_template_listing(response: Any) -> tuple[str, list[Any]] | None:
    """Retorna (envelope, templates) do primeiro envelope reconhecido."""
    for envelope, extract in TEMPLATE_ENVELOPES:
        templates = extract(response)
        if templates is not None:
            return envelope, templates
    return None


def _template_option(template: dict[str, Any]) -> Option:
    return {
        "name": template.get("display_name") or template.get("name") or "Unnamed Template",
        "value": template.get("name") or template.get("id") or "unknown",
    }


def _matches(template: Any, template_name: str) -> bool:
    return isinstance(template, dict) and (
        template.get("name") == template_name or template.get("id") == template_name
    )


def extract_placeholder_options(body_text: str) -> list[Option]:
    """Uma opção por placeholder `{{n}}` distinto, na ordem em que aparece."""
    numbers = dict.fromkeys(_PLACEHOLDER_PATTERN.findall(body_text or ""))
    return [{"name": f"Variable {number}", "value": number} for number in numbers]


async def _fetch_templates(ctx: LoadOptionsContext) -> Any:
    return await interakt_whatsapp_request(
        ctx,
        "GET",
        TEMPLATES_ENDPOINT,
        query=dict(TEMPLATE_LISTING_QUERY),
    )


async def get_whatsapp_template_options(ctx: LoadOptionsContext) -> list[Option]:
    """Templates aprovados da Interakt como opções de dropdown."""
    try:
        response = await _fetch_templates(ctx)
    except (HttpError, NodeOperationError) as exc:
        log_degraded(logger, "whatsapp_template_options", reason=type(exc).__name__)
        return []

    listing = unwrap_template_listing(response)
    if listing is None:
        logger.warning("Envelope de templates não reconhecido")
        return []

    _, templates = listing
    return [_template_option(t) for t in templates if isinstance(t, dict)]


async def get_template_variable_options(ctx: LoadOptionsContext) -> list[Option]:
    """Variáveis do template escolhido em `templateName`.

    Só placeholders numerados `{{n}}` no campo `body` são reconhecidos;
    qualquer outro formato resulta em lista vazia.
    """
    template_name = ctx.get_current_node_parameter("templateName")
    if not template_name:
        return []

    try:
        response = await _fetch_templates(ctx)
    except (HttpError, NodeOperationError) as exc:
        log_degraded(logger, "template_variable_options", reason=type(exc).__name__)
        return []

    listing = unwrap_template_listing(response)
    if listing is None:
        return []

    envelope, templates = listing
    selected = next((t for t in templates if _matches(t, template_name)), None)
    if selected is None:
        return []

    if envelope == "results.templates":
        if selected.get("variable_present") != "Yes":
            return []
        return extract_placeholder_options(selected.get("body") or "")

    if envelope == "data" and selected.get("variables"):
        return [
            {
                "name": variable.get("name") or variable.get("key") or "Unknown Variable",
                "value": variable.get("name") or variable.get("key") or "unknown",
            }
            for variable in selected["variables"]
        ]

    return []


async def get_template_language_options(ctx: LoadOptionsContext) -> list[Option]:
    """Idiomas de template suportados (lista fixa)."""
    return [dict(option) for option in TEMPLATE_LANGUAGES]
