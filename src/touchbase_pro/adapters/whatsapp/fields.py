"""Helpers puros sobre os parâmetros do formulário do host."""

from __future__ import annotations

import re
from collections.abc import Mapping
from typing import Any

_COUNTRY_CODE_NOISE = re.compile(r"[^\d+]")
_NON_DIGITS = re.compile(r"\D")


def unwrap(container: Any, field_key: str) -> list[Any]:
    """Normaliza um grupo de campos repetíveis em lista ordenada.

    O host entrega o grupo ausente, como registro único ou como lista:
    - container/campo ausente → []
    - lista → a própria lista (ordem preservada)
    - mapping → [mapping]
    - qualquer outra forma → []
    """
    if not isinstance(container, Mapping):
        return []
    value = container.get(field_key)
    if isinstance(value, list):
        return value
    if isinstance(value, Mapping):
        return [value]
    return []


def normalize_phone(country_code: str, local_number: str) -> str:
    """Combina código do país e número local em um identificador só de dígitos.

    Sem validação de tamanho: a API upstream é a fonte da verdade.
    """
    clean_code = _COUNTRY_CODE_NOISE.sub("", country_code or "")
    clean_number = _NON_DIGITS.sub("", local_number or "")
    return clean_code.removeprefix("+") + clean_number


def values_of(records: list[Any], key: str = "value") -> list[Any]:
    """Extrai `key` de cada registro, na ordem."""
    return [record.get(key) if isinstance(record, Mapping) else None for record in records]
