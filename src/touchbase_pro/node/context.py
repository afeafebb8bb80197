"""Contexto de execução fornecido pelo host aos nodes.

O host entrega, por invocação, um acessor de parâmetros por item, um acessor
de credenciais e o transporte HTTP. As operações só conhecem este contrato.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from typing import Any, Protocol

from touchbase_pro.domain.errors import CredentialsError, ValidationError
from touchbase_pro.infra.http import HttpClient

_MISSING: Any = object()


class LoadOptionsContext(Protocol):
    """Contrato mínimo para resolvers de opções (renderização do formulário)."""

    http: HttpClient

    def get_current_node_parameter(self, name: str) -> Any:
        """Valor atual de um parâmetro no formulário (None se ausente)."""
        ...

    def get_credentials(self, name: str) -> Mapping[str, str]:
        """Conjunto de credenciais pelo nome."""
        ...


class ExecutionContext(LoadOptionsContext, Protocol):
    """Contrato de execução por item."""

    @property
    def item_count(self) -> int:
        """Quantidade de itens de entrada."""
        ...

    @property
    def continue_on_fail(self) -> bool:
        """Se True, erro em um item vira saída de erro e a execução segue."""
        ...

    def get_node_parameter(self, name: str, index: int, default: Any = _MISSING) -> Any:
        """Valor do parâmetro para o item `index`."""
        ...


class StaticExecutionContext:
    """ExecutionContext em memória: parâmetros por item + credenciais fixas."""

    def __init__(
        self,
        items: Sequence[Mapping[str, Any]],
        credentials: Mapping[str, Mapping[str, str]],
        http: HttpClient,
        continue_on_fail: bool = False,
        current_parameters: Mapping[str, Any] | None = None,
    ) -> None:
        self._items = list(items)
        self._credentials = credentials
        self._current = current_parameters or (self._items[0] if self._items else {})
        self._continue_on_fail = continue_on_fail
        self.http = http

    @property
    def item_count(self) -> int:
        return len(self._items)

    @property
    def continue_on_fail(self) -> bool:
        return self._continue_on_fail

    def get_node_parameter(self, name: str, index: int, default: Any = _MISSING) -> Any:
        params = self._items[index]
        if name in params and params[name] is not None:
            return params[name]
        if default is _MISSING:
            raise ValidationError(f'Could not get parameter "{name}"', item_index=index)
        return default

    def get_current_node_parameter(self, name: str) -> Any:
        return self._current.get(name)

    def get_credentials(self, name: str) -> Mapping[str, str]:
        credentials = self._credentials.get(name)
        if credentials is None:
            raise CredentialsError(f'Node does not have any credentials set for "{name}"')
        return credentials
