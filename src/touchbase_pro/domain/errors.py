"""Erros de execução de operações do node."""

from __future__ import annotations

from typing import Any


class NodeOperationError(Exception):
    """Erro fatal para um item, com o índice do item quando conhecido."""

    def __init__(self, message: str, item_index: int | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.item_index = item_index

    def __str__(self) -> str:
        if self.item_index is None:
            return self.message
        return f"{self.message} [item {self.item_index}]"


class ValidationError(NodeOperationError):
    """Parâmetro obrigatório ausente ou subtipo/categoria desconhecido.

    Sempre levantado antes de qualquer chamada de rede.
    """


class OperationNotImplementedError(NodeOperationError):
    """Par (resource, operation) sem função registrada."""


class CredentialsError(NodeOperationError):
    """Conjunto de credenciais ausente ou incompleto."""


class NodeApiError(NodeOperationError):
    """Falha de chamada upstream anotada com o item que a originou.

    Preserva status HTTP e body da resposta para exibição no host.
    """

    def __init__(
        self,
        message: str,
        item_index: int | None = None,
        status_code: int | None = None,
        body: Any = None,
    ) -> None:
        super().__init__(message, item_index=item_index)
        self.status_code = status_code
        self.body = body
