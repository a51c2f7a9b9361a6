"""Errores tipados del cliente.

Permiten a quien llama distinguir el tipo de fallo con `except` sin parsear
mensajes. Los JSON inválidos no tienen clase propia: `json.JSONDecodeError`
se propaga tal cual desde `httpx.Response.json()`.
"""

from __future__ import annotations

_RETRYABLE_STATUS = frozenset({408, 429})


class AotClientError(Exception):
    """Base de todos los errores propios del cliente."""


class FilterTypeError(AotClientError, TypeError):
    """Se intentó combinar un `FilterSet` con algo que no lo es."""

    def __init__(self, operation: str, other: object) -> None:
        self.operation = operation
        self.other_type = type(other).__name__
        super().__init__(f"Cannot .{operation} non-FilterSet type {self.other_type!r}")


class AotHttpError(AotClientError):
    """La API respondió con un status no exitoso (el body no se decodifica)."""

    def __init__(self, status_code: int, url: str) -> None:
        self.status_code = status_code
        self.url = url
        super().__init__(f"HTTP {status_code} for {url}")

    @property
    def is_retryable(self) -> bool:
        return self.status_code in _RETRYABLE_STATUS or self.status_code >= 500
