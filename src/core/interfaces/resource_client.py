"""Contrato del cliente de recursos paginados.

Por qué Protocol:
- Los servicios del Core (p.ej. la paginación) dependen de este contrato y no
  de `httpx` ni de `AotClient`, así que pueden probarse con un stub.
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from core.domain.models import Envelope


@runtime_checkable
class PaginatedClient(Protocol):
    """Contrato mínimo para seguir la paginación de un listado.

    Reglas de diseño:
    - `get_next_page` es asíncrono porque hace I/O (HTTP).
    - Devuelve `None` cuando el envelope no trae página siguiente.
    """

    async def get_next_page(self, envelope: Envelope) -> Envelope | None:
        ...
