"""Recorrido de listados paginados.

El bucle es siempre el mismo: partir de la primera página y pedir la
siguiente mientras el envelope traiga `meta.links.next`. Vive en el Core para
que la CLI (u otro entry-point) no lo reimplemente.
"""

from __future__ import annotations

import logging
from typing import Any, AsyncIterator

from core.domain.models import Envelope
from core.interfaces.resource_client import PaginatedClient

logger = logging.getLogger(__name__)


async def iter_pages(
    client: PaginatedClient,
    first: Envelope,
    *,
    max_pages: int | None = None,
) -> AsyncIterator[Envelope]:
    """Itera `first` y las páginas siguientes hasta que no haya más.

    `max_pages` cuenta también la primera página.
    """

    if max_pages is not None and max_pages < 1:
        raise ValueError("max_pages must be >= 1")

    current: Envelope | None = first
    count = 0
    while current is not None:
        yield current
        count += 1
        if max_pages is not None and count >= max_pages:
            logger.debug("Stopping pagination after %d page(s)", count)
            return
        current = await client.get_next_page(current)

    logger.debug("Pagination exhausted after %d page(s)", count)


async def collect_data(
    client: PaginatedClient,
    first: Envelope,
    *,
    max_pages: int | None = None,
) -> list[Any]:
    """Concatena el `data` de todas las páginas, en orden."""

    items: list[Any] = []
    async for page in iter_pages(client, first, max_pages=max_pages):
        data = page.get("data")
        if isinstance(data, list):
            items.extend(data)
        elif data is not None:
            items.append(data)
    return items
