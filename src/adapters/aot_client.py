"""Cliente de la API REST de Array of Things.

Cada operación es un GET sobre un endpoint fijo; si se pasa un `FilterSet`,
sus pares serializados pasan a ser el query string. El envelope JSON se
devuelve tal cual.

Uso::

    async with AotClient() as client:
        page = await client.list_observations(filters=F("value", "lt", 42))
        while page is not None:
            ...
            page = await client.get_next_page(page)
"""

from __future__ import annotations

import logging
from types import TracebackType

import httpx

from adapters.http_client import build_async_client
from core.config import AppSettings
from core.domain.errors import AotHttpError
from core.domain.filters import FilterSet
from core.domain.models import Envelope, EnvelopeMeta

logger = logging.getLogger(__name__)


class AotClient:
    """Cliente asíncrono de proyectos, nodos, sensores y observaciones.

    Sin `async with`, cada llamada abre y cierra su propio `httpx.AsyncClient`.
    Un `http_client` inyectado nunca se cierra desde aquí.
    """

    def __init__(
        self,
        hostname: str | None = None,
        *,
        settings: AppSettings | None = None,
        http_client: httpx.AsyncClient | None = None,
    ) -> None:
        self._settings = settings or AppSettings()
        self.hostname = (hostname or self._settings.hostname).rstrip("/")
        self._http_client = http_client
        self._owns_http_client = False

    async def __aenter__(self) -> AotClient:
        if self._http_client is None:
            self._http_client = build_async_client(self._settings)
            self._owns_http_client = True
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        if self._owns_http_client and self._http_client is not None:
            await self._http_client.aclose()
            self._http_client = None
            self._owns_http_client = False

    async def list_projects(self, *, filters: FilterSet | None = None) -> Envelope:
        return await self._send_request("/projects", filters)

    async def get_project_details(self, slug: str, *, filters: FilterSet | None = None) -> Envelope:
        return await self._send_request(f"/projects/{slug}", filters)

    async def list_nodes(self, *, filters: FilterSet | None = None) -> Envelope:
        return await self._send_request("/nodes", filters)

    async def get_node_details(self, vsn: str, *, filters: FilterSet | None = None) -> Envelope:
        return await self._send_request(f"/nodes/{vsn}", filters)

    async def list_sensors(self, *, filters: FilterSet | None = None) -> Envelope:
        return await self._send_request("/sensors", filters)

    async def get_sensor_details(self, path: str, *, filters: FilterSet | None = None) -> Envelope:
        return await self._send_request(f"/sensors/{path}", filters)

    async def list_observations(self, *, filters: FilterSet | None = None) -> Envelope:
        return await self._send_request("/observations", filters)

    async def list_raw_observations(self, *, filters: FilterSet | None = None) -> Envelope:
        return await self._send_request("/raw-observations", filters)

    async def get_next_page(self, envelope: Envelope) -> Envelope | None:
        """Pide la URL de `meta.links.next` tal cual, o devuelve `None`."""

        meta = EnvelopeMeta.from_envelope(envelope)
        if meta is None or meta.next_url is None:
            return None

        logger.debug("Following next page: %s", meta.next_url)
        return await self._get_json(httpx.URL(meta.next_url))

    async def _send_request(self, endpoint: str, filters: FilterSet | None) -> Envelope:
        url = httpx.URL(f"{self.hostname}{endpoint}")
        if filters is not None:
            url = url.copy_with(params=filters.to_query_params())
        return await self._get_json(url)

    async def _get_json(self, url: httpx.URL) -> Envelope:
        logger.debug("GET %s", url)
        if self._http_client is not None:
            response = await self._http_client.get(url)
        else:
            async with build_async_client(self._settings) as client:
                response = await client.get(url)

        logger.debug("HTTP %s for %s", response.status_code, url)
        if not response.is_success:
            raise AotHttpError(response.status_code, str(url))
        return response.json()
