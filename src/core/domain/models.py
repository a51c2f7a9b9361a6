"""Modelos del dominio (Pydantic v2).

Nota:
- El envelope de la API se devuelve tal cual (un `dict`); no se valida ni se
  reescribe. Los modelos de aquí solo leen la metadata de paginación.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field
from pydantic.config import ConfigDict

Envelope = dict[str, Any]


class PageLinks(BaseModel):
    model_config = ConfigDict(extra="ignore")

    previous: str | None = Field(
        default=None,
        description="URL absoluta de la página anterior (si existe).",
    )
    current: str | None = Field(
        default=None,
        description="URL absoluta de la página actual.",
    )
    next: str | None = Field(
        default=None,
        description="URL absoluta de la página siguiente; se pide tal cual.",
    )


class EnvelopeMeta(BaseModel):
    """Bloque `meta` de un envelope de listado."""

    model_config = ConfigDict(extra="ignore")

    links: PageLinks | None = Field(
        default=None,
        description="Enlaces de paginación.",
    )

    @classmethod
    def from_envelope(cls, envelope: Envelope) -> EnvelopeMeta | None:
        """Extrae `meta` del envelope o `None` si no viene."""

        raw = envelope.get("meta")
        if not isinstance(raw, dict):
            return None
        return cls.model_validate(raw)

    @property
    def next_url(self) -> str | None:
        if self.links is None:
            return None
        return self.links.next or None
