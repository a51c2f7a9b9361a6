"""Modelos y entidades del dominio.

Por qué:
- Aquí viven el álgebra de filtros, los errores tipados y los modelos Pydantic.
- El dominio no conoce HTTP ni la CLI: solo conceptos del problema.
"""

from core.domain.errors import AotClientError, AotHttpError, FilterTypeError
from core.domain.filters import F, FilterSet, FilterValue
from core.domain.models import Envelope, EnvelopeMeta, PageLinks

__all__ = [
    "AotClientError",
    "AotHttpError",
    "Envelope",
    "EnvelopeMeta",
    "F",
    "FilterSet",
    "FilterTypeError",
    "FilterValue",
    "PageLinks",
]
