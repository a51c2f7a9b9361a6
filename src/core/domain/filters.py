"""Álgebra de filtros para los query params de la API.

Un `FilterSet` es un multimapa ordenado `clave -> [grupo, grupo, ...]`, donde
cada grupo es una secuencia de tokens que viaja como un único parámetro
(`"lt:42"`). Dos formas de combinar:

- AND (`and_`, `&`): acumula. Dos cotas sobre el mismo campo terminan como dos
  grupos bajo la misma clave y se emiten como `clave[]` repetido.
- OR (`or_`, `|`): la última escritura gana. El grupo entero de la clave se
  reemplaza por el del otro filtro.

Uso::

    from core.domain.filters import F

    f = F("timestamp", "ge", "2018-04-21T15:00:00").and_(
        F("timestamp", "lt", "2018-04-22T02:00:00")
    )
    f.to_query_params()
    # [("timestamp[]", "ge:2018-04-21T15:00:00"),
    #  ("timestamp[]", "lt:2018-04-22T02:00:00")]
"""

from __future__ import annotations

from typing import Iterator, Union

from core.domain.errors import FilterTypeError

FilterValue = Union[str, int, float]
ValueGroup = list[FilterValue]


def _copy_groups(groups: list[ValueGroup]) -> list[ValueGroup]:
    return [list(group) for group in groups]


class FilterSet:
    """Multimapa ordenado de filtros con composición AND/OR.

    `and_`/`or_` mutan el receptor y lo devuelven (encadenables); los operadores
    `&`/`|` devuelven un `FilterSet` nuevo y `&=`/`|=` mutan in-place.
    """

    __slots__ = ("_filters",)

    def __init__(self, *args: FilterValue) -> None:
        self._filters: dict[str, list[ValueGroup]] = {}
        if args:
            key, *values = args
            self._filters[str(key)] = [list(values)]

    @property
    def filters(self) -> dict[str, list[ValueGroup]]:
        """Copia del mapeo interno (modificarla no afecta al filtro)."""

        return {key: _copy_groups(groups) for key, groups in self._filters.items()}

    def keys(self) -> list[str]:
        return list(self._filters)

    def copy(self) -> FilterSet:
        clone = FilterSet()
        clone._filters = self.filters
        return clone

    def and_(self, other: FilterSet) -> FilterSet:
        """Añade los grupos de `other` detrás de los propios, clave a clave."""

        if not isinstance(other, FilterSet):
            raise FilterTypeError("and", other)

        for key, groups in other._filters.items():
            self._filters.setdefault(key, []).extend(_copy_groups(groups))
        return self

    def or_(self, other: FilterSet) -> FilterSet:
        """Reemplaza, para cada clave de `other`, todos los grupos propios."""

        if not isinstance(other, FilterSet):
            raise FilterTypeError("or", other)

        for key, groups in other._filters.items():
            self._filters[key] = _copy_groups(groups)
        return self

    def to_query_params(self) -> list[tuple[str, str]]:
        """Serializa a pares `(clave, valor)` en orden de inserción.

        El sufijo `[]` depende del número final de grupos de la clave, no de
        cómo se llegó a él.
        """

        params: list[tuple[str, str]] = []
        for key, groups in self._filters.items():
            param_key = f"{key}[]" if len(groups) > 1 else key
            for group in groups:
                params.append((param_key, ":".join(str(value) for value in group)))
        return params

    def __and__(self, other: object) -> FilterSet:
        if not isinstance(other, FilterSet):
            return NotImplemented
        return self.copy().and_(other)

    def __or__(self, other: object) -> FilterSet:
        if not isinstance(other, FilterSet):
            return NotImplemented
        return self.copy().or_(other)

    def __iand__(self, other: object) -> FilterSet:
        if not isinstance(other, FilterSet):
            return NotImplemented
        return self.and_(other)

    def __ior__(self, other: object) -> FilterSet:
        if not isinstance(other, FilterSet):
            return NotImplemented
        return self.or_(other)

    def __contains__(self, key: object) -> bool:
        return key in self._filters

    def __iter__(self) -> Iterator[str]:
        return iter(self._filters)

    def __len__(self) -> int:
        return len(self._filters)

    def __bool__(self) -> bool:
        return bool(self._filters)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, FilterSet):
            return NotImplemented
        return list(self._filters.items()) == list(other._filters.items())

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return f"FilterSet({self._filters!r})"


F = FilterSet
