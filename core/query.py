"""
Descriptores de consulta compartidos por los repositorios: dirección de orden
y aplicación del orden sobre un SELECT.
"""

from enum import Enum
from typing import Any, Optional, Sequence

from sqlalchemy import Select, asc, desc

from core.exceptions import ValidationException


class SortDirection(str, Enum):
    """Dirección de ordenamiento de una consulta."""
    NONE = "none"
    ASC = "asc"
    DESC = "desc"


def apply_order(
    query: Select,
    direction: SortDirection,
    sort_key: Optional[Any],
    default_keys: Sequence[Any] = (),
) -> Select:
    """
    Aplica el orden solicitado a una consulta.

    Args:
        query: Consulta SELECT
        direction: Dirección de orden
        sort_key: Columna o expresión por la que ordenar
        default_keys: Columnas usadas cuando direction es NONE (vacío = sin orden)

    Returns:
        La consulta ordenada

    Raises:
        ValidationException: Si se pide un orden sin columna
    """
    direction = SortDirection(direction)
    if direction is SortDirection.NONE:
        if default_keys:
            return query.order_by(*default_keys)
        return query

    if sort_key is None:
        raise ValidationException(
            f"Se requiere una columna para ordenar en dirección '{direction.value}'",
            field="sort_key",
        )
    if direction is SortDirection.DESC:
        return query.order_by(desc(sort_key))
    return query.order_by(asc(sort_key))
