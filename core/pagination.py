"""
Utilidades de paginación para una paginación consistente en toda la aplicación.

Las páginas son 1-indexed: la primera página es la 1.
"""

from typing import TypeVar, Generic, List, Any
from pydantic import BaseModel, ConfigDict, Field
from datetime import datetime, timezone

T = TypeVar('T')


class PaginationParams(BaseModel):
    """Parametros para la paginacion."""
    page: int = Field(1, ge=1, description="Page number (1-indexed)")
    page_size: int = Field(10, ge=1, le=100, description="Items per page")


class PaginationMeta(BaseModel):
    """Metadata para la paginacion."""
    page: int = Field(..., ge=1, description="Current page number (1-indexed)")
    page_size: int = Field(..., ge=1, description="Page size")
    total_items: int = Field(..., ge=0, description="Total items available")
    total_pages: int = Field(..., ge=0, description="Total pages")
    has_next: bool = Field(..., description="Has next page")
    has_previous: bool = Field(..., description="Has previous page")


class Page(BaseModel, Generic[T]):
    """
    Resultado de una consulta paginada: los items de la página y el total de coincidencias.

    Se devuelve como un único valor para que el total no dependa de estado
    compartido en el repositorio.
    """
    model_config = ConfigDict(arbitrary_types_allowed=True)

    items: List[T] = Field(default_factory=list, description="Items de la página actual")
    total_count: int = Field(..., ge=0, description="Total de registros que cumplen el filtro")
    page_index: int = Field(..., ge=1, description="Página solicitada (1-indexed)")
    page_size: int = Field(..., ge=1, description="Tamaño de página solicitado")

    @property
    def total_pages(self) -> int:
        return calculate_total_pages(self.total_count, self.page_size)

    def __len__(self) -> int:
        return len(self.items)


def calculate_total_pages(total_items: int, page_size: int) -> int:
    """Número de páginas necesarias para total_items (0 si no hay items)."""
    return (total_items + page_size - 1) // page_size if page_size > 0 else 0


def calculate_pagination_meta(
    page: int,
    page_size: int,
    total_items: int
) -> PaginationMeta:
    """
    Calcula la metadata de la paginación.

    Args:
        page: Número de página actual (1-indexed)
        page_size: Items por página
        total_items: Total number of items

    Returns:
        paginationmeta objeto con valores calculados
    """
    total_pages = calculate_total_pages(total_items, page_size)

    return PaginationMeta(
        page=page,
        page_size=page_size,
        total_items=total_items,
        total_pages=total_pages,
        has_next=page < total_pages,
        has_previous=page > 1
    )


def create_paginated_response(
    items: List[Any],
    page: int,
    page_size: int,
    total_items: int
) -> dict:
    """
    Crea un diccionario de respuesta paginado.
    Argumentos:
    items: Lista de elementos de la página actual
    page: Número de página actual (indexado desde 1)
    page_size: Número de elementos por página
    total_items: Número total de elementos
    Devuelve:
    Diccionario con la respuesta paginada
    """
    pagination_meta = calculate_pagination_meta(page, page_size, total_items)

    return {
        "success": True,
        "data": items,
        "pagination": pagination_meta.model_dump(),
        "timestamp": datetime.now(timezone.utc)
    }


def calculate_skip(page: int, page_size: int) -> int:
    """
    Calcula el valor de skip/offset para las consultas de la base de datos.

    Args:
        page: Número de página actual (indexado desde 1)
        page_size: Número de elementos por página

    Returns:
        Número de elementos a saltar
    """
    return (page - 1) * page_size
