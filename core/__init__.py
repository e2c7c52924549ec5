""" Utilidades principales y componentes compartidos para la aplicación.

Este paquete contiene:

- Excepciones personalizadas
- Descriptores de consulta (orden)
- Funciones auxiliares de paginación
"""

from .exceptions import (
    AppException,
    NotFoundException,
    ValidationException,
    DuplicateException,
    MultipleResultsException,
    ConcurrencyException,
    DatabaseException,
)
from .query import SortDirection, apply_order
from .pagination import (
    Page,
    PaginationParams,
    PaginationMeta,
    calculate_pagination_meta,
    calculate_total_pages,
    create_paginated_response,
    calculate_skip,
)

__all__ = [
    # Excepciones
    "AppException",
    "NotFoundException",
    "ValidationException",
    "DuplicateException",
    "MultipleResultsException",
    "ConcurrencyException",
    "DatabaseException",
    # consultas
    "SortDirection",
    "apply_order",
    # paginacion
    "Page",
    "PaginationParams",
    "PaginationMeta",
    "calculate_pagination_meta",
    "calculate_total_pages",
    "create_paginated_response",
    "calculate_skip",
]
