"""
Capa de servicio para la lógica de negocio.
Este paquete contiene clases de servicio que implementan la lógica de negocio
y orquestan las operaciones entre repositorios.
"""

from .base_service import BaseService
from .article_service import ArticleService
from .category_service import CategoryService

__all__ = [
    "BaseService",
    "ArticleService",
    "CategoryService",
]
