from .articles import Article, ArticleCreate, ArticleUpdate
from .categories import Category, CategoryCreate
from .common import (
    DeleteResponse,
    HealthCheckResponse,
    create_delete_response,
)

__all__ = [
    # Artículos
    "Article", "ArticleCreate", "ArticleUpdate",
    # Categorías
    "Category", "CategoryCreate",
    # Comunes
    "DeleteResponse",
    "HealthCheckResponse",
    "create_delete_response",
]
