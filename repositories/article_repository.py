"""
Repositorio para la entidad Article.
Agrega al repositorio genérico las búsquedas propias de los artículos.
"""

from typing import List, Optional
from sqlalchemy import or_
from sqlalchemy.ext.asyncio import AsyncSession

from repositories.base_repository import AsyncRepository
from database.models import ArticleORM
from core.pagination import Page
from core.query import SortDirection
import logging

logger = logging.getLogger(__name__)


class ArticleRepository(AsyncRepository[ArticleORM]):
    """Repositorio para la entidad Article."""

    def __init__(self, db: AsyncSession, conflict_policy: Optional[str] = None):
        """
        Inicializa el repositorio de artículos.

        Args:
            db: SQLAlchemy async session
        """
        super().__init__(db, ArticleORM, conflict_policy=conflict_policy)

    async def find_by_slug(self, slug: str) -> Optional[ArticleORM]:
        """Busca un artículo por su slug (único)."""
        return await self.find_one(ArticleORM.slug == slug)

    async def slug_exists(self, slug: str, exclude_id: Optional[int] = None) -> bool:
        """Indica si el slug ya está en uso, opcionalmente ignorando un artículo."""
        predicate = ArticleORM.slug == slug
        if exclude_id is not None:
            predicate = predicate & (ArticleORM.id != exclude_id)
        return await self.exists(predicate)

    async def find_latest(self, limit: int = 5) -> List[ArticleORM]:
        """Últimos artículos publicados, más recientes primero."""
        return await self.find_list(limit, None, SortDirection.DESC, ArticleORM.id)

    async def search(
        self,
        page_index: int,
        page_size: int,
        category_id: Optional[int] = None,
        text: Optional[str] = None,
        sort: SortDirection = SortDirection.DESC,
    ) -> Page[ArticleORM]:
        """
        Página de artículos filtrada por categoría y/o texto en título o resumen.

        Args:
            page_index: Número de página (1-indexed)
            page_size: Items por página
            category_id: Filtra por categoría
            text: Texto a buscar (contiene, sin distinguir mayúsculas)
            sort: Orden por fecha de creación

        Returns:
            Page de artículos
        """
        conditions = []
        if category_id is not None:
            conditions.append(ArticleORM.category_id == category_id)
        if text:
            pattern = f"%{text}%"
            conditions.append(or_(ArticleORM.title.ilike(pattern), ArticleORM.summary.ilike(pattern)))

        predicate = None
        for condition in conditions:
            predicate = condition if predicate is None else predicate & condition

        sort_key = ArticleORM.id if sort != SortDirection.NONE else None
        return await self.find_page(page_index, page_size, predicate, sort, sort_key)
