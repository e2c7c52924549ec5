"""
Service for Article business logic.

Handles the business operations related to articles: slug uniqueness,
category checks, partial updates and view counting.
"""

from typing import List, Optional
import logging

from services.base_service import BaseService
from repositories.article_repository import ArticleRepository
from repositories.category_repository import CategoryRepository
from database.models import ArticleORM
from models.articles import ArticleCreate, ArticleUpdate
from core.exceptions import DuplicateException, NotFoundException
from core.pagination import Page
from core.query import SortDirection

logger = logging.getLogger(__name__)


class ArticleService(BaseService[ArticleORM, ArticleRepository]):
    """Service for managing article business logic."""

    def __init__(self, repository: ArticleRepository, category_repository: CategoryRepository):
        """
        Initialize article service.

        Args:
            repository: ArticleRepository instance
            category_repository: CategoryRepository instance
        """
        super().__init__(repository)
        self.category_repo = category_repository

    async def _ensure_category(self, category_id: Optional[int]) -> None:
        if category_id is not None and await self.category_repo.find_by_id(category_id) is None:
            raise NotFoundException(resource="Categoría", identifier=str(category_id))

    async def create_article(self, data: ArticleCreate) -> ArticleORM:
        """
        Create a new article.

        Raises:
            DuplicateException: If the slug is already in use
            NotFoundException: If the category does not exist
        """
        if await self.repository.slug_exists(data.slug):
            raise DuplicateException(resource="Artículo", field="slug", value=data.slug)
        await self._ensure_category(data.category_id)

        article = await self.repository.add(ArticleORM(**data.model_dump()))
        logger.info(f"Artículo creado: {article.id} ({article.slug})")
        return article

    async def update_article(self, article_id: int, data: ArticleUpdate) -> ArticleORM:
        """
        Apply a partial update to an article.

        Only the fields sent by the client are modified.
        """
        article = await self.get_by_id_or_fail(article_id)
        changes = data.model_dump(exclude_unset=True)

        if "slug" in changes and changes["slug"] != article.slug:
            if await self.repository.slug_exists(changes["slug"], exclude_id=article_id):
                raise DuplicateException(resource="Artículo", field="slug", value=changes["slug"])
        if "category_id" in changes:
            await self._ensure_category(changes["category_id"])

        for field, value in changes.items():
            setattr(article, field, value)

        if not await self.repository.update(article):
            return await self._stored(article_id)
        return article

    async def list_articles(
        self,
        page: int = 1,
        page_size: int = 10,
        category_id: Optional[int] = None,
        text: Optional[str] = None,
        sort: SortDirection = SortDirection.DESC,
    ) -> Page[ArticleORM]:
        return await self.repository.search(page, page_size, category_id, text, sort)

    async def latest(self, limit: int = 5) -> List[ArticleORM]:
        return await self.repository.find_latest(limit)

    async def view_article(self, article_id: int) -> ArticleORM:
        """Return an article for display and count the visit."""
        article = await self.get_by_id_or_fail(article_id)
        article.views = (article.views or 0) + 1
        if not await self.repository.save():
            return await self._stored(article_id)
        return article

    async def _stored(self, article_id: int) -> ArticleORM:
        """
        Vuelve a leer el artículo tras un conflicto de concurrencia ignorado.

        El rollback expira las instancias de la sesión; se devuelve el estado
        guardado por el otro escritor.
        """
        logger.info(f"Artículo {article_id}: cambio descartado por conflicto de concurrencia")
        return await self.get_by_id_or_fail(article_id)
