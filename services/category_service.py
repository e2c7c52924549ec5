"""
Service for Category business logic.
"""

from typing import List
import logging

from services.base_service import BaseService
from repositories.category_repository import CategoryRepository
from database.models import CategoryORM
from models.categories import CategoryCreate
from core.exceptions import DuplicateException

logger = logging.getLogger(__name__)


class CategoryService(BaseService[CategoryORM, CategoryRepository]):
    """Service for managing categories."""

    async def create_category(self, data: CategoryCreate) -> CategoryORM:
        """
        Create a category with a unique (case-insensitive) name.

        Raises:
            DuplicateException: If the name is already in use
        """
        if await self.repository.find_by_name(data.name) is not None:
            raise DuplicateException(resource="Categoría", field="name", value=data.name)
        category = await self.repository.add(CategoryORM(**data.model_dump()))
        logger.info(f"Categoría creada: {category.id} ({category.name})")
        return category

    async def list_categories(self) -> List[CategoryORM]:
        return await self.repository.find_all_sorted()
