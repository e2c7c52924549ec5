"""
Repositorio para la entidad Category.
"""

from typing import List, Optional
from sqlalchemy import func
from sqlalchemy.ext.asyncio import AsyncSession

from repositories.base_repository import AsyncRepository
from database.models import CategoryORM
from core.query import SortDirection


class CategoryRepository(AsyncRepository[CategoryORM]):
    """Repositorio para la entidad Category."""

    def __init__(self, db: AsyncSession, conflict_policy: Optional[str] = None):
        super().__init__(db, CategoryORM, conflict_policy=conflict_policy)

    async def find_by_name(self, name: str) -> Optional[CategoryORM]:
        """Busca una categoría por nombre, sin distinguir mayúsculas."""
        return await self.find_one(func.lower(CategoryORM.name) == name.lower())

    async def find_all_sorted(self) -> List[CategoryORM]:
        """Todas las categorías ordenadas alfabéticamente."""
        return await self.find_list(0, None, SortDirection.ASC, CategoryORM.name)
