"""
Dependency injection for services and repositories.

This module provides FastAPI dependencies for injecting services
and repositories into route handlers. Every dependency shares the
request's AsyncSession.
"""

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from database.db import get_db
from repositories.article_repository import ArticleRepository
from repositories.category_repository import CategoryRepository
from services.article_service import ArticleService
from services.category_service import CategoryService


# ==================== Repository Dependencies ====================

def get_article_repository(db: AsyncSession = Depends(get_db)) -> ArticleRepository:
    """
    Get ArticleRepository instance.

    Args:
        db: Database session (injected by FastAPI)

    Returns:
        ArticleRepository instance
    """
    return ArticleRepository(db)


def get_category_repository(db: AsyncSession = Depends(get_db)) -> CategoryRepository:
    """
    Get CategoryRepository instance.

    Args:
        db: Database session (injected by FastAPI)

    Returns:
        CategoryRepository instance
    """
    return CategoryRepository(db)


# ==================== Service Dependencies ====================

def get_article_service(
    repository: ArticleRepository = Depends(get_article_repository),
    category_repository: CategoryRepository = Depends(get_category_repository),
) -> ArticleService:
    """
    Get ArticleService instance.

    This is the main dependency to use in route handlers for article operations.
    """
    return ArticleService(repository, category_repository)


def get_category_service(
    repository: CategoryRepository = Depends(get_category_repository),
) -> CategoryService:
    """Get CategoryService instance."""
    return CategoryService(repository)
