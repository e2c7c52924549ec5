"""
Article routes (Controllers) - Layered Architecture.

This module handles HTTP requests/responses for article endpoints.
All business logic is delegated to the ArticleService layer.
"""

from fastapi import APIRouter, Depends, Query, status
from typing import Optional
import logging

from models.articles import Article, ArticleCreate, ArticleUpdate
from models.common import create_delete_response
from core.pagination import create_paginated_response
from core.query import SortDirection
from core.exceptions import AppException
from services.article_service import ArticleService
from dependencies import get_article_service
from routes.errors import handle_service_exception
from config import settings

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/articles", tags=["articles"])


@router.get("/")
async def listar_articulos(
    page: int = Query(1, ge=1, description="Página (1-indexed)"),
    page_size: int = Query(settings.default_page_size, ge=1, le=settings.max_page_size),
    order: SortDirection = Query(SortDirection.DESC, description="Orden por ID"),
    category_id: Optional[int] = Query(None, ge=1),
    q: Optional[str] = Query(None, max_length=100, description="Texto en título o resumen"),
    service: ArticleService = Depends(get_article_service),
):
    """
    List articles with pagination.

    Returns:
        Paginated response with the articles of the page and the total count
    """
    try:
        result = await service.list_articles(page, page_size, category_id, q, order)
        items = [Article.model_validate(a).model_dump(mode="json") for a in result.items]
        return create_paginated_response(items, page, page_size, result.total_count)
    except AppException as e:
        raise handle_service_exception(e)


@router.get("/{article_id}", response_model=Article)
async def obtener_articulo(
    article_id: int,
    service: ArticleService = Depends(get_article_service),
):
    """Get an article by ID."""
    try:
        return await service.get_by_id_or_fail(article_id)
    except AppException as e:
        raise handle_service_exception(e)


@router.post("/", response_model=Article, status_code=status.HTTP_201_CREATED)
async def crear_articulo(
    article: ArticleCreate,
    service: ArticleService = Depends(get_article_service),
):
    """
    Create a new article.

    Args:
        article: Article data
        service: Injected ArticleService

    Returns:
        Created article with its store-assigned ID
    """
    try:
        return await service.create_article(article)
    except AppException as e:
        raise handle_service_exception(e)


@router.put("/{article_id}", response_model=Article)
async def actualizar_articulo(
    article_id: int,
    changes: ArticleUpdate,
    service: ArticleService = Depends(get_article_service),
):
    """Update the fields sent for an article."""
    try:
        return await service.update_article(article_id, changes)
    except AppException as e:
        raise handle_service_exception(e)


@router.delete("/{article_id}")
async def eliminar_articulo(
    article_id: int,
    service: ArticleService = Depends(get_article_service),
):
    """Delete an article."""
    try:
        await service.delete(article_id)
        return create_delete_response("Artículo eliminado", article_id)
    except AppException as e:
        raise handle_service_exception(e)
