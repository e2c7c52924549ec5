"""
HTML pages rendered through the active theme.

The theme and style come from the ``theme`` / ``style`` query parameters.
"""

from fastapi import APIRouter, Depends, Request
from fastapi.responses import HTMLResponse

from core.exceptions import AppException
from services.article_service import ArticleService
from services.category_service import CategoryService
from dependencies import get_article_service, get_category_service
from routes.errors import handle_service_exception
from themes.view_engine import ThemeViewEngine, get_view_engine

router = APIRouter(tags=["pages"])


@router.get("/", response_class=HTMLResponse)
async def inicio(
    request: Request,
    articles: ArticleService = Depends(get_article_service),
    categories: CategoryService = Depends(get_category_service),
    views: ThemeViewEngine = Depends(get_view_engine),
):
    """Home page: latest articles and categories."""
    try:
        context = {
            "articles": await articles.latest(limit=10),
            "categories": await categories.list_categories(),
        }
        return views.TemplateResponse(request, "home/index.html", context)
    except AppException as e:
        raise handle_service_exception(e)


@router.get("/articles/{article_id}/view", response_class=HTMLResponse)
async def ver_articulo(
    request: Request,
    article_id: int,
    articles: ArticleService = Depends(get_article_service),
    views: ThemeViewEngine = Depends(get_view_engine),
):
    """Article page; each visit increments the view counter."""
    try:
        article = await articles.view_article(article_id)
        return views.TemplateResponse(request, "articles/detail.html", {"article": article})
    except AppException as e:
        raise handle_service_exception(e)
