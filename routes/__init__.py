from .articles import router as articles_router
from .categories import router as categories_router
from .pages import router as pages_router

__all__ = [
    "articles_router",
    "categories_router",
    "pages_router",
]
