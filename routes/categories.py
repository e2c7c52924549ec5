"""
Category routes.
"""

from fastapi import APIRouter, Depends, status
from typing import List

from models.categories import Category, CategoryCreate
from core.exceptions import AppException
from services.category_service import CategoryService
from dependencies import get_category_service
from routes.errors import handle_service_exception

router = APIRouter(prefix="/api/categories", tags=["categories"])


@router.get("/", response_model=List[Category])
async def listar_categorias(service: CategoryService = Depends(get_category_service)):
    """List all categories alphabetically."""
    try:
        return await service.list_categories()
    except AppException as e:
        raise handle_service_exception(e)


@router.post("/", response_model=Category, status_code=status.HTTP_201_CREATED)
async def crear_categoria(
    category: CategoryCreate,
    service: CategoryService = Depends(get_category_service),
):
    """Create a new category."""
    try:
        return await service.create_category(category)
    except AppException as e:
        raise handle_service_exception(e)
