from pydantic import BaseModel, ConfigDict, Field
from typing import Optional
from datetime import datetime

SLUG_PATTERN = r"^[A-Za-z0-9-]+$"


class ArticleBase(BaseModel):
    title: str = Field(..., min_length=1, max_length=200)
    slug: str = Field(..., min_length=1, max_length=200, pattern=SLUG_PATTERN)
    summary: Optional[str] = Field(None, max_length=500)
    content: Optional[str] = None
    category_id: Optional[int] = Field(None, ge=1)


class ArticleCreate(ArticleBase):
    pass


class ArticleUpdate(BaseModel):
    """Todos los campos son opcionales; solo se modifican los enviados."""
    title: Optional[str] = Field(None, min_length=1, max_length=200)
    slug: Optional[str] = Field(None, min_length=1, max_length=200, pattern=SLUG_PATTERN)
    summary: Optional[str] = Field(None, max_length=500)
    content: Optional[str] = None
    category_id: Optional[int] = Field(None, ge=1)


class Article(ArticleBase):
    model_config = ConfigDict(from_attributes=True)

    id: int
    views: int = 0
    version_id: int
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
