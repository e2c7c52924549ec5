"""
Configuración de fixtures para pytest.

Este módulo contiene fixtures reutilizables para todos los tests.
"""

import os
from typing import AsyncGenerator, Callable, Awaitable, List

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy import event, text
from sqlalchemy.ext.asyncio import AsyncSession, create_async_engine
from sqlalchemy.pool import StaticPool

# Configurar para usar base de datos en memoria para tests
os.environ["DATABASE_URL"] = "sqlite+aiosqlite:///:memory:"

from main import app
from database.db import get_db, build_sessionmaker
from database.models import Base, ArticleORM, CategoryORM
from repositories.article_repository import ArticleRepository
from repositories.category_repository import CategoryRepository


# ==================== Database Fixtures ====================

@pytest_asyncio.fixture
async def db_engine():
    """Create an in-memory SQLite async engine for testing."""
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )

    # Enable foreign keys for SQLite
    @event.listens_for(engine.sync_engine, "connect")
    def set_sqlite_pragma(dbapi_conn, connection_record):
        cursor = dbapi_conn.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    await engine.dispose()


@pytest_asyncio.fixture
async def db_session(db_engine) -> AsyncGenerator[AsyncSession, None]:
    """Create a new database session for a test."""
    TestingSessionLocal = build_sessionmaker(db_engine)
    async with TestingSessionLocal() as session:
        yield session


@pytest_asyncio.fixture
async def client(db_session: AsyncSession) -> AsyncGenerator[AsyncClient, None]:
    """Create a test client with database session override."""
    async def override_get_db():
        yield db_session

    app.dependency_overrides[get_db] = override_get_db

    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as test_client:
        yield test_client

    app.dependency_overrides.clear()


# ==================== Repository Fixtures ====================

@pytest.fixture
def article_repository(db_session: AsyncSession) -> ArticleRepository:
    """ArticleRepository con la política de concurrencia por defecto (ignore)."""
    return ArticleRepository(db_session, conflict_policy="ignore")


@pytest.fixture
def category_repository(db_session: AsyncSession) -> CategoryRepository:
    return CategoryRepository(db_session)


# ==================== Data Fixtures ====================

def build_article(number: int, **overrides) -> ArticleORM:
    """Artículo válido numerado; los campos pueden sobrescribirse."""
    data = {
        "title": f"Artículo {number}",
        "slug": f"articulo-{number}",
        "summary": f"Resumen del artículo {number}",
        "content": "Contenido de prueba",
    }
    data.update(overrides)
    return ArticleORM(**data)


@pytest.fixture
def article_factory() -> Callable[..., ArticleORM]:
    """Devuelve build_article para construir artículos sin guardarlos."""
    return build_article


@pytest_asyncio.fixture
async def category(db_session: AsyncSession) -> CategoryORM:
    """Create a category in the database."""
    categoria = CategoryORM(name="Noticias", description="Noticias del sitio")
    db_session.add(categoria)
    await db_session.commit()
    return categoria


@pytest_asyncio.fixture
async def article(db_session: AsyncSession) -> ArticleORM:
    """Create one article in the database."""
    articulo = build_article(1)
    db_session.add(articulo)
    await db_session.commit()
    return articulo


@pytest.fixture
def seed_articles(db_session: AsyncSession) -> Callable[[int], Awaitable[List[ArticleORM]]]:
    """Factory: crea N artículos numerados del 1 al N, en orden."""
    async def _seed(count: int, **overrides) -> List[ArticleORM]:
        articulos = [build_article(i, **overrides) for i in range(1, count + 1)]
        db_session.add_all(articulos)
        await db_session.commit()
        return articulos
    return _seed


@pytest.fixture
def bump_version(db_session: AsyncSession) -> Callable[[int], Awaitable[None]]:
    """Factory: simula que otro escritor modificó la fila (sube version_id)."""
    async def _bump(article_id: int) -> None:
        await db_session.execute(
            text("UPDATE articles SET version_id = version_id + 1 WHERE id_article = :id"),
            {"id": article_id},
        )
        await db_session.commit()
    return _bump
