"""módulo de base de datos: engine async, sesiones y creación de tablas."""
from typing import AsyncGenerator
import logging

from sqlalchemy import text
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.exc import SQLAlchemyError

# import ORM classes and Base from models.py
from .models import Base, CategoryORM, ArticleORM
# registra la validación before_flush
from . import validation  # noqa: F401

#import configuration
from config import settings

logger = logging.getLogger(__name__)


def build_engine(database_url: str, echo: bool = False) -> AsyncEngine:
    """Crea el engine async; SQLite necesita check_same_thread=False."""
    connect_args = {"check_same_thread": False} if database_url.startswith("sqlite") else {}
    return create_async_engine(
        database_url,
        echo=echo,
        future=True,
        pool_pre_ping=True,  #verifica conexiones antes de usarlas
        connect_args=connect_args,
    )


def build_sessionmaker(bind: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    return async_sessionmaker(
        bind,
        class_=AsyncSession,
        expire_on_commit=False,
        autoflush=False,
    )


#engine / session con configuración centralizada
engine = build_engine(settings.database_url, echo=settings.debug_mode)
SessionLocal = build_sessionmaker(engine)


async def get_db() -> AsyncGenerator[AsyncSession, None]:
    """dependencia de FastAPI que provee una sesión async por petición.

    Yields:
        AsyncSession: Sesión de SQLAlchemy

    Nota:
        - Hace rollback automático si hay excepciones SQLAlchemy
        - Cierra la sesión de forma segura
    """
    async with SessionLocal() as db:
        try:
            yield db
        except SQLAlchemyError as e:
            logger.error(f"Error de base de datos en sesión: {e}")
            await db.rollback()
            raise


async def create_tables(bind: AsyncEngine = None) -> None:
    """Crear tablas ORM en la base de datos.

    Raises:
        SQLAlchemyError: Si hay error al crear las tablas
    """
    try:
        async with (bind or engine).begin() as conn:
            await conn.run_sync(Base.metadata.create_all)
        logger.info("Tablas de base de datos creadas/verificadas exitosamente")
    except SQLAlchemyError as e:
        logger.error(f"Error al crear tablas: {e}", exc_info=True)
        raise


async def ping_database(bind: AsyncEngine = None) -> bool:
    """Ejecuta SELECT 1; devuelve False si la base de datos no responde."""
    try:
        async with (bind or engine).connect() as conn:
            await conn.execute(text("SELECT 1"))
        return True
    except SQLAlchemyError as e:
        logger.error(f"Health check: Error de conexión a BD: {e}")
        return False


__all__ = [
    "Base",
    "CategoryORM",
    "ArticleORM",
    "build_engine",
    "build_sessionmaker",
    "engine",
    "SessionLocal",
    "get_db",
    "create_tables",
    "ping_database",
]
