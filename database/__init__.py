from .db import (
    SessionLocal,
    build_engine,
    build_sessionmaker,
    create_tables,
    engine,
    get_db,
    ping_database,
    CategoryORM,
    ArticleORM,
)
from .validation import EntityValidationError, FieldError, validate_entity

__all__ = [
    "SessionLocal",
    "build_engine",
    "build_sessionmaker",
    "create_tables",
    "engine",
    "get_db",
    "ping_database",
    "CategoryORM",
    "ArticleORM",
    "EntityValidationError",
    "FieldError",
    "validate_entity",
]
