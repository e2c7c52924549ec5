"""Validación de entidades antes de cada flush.

Cada entidad nueva o modificada se valida contra la metadata de sus columnas
(obligatorias y longitud máxima) y contra su propio ``validation_errors()`` si
lo define. Todos los errores de todas las entidades se reúnen en una única
``EntityValidationError``.
"""
from typing import NamedTuple
import logging

from sqlalchemy import String, event, inspect
from sqlalchemy.orm import Session

from .models import Base

logger = logging.getLogger(__name__)


class FieldError(NamedTuple):
    entity: str
    field: str
    message: str


class EntityValidationError(Exception):
    """Errores de validación acumulados durante un flush."""

    def __init__(self, errors: list[FieldError]):
        self.errors = list(errors)
        super().__init__(format_field_errors(self.errors))

    def as_dicts(self) -> list[dict]:
        return [error._asdict() for error in self.errors]


def format_field_errors(errors: list[FieldError]) -> str:
    """Une los pares campo/mensaje en un mensaje legible, una línea por error."""
    return "\n".join(f"Campo: {e.field}, error: {e.message}" for e in errors)


def validate_entity(obj) -> list[FieldError]:
    """
    Valida una instancia ORM.

    Args:
        obj: instancia de un modelo derivado de Base

    Returns:
        Lista de errores (vacía si la entidad es válida)
    """
    mapper = inspect(obj).mapper
    entity_name = type(obj).__name__
    errors: list[FieldError] = []

    for prop in mapper.column_attrs:
        column = prop.columns[0]
        if column is mapper.version_id_col or column.primary_key:
            continue
        value = getattr(obj, prop.key, None)
        if value is None:
            has_default = column.default is not None or column.server_default is not None
            if not column.nullable and not has_default:
                errors.append(FieldError(entity_name, prop.key, "El campo es obligatorio"))
            continue
        length = getattr(column.type, "length", None)
        if isinstance(column.type, String) and length and isinstance(value, str) and len(value) > length:
            errors.append(FieldError(
                entity_name, prop.key, f"La longitud máxima es {length} caracteres"
            ))

    custom = getattr(obj, "validation_errors", None)
    if callable(custom):
        errors.extend(FieldError(entity_name, field, message) for field, message in custom())
    return errors


@event.listens_for(Session, "before_flush")
def _validate_before_flush(session, flush_context, instances):
    pending = list(session.new) + [o for o in session.dirty if session.is_modified(o)]
    errors: list[FieldError] = []
    for obj in pending:
        if isinstance(obj, Base):
            errors.extend(validate_entity(obj))
    if errors:
        logger.debug(f"Flush cancelado: {len(errors)} errores de validación")
        raise EntityValidationError(errors)
