"""
Repositorio base async con operaciones CRUD comunes:
Este repositorio genérico envuelve una AsyncSession de SQLAlchemy y proporciona
alta, modificación, baja, búsqueda y paginación para cualquier entidad ORM.

Las operaciones de escritura aceptan ``auto_save``: con True se confirman de
inmediato; con False quedan pendientes hasta una llamada explícita a ``save()``.
"""

from typing import TypeVar, Generic, Iterable, List, Optional, Type, Any
import logging

from sqlalchemy import func, inspect, select
from sqlalchemy.exc import MultipleResultsFound, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm.attributes import flag_modified
from sqlalchemy.orm.exc import StaleDataError

from config import settings
from core.exceptions import (
    ConcurrencyException,
    DatabaseException,
    MultipleResultsException,
    NotFoundException,
    ValidationException,
)
from core.pagination import Page, calculate_skip
from core.query import SortDirection, apply_order
from database.validation import EntityValidationError

logger = logging.getLogger(__name__)

T = TypeVar('T')


class AsyncRepository(Generic[T]):
    """
    Repositorio genérico async que proporciona operaciones CRUD estándar.

    Puede usarse directamente (``AsyncRepository(db, ArticleORM)``) o heredarse
    por repositorios de entidades específicos.
    """

    def __init__(
        self,
        db: AsyncSession,
        model_class: Type[T],
        conflict_policy: Optional[str] = None,
    ):
        """
        Inicializa el repositorio.

        Args:
            db: Sesión async de SQLAlchemy
            model_class: Clase del modelo ORM para este repositorio
            conflict_policy: 'ignore' o 'raise' ante conflictos de concurrencia
                (por defecto, settings.concurrency_conflict_policy)
        """
        self.db = db
        self.model_class = model_class
        self.conflict_policy = conflict_policy or settings.concurrency_conflict_policy

    @property
    def entity_name(self) -> str:
        return self.model_class.__name__

    # ==================== Escritura ====================

    async def add(self, entity: T, auto_save: bool = True) -> T:
        """
        Agrega una entidad nueva.

        Args:
            entity: La entidad a crear
            auto_save: Si True, confirma inmediatamente

        Returns:
            La entidad (con el ID asignado por la base de datos si se guardó)
        """
        self.db.add(entity)
        if auto_save:
            await self.save()
        return entity

    async def add_many(self, entities: Iterable[T], auto_save: bool = True) -> int:
        """
        Agrega un lote de entidades.

        Returns:
            Número de registros confirmados (0 si no se guarda)
        """
        self.db.add_all(list(entities))
        return await self.save() if auto_save else 0

    async def update(self, entity: T, auto_save: bool = True) -> bool:
        """
        Marca la entidad como modificada por completo (todas sus columnas).

        Args:
            entity: La entidad a actualizar, gestionada por la sesión o no
            auto_save: Si True, confirma inmediatamente

        Returns:
            True si se actualizó algún registro (o si solo quedó pendiente);
            False si el registro no existe o hubo un conflicto ignorado
        """
        if await self._attach_modified(entity) is None:
            return False
        return await self.save() > 0 if auto_save else True

    async def update_many(self, entities: Iterable[T], auto_save: bool = True) -> int:
        """Versión por lotes de update; devuelve registros confirmados o 0."""
        for entity in list(entities):
            await self._attach_modified(entity)
        return await self.save() if auto_save else 0

    async def delete(self, entity: T, auto_save: bool = True) -> bool:
        """
        Elimina una entidad.

        Si la entidad se agregó sin guardar, se cancela su alta. Si el registro
        no existe en la base de datos no se hace nada y se devuelve False.

        Returns:
            True si se eliminó (o quedó pendiente de eliminar)
        """
        if self._cancel_pending_insert(entity):
            return True
        target = await self._resolve_existing(entity)
        if target is None:
            logger.debug(f"Delete ignorado: {self.entity_name} no existe")
            return False
        await self.db.delete(target)
        return await self.save() > 0 if auto_save else True

    async def delete_many(self, entities: Iterable[T], auto_save: bool = True) -> int:
        """Versión por lotes de delete; los registros inexistentes se omiten."""
        for entity in list(entities):
            if self._cancel_pending_insert(entity):
                continue
            target = await self._resolve_existing(entity)
            if target is not None:
                await self.db.delete(target)
        return await self.save() if auto_save else 0

    async def save(self) -> int:
        """
        Confirma todos los cambios pendientes de la sesión.

        Returns:
            Número de entidades afectadas (0 si se ignoró un conflicto de concurrencia)

        Raises:
            ValidationException: Con todos los campos inválidos en un solo mensaje
            ConcurrencyException: Conflicto de concurrencia con policy 'raise'
            DatabaseException: Cualquier otro error de base de datos
        """
        affected = self._pending_changes()
        try:
            await self.db.commit()
        except EntityValidationError as e:
            await self.db.rollback()
            logger.error(f"Error de validación guardando {self.entity_name}: {e}")
            raise ValidationException(str(e), details={"errors": e.as_dicts()})
        except StaleDataError as e:
            await self.db.rollback()
            self._handle_conflict(e)
            return 0
        except SQLAlchemyError as e:
            await self.db.rollback()
            logger.error(f"Error guardando cambios de {self.entity_name}: {e}")
            raise DatabaseException(str(e))
        return affected

    # ==================== Lectura ====================

    async def count(self, predicate: Optional[Any] = None) -> int:
        """
        Cuenta las entidades que cumplen el predicado (todas si no hay predicado).

        Args:
            predicate: Expresión booleana de SQLAlchemy, p. ej. ``ArticleORM.views > 10``
        """
        query = select(func.count()).select_from(self.model_class)
        if predicate is not None:
            query = query.where(predicate)
        try:
            return await self.db.scalar(query) or 0
        except SQLAlchemyError as e:
            logger.error(f"Error counting {self.entity_name}: {e}")
            raise DatabaseException(str(e))

    async def exists(self, predicate: Any) -> bool:
        """Indica si existe al menos una entidad que cumpla el predicado."""
        query = select(select(self.model_class).where(predicate).exists())
        try:
            return bool(await self.db.scalar(query))
        except SQLAlchemyError as e:
            logger.error(f"Error checking {self.entity_name} existence: {e}")
            raise DatabaseException(str(e))

    async def find_by_id(self, id: Any) -> Optional[T]:
        """
        Obtiene una entidad por su ID.

        Returns:
            The entity or None if not found
        """
        try:
            return await self.db.get(self.model_class, id)
        except SQLAlchemyError as e:
            logger.error(f"Error getting {self.entity_name} by id {id}: {e}")
            raise DatabaseException(str(e))

    async def find_by_id_or_fail(self, id: Any) -> T:
        """
        Obtiene una entidad por su ID o lanza una excepción si no se encuentra.

        Raises:
            NotFoundException: If entity is not found
        """
        entity = await self.find_by_id(id)
        if entity is None:
            raise NotFoundException(resource=self.entity_name, identifier=str(id))
        return entity

    async def find_one(self, predicate: Any) -> Optional[T]:
        """
        Obtiene la única entidad que cumple el predicado.

        Returns:
            La entidad o None si no hay coincidencias

        Raises:
            MultipleResultsException: Si hay más de una coincidencia
        """
        query = select(self.model_class).where(predicate).limit(2)
        try:
            result = await self.db.scalars(query)
            return result.one_or_none()
        except MultipleResultsFound:
            raise MultipleResultsException(resource=self.entity_name)
        except SQLAlchemyError as e:
            logger.error(f"Error finding {self.entity_name}: {e}")
            raise DatabaseException(str(e))

    async def find_all(self) -> List[T]:
        """Todas las entidades, sin filtro ni orden explícito."""
        return await self.find_list()

    async def find_list(
        self,
        limit: int = 0,
        predicate: Optional[Any] = None,
        sort: SortDirection = SortDirection.NONE,
        sort_key: Optional[Any] = None,
    ) -> List[T]:
        """
        Lista entidades filtradas, opcionalmente ordenadas y limitadas.

        Args:
            limit: Máximo de registros (0 = sin límite)
            predicate: Filtro opcional
            sort: Dirección de orden
            sort_key: Columna de orden (obligatoria si sort no es NONE)
        """
        if limit < 0:
            raise ValidationException("El límite no puede ser negativo", field="limit")

        query = select(self.model_class)
        if predicate is not None:
            query = query.where(predicate)
        query = apply_order(query, sort, sort_key)
        if limit > 0:
            query = query.limit(limit)
        try:
            result = await self.db.scalars(query)
            return list(result.all())
        except SQLAlchemyError as e:
            logger.error(f"Error listing {self.entity_name}: {e}")
            raise DatabaseException(str(e))

    async def find_page(
        self,
        page_index: int,
        page_size: int,
        predicate: Optional[Any] = None,
        sort: SortDirection = SortDirection.NONE,
        sort_key: Optional[Any] = None,
    ) -> Page[T]:
        """
        Obtiene una página de resultados junto con el total de coincidencias.

        Sin orden explícito se ordena por clave primaria para que las páginas
        sean estables.

        Args:
            page_index: Número de página (1-indexed)
            page_size: Registros por página
            predicate: Filtro opcional
            sort: Dirección de orden
            sort_key: Columna de orden

        Returns:
            Page con los items y total_count
        """
        if page_index < 1:
            raise ValidationException("La página debe ser mayor o igual a 1", field="page_index")
        if page_size < 1:
            raise ValidationException("El tamaño de página debe ser mayor o igual a 1", field="page_size")

        total = await self.count(predicate)

        query = select(self.model_class)
        if predicate is not None:
            query = query.where(predicate)
        query = apply_order(query, sort, sort_key, default_keys=inspect(self.model_class).primary_key)
        query = query.offset(calculate_skip(page_index, page_size)).limit(page_size)
        try:
            result = await self.db.scalars(query)
            items = list(result.all())
        except SQLAlchemyError as e:
            logger.error(f"Error paginating {self.entity_name}: {e}")
            raise DatabaseException(str(e))

        return Page(items=items, total_count=total, page_index=page_index, page_size=page_size)

    # ==================== Internos ====================

    def _pending_changes(self) -> int:
        session = self.db
        modified = sum(1 for obj in session.dirty if session.is_modified(obj))
        return len(session.new) + len(session.deleted) + modified

    async def _attach_modified(self, entity: T) -> Optional[T]:
        """
        Adjunta la entidad a la sesión y marca todas sus columnas como modificadas.

        Returns:
            La instancia gestionada por la sesión, o None si el registro ya no
            existe o su versión no coincide (conflicto ignorado).
        """
        state = inspect(entity)
        if not state.persistent:
            identity = state.mapper.primary_key_from_instance(entity)
            if None in identity:
                raise ValidationException(
                    f"No se puede actualizar {self.entity_name} sin ID", field="id"
                )
            try:
                existing = await self.find_by_id(identity[0] if len(identity) == 1 else tuple(identity))
                if existing is None:
                    raise StaleDataError(
                        f"{self.entity_name} {identity} no existe en la base de datos"
                    )
                # merge valida version_id contra la fila cargada
                entity = await self.db.merge(entity)
            except StaleDataError as e:
                self._handle_conflict(e)
                return None
            state = inspect(entity)

        mapper = state.mapper
        for prop in mapper.column_attrs:
            column = prop.columns[0]
            if column.primary_key or column is mapper.version_id_col:
                continue
            if prop.key in state.dict:
                flag_modified(entity, prop.key)
        return entity

    def _handle_conflict(self, error: StaleDataError) -> None:
        if self.conflict_policy == "raise":
            logger.error(f"Conflicto de concurrencia en {self.entity_name}: {error}")
            raise ConcurrencyException(details={"error": str(error)})
        logger.warning(f"Conflicto de concurrencia ignorado en {self.entity_name}: {error}")

    def _cancel_pending_insert(self, entity: T) -> bool:
        """Saca de la sesión una entidad agregada pero aún no guardada."""
        if not inspect(entity).pending:
            return False
        self.db.expunge(entity)
        logger.debug(f"Alta pendiente de {self.entity_name} cancelada")
        return True

    async def _resolve_existing(self, entity: T) -> Optional[T]:
        """Devuelve la instancia persistente equivalente, o None si el registro no existe."""
        state = inspect(entity)
        if state.persistent:
            return entity
        identity = state.mapper.primary_key_from_instance(entity)
        if None in identity:
            return None
        return await self.find_by_id(identity[0] if len(identity) == 1 else tuple(identity))
