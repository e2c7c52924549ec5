"""
Servicio base con operaciones de lógica de negocio comunes.
Esta clase proporciona una base para las clases de servicio que implementan
la lógica de negocio y coordinan las operaciones del repositorio.
"""

from typing import TypeVar, Generic, Any
import logging

from repositories.base_repository import AsyncRepository

logger = logging.getLogger(__name__)

# Type variables
T = TypeVar('T')  # ORM Model
R = TypeVar('R', bound=AsyncRepository)  # Repository


class BaseService(Generic[T, R]):
    """
    Servicio base que proporciona operaciones lógicas de negocio comunes.
    Esta clase debe ser heredada por servicios de entidades específicas.
    """

    def __init__(self, repository: R):
        """
        Inicializa el servicio.

        Args:
            repository: The repository instance for data access
        """
        self.repository = repository

    async def get_by_id_or_fail(self, id: Any) -> T:
        """
        Obtiene una entidad por su ID o lanza una excepción si no se encuentra.

        Raises:
            NotFoundException: If entity is not found
        """
        return await self.repository.find_by_id_or_fail(id)

    async def delete(self, id: Any) -> None:
        """
        Elimina una entidad por ID.

        Raises:
            NotFoundException: If entity is not found
        """
        entity = await self.get_by_id_or_fail(id)
        await self.repository.delete(entity)
        logger.info(f"{self.repository.entity_name} {id} eliminado")
