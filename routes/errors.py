"""
Conversión de excepciones de la capa de servicio a errores HTTP.
"""

from fastapi import HTTPException, status
import logging

from core.exceptions import AppException

logger = logging.getLogger(__name__)


def handle_service_exception(e: Exception) -> HTTPException:
    """Convert service layer exceptions to HTTP exceptions."""
    if isinstance(e, AppException):
        if e.status_code >= 500:
            logger.error(f"Error de aplicación: {e.message}")
        detail = e.message
        if e.details.get("errors"):
            detail = {"message": e.message, "errors": e.details["errors"]}
        return HTTPException(status_code=e.status_code, detail=detail)

    logger.error(f"Unexpected error: {e}", exc_info=True)
    return HTTPException(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        detail="Error interno del servidor"
    )
