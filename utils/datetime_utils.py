"""
Utilidades para manejo de fechas en la zona horaria configurada.
"""
from datetime import datetime
from typing import Optional
from zoneinfo import ZoneInfo
from config import settings


def get_local_now() -> datetime:
    """Fecha y hora actual en la zona horaria de la aplicación."""
    return datetime.now(ZoneInfo(settings.timezone))


def to_local_time(dt: Optional[datetime]) -> Optional[datetime]:
    """
    Convierte una fecha a la zona horaria local.

    Las fechas naive se guardan en hora local (ver get_current_time), así que
    solo se les asigna la zona.
    """
    if dt is None:
        return None
    tz = ZoneInfo(settings.timezone)
    if dt.tzinfo is None:
        return dt.replace(tzinfo=tz)
    return dt.astimezone(tz)


def format_local(dt: Optional[datetime], fmt: str = "%d/%m/%Y %H:%M") -> str:
    """Formatea una fecha para las vistas; cadena vacía si no hay fecha."""
    local = to_local_time(dt)
    return local.strftime(fmt) if local else ""
