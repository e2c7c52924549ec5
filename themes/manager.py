"""
Gestión de temas: selección del tema por petición y reescritura de URLs de recursos.

El tema y el estilo se leen de los parámetros ``theme`` y ``style`` de la query
string en cada petición; no se persisten.
"""
import re
import logging
from typing import Optional

from fastapi import Request
from pydantic import BaseModel, Field

from config import settings

logger = logging.getLogger(__name__)

_THEME_NAME = re.compile(r"^[A-Za-z0-9_-]+$")


class ThemeSelection(BaseModel):
    """Tema y estilo activos para una petición."""
    theme: str = Field("default", description="Carpeta de tema")
    style: str = Field("default", description="Variante de estilo dentro del tema")


def _clean_name(value: Optional[str], default: str) -> str:
    """Solo se aceptan nombres de carpeta simples; cualquier otro valor usa el default."""
    if not value:
        return default
    if not _THEME_NAME.match(value):
        logger.warning(f"Nombre de tema/estilo no válido ignorado: {value!r}")
        return default
    return value


def get_theme_selection(request: Request) -> ThemeSelection:
    """
    Dependencia de FastAPI: tema y estilo de la petición actual.

    Args:
        request: Petición HTTP

    Returns:
        ThemeSelection con 'default' para los parámetros ausentes
    """
    default = settings.default_theme
    return ThemeSelection(
        theme=_clean_name(request.query_params.get("theme"), default),
        style=_clean_name(request.query_params.get("style"), "default"),
    )


def resolve_content_url(url: str, root_path: str = "") -> str:
    """Resuelve las URLs relativas a la aplicación ('~/...') contra root_path."""
    if url.startswith("~/"):
        return f"{root_path.rstrip('/')}/{url[2:]}"
    return url


def splice_theme_segment(url: str, segment: str) -> str:
    """
    Inserta el segmento del tema justo después del separador inicial.

    '/img/logo.png' -> '/Themes/dark/img/logo.png'
    '~/css/site.css' -> '~/Themes/dark/css/site.css'
    """
    segment = segment.strip("/")
    for prefix in ("~/", "/"):
        if url.startswith(prefix):
            return f"{prefix}{segment}/{url[len(prefix):]}"
    return f"{segment}/{url}"


def theme_content(
    url: str,
    theme: str,
    root_path: str = "",
    themes_path: Optional[str] = None,
    default_theme: Optional[str] = None,
) -> str:
    """
    URL de un recurso estático dentro del tema activo.

    Con el tema por defecto la URL no cambia (salvo la resolución de '~/').

    Args:
        url: Ruta del recurso, p. ej. '/img/logo.png'
        theme: Tema activo
        root_path: Prefijo de montaje de la aplicación
        themes_path: Carpeta de temas (por defecto settings.themes_path)
        default_theme: Tema que no reescribe URLs (por defecto settings.default_theme)
    """
    if theme != (default_theme or settings.default_theme):
        folder = (themes_path or settings.themes_path).strip("/")
        url = splice_theme_segment(url, f"{folder}/{theme}")
    return resolve_content_url(url, root_path)
