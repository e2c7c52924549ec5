"""
Temas de la interfaz web: selección por petición, motor de vistas y URLs de recursos.
"""
from .manager import (
    ThemeSelection,
    get_theme_selection,
    resolve_content_url,
    splice_theme_segment,
    theme_content,
)
from .view_engine import ThemeStaticFiles, ThemeViewEngine, configure_themes, get_view_engine

__all__ = [
    "ThemeSelection",
    "get_theme_selection",
    "resolve_content_url",
    "splice_theme_segment",
    "theme_content",
    "ThemeStaticFiles",
    "ThemeViewEngine",
    "configure_themes",
    "get_view_engine",
]
