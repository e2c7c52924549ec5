"""
Motor de vistas con soporte de temas.

Las vistas se buscan primero en la carpeta del tema activo y después en la
carpeta común:

    templates/Themes/<tema>/Views/<vista>
    templates/Views/<vista>

El motor se crea una sola vez al arrancar la aplicación (``configure_themes``)
y las rutas lo obtienen con la dependencia ``get_view_engine``.
"""
from pathlib import Path
from typing import Any, Optional
import logging

from fastapi import FastAPI, Request
from fastapi.responses import HTMLResponse
from fastapi.staticfiles import StaticFiles
from jinja2 import Environment, FileSystemLoader, Template, TemplatesNotFound, select_autoescape

from config import settings
from core.exceptions import NotFoundException
from themes.manager import ThemeSelection, get_theme_selection, theme_content
from utils.datetime_utils import format_local

logger = logging.getLogger(__name__)


class ThemeStaticFiles(StaticFiles):
    """Sirve solo ``<tema>/static/...``; las vistas de los temas no son públicas."""

    def lookup_path(self, path: str):
        parts = Path(path).parts
        if len(parts) < 3 or parts[1] != "static":
            return "", None
        return super().lookup_path(path)


class ThemeViewEngine:
    """Resuelve y renderiza vistas Jinja2 según el tema de la petición."""

    view_location_formats = (
        "{themes}/{theme}/Views/{name}",
        "Views/{name}",
    )

    def __init__(
        self,
        templates_dir: str,
        themes_path: str = "/Themes/",
        default_theme: str = "default",
    ):
        self.templates_dir = Path(templates_dir)
        self.themes_path = themes_path
        self.themes_folder = themes_path.strip("/")
        self.default_theme = default_theme
        self.env = Environment(
            loader=FileSystemLoader(str(self.templates_dir)),
            autoescape=select_autoescape(["html", "xml"]),
        )
        self.env.filters["local_date"] = format_local

    def candidate_names(self, name: str, theme: str) -> list[str]:
        """Rutas en las que se busca una vista, en orden de prioridad."""
        formats = self.view_location_formats
        if theme == self.default_theme:
            formats = formats[1:]
        return [fmt.format(themes=self.themes_folder, theme=theme, name=name) for fmt in formats]

    def find_view(self, name: str, theme: str) -> Template:
        """
        Localiza una vista para el tema dado.

        Raises:
            NotFoundException: Si la vista no existe en ninguna ubicación
        """
        candidates = self.candidate_names(name, theme)
        try:
            return self.env.select_template(candidates)
        except TemplatesNotFound:
            logger.error(f"Vista no encontrada: {candidates}")
            raise NotFoundException(resource="Vista", identifier=name)

    def build_context(
        self,
        request: Request,
        selection: ThemeSelection,
        context: Optional[dict[str, Any]] = None,
    ) -> dict[str, Any]:
        """Contexto común a todas las vistas: tema, estilo, layout y helpers de URL."""
        root_path = request.scope.get("root_path", "")

        def content(url: str) -> str:
            return theme_content(
                url, selection.theme, root_path, self.themes_path, self.default_theme
            )

        base = {
            "request": request,
            "theme": selection.theme,
            "style": selection.style,
            "theme_content": content,
            "layout": self.find_view("shared/layout.html", selection.theme),
        }
        base.update(context or {})
        return base

    def render(
        self,
        request: Request,
        name: str,
        context: Optional[dict[str, Any]] = None,
        selection: Optional[ThemeSelection] = None,
    ) -> str:
        selection = selection or get_theme_selection(request)
        template = self.find_view(name, selection.theme)
        return template.render(self.build_context(request, selection, context))

    def TemplateResponse(
        self,
        request: Request,
        name: str,
        context: Optional[dict[str, Any]] = None,
        status_code: int = 200,
    ) -> HTMLResponse:
        """Renderiza la vista y la devuelve como respuesta HTML."""
        return HTMLResponse(self.render(request, name, context), status_code=status_code)


def configure_themes(app: FastAPI, view_engine: Optional[ThemeViewEngine] = None) -> ThemeViewEngine:
    """
    Instala el motor de vistas en la aplicación y monta los recursos estáticos.

    Se llama una única vez al crear la aplicación.
    """
    view_engine = view_engine or ThemeViewEngine(
        settings.templates_dir,
        themes_path=settings.themes_path,
        default_theme=settings.default_theme,
    )
    app.state.view_engine = view_engine

    static_dir = view_engine.templates_dir / "static"
    themes_dir = view_engine.templates_dir / view_engine.themes_folder
    if static_dir.is_dir():
        app.mount("/static", StaticFiles(directory=str(static_dir)), name="static")
    if themes_dir.is_dir():
        app.mount(
            f"/{view_engine.themes_folder}",
            ThemeStaticFiles(directory=str(themes_dir)),
            name="themes",
        )

    logger.info(f"🎨 Motor de vistas configurado en {view_engine.templates_dir}")
    return view_engine


def get_view_engine(request: Request) -> ThemeViewEngine:
    """Dependencia de FastAPI: motor de vistas instalado en la aplicación."""
    return request.app.state.view_engine
