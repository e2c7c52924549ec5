"""
Tests for theme selection, themed content URLs and the view engine.

Tests cover:
- theme_content with the default theme, a named theme and '~/' URLs
- Theme/style selection from the query string
- View lookup order and fallbacks
- Installation of the engine in the application
"""

from pathlib import Path

import pytest
from fastapi import FastAPI
from starlette.requests import Request

from config import settings
from core.exceptions import NotFoundException
from themes.manager import (
    get_theme_selection,
    resolve_content_url,
    splice_theme_segment,
    theme_content,
)
from themes.view_engine import ThemeViewEngine, configure_themes


def make_request(query_string: str = "", root_path: str = "") -> Request:
    scope = {
        "type": "http",
        "method": "GET",
        "path": "/",
        "root_path": root_path,
        "query_string": query_string.encode(),
        "headers": [],
    }
    return Request(scope)


@pytest.fixture
def view_engine() -> ThemeViewEngine:
    return ThemeViewEngine(settings.templates_dir)


class TestThemeContent:

    def test_tema_por_defecto_no_cambia_la_url(self):
        assert theme_content("/img/logo.png", "default") == "/img/logo.png"

    def test_tema_con_nombre(self):
        assert theme_content("/img/logo.png", "dark") == "/Themes/dark/img/logo.png"

    def test_url_relativa_a_la_aplicacion(self):
        assert theme_content("~/css/site.css", "dark") == "/Themes/dark/css/site.css"
        assert theme_content("~/css/site.css", "dark", root_path="/cms") == "/cms/Themes/dark/css/site.css"
        assert theme_content("~/css/site.css", "default", root_path="/cms/") == "/cms/css/site.css"

    def test_url_sin_separador_inicial(self):
        assert theme_content("img/logo.png", "dark") == "Themes/dark/img/logo.png"

    def test_carpeta_de_temas_configurable(self):
        assert theme_content("/a.css", "blue", themes_path="/Skins/") == "/Skins/blue/a.css"

    def test_tema_por_defecto_configurable(self):
        assert theme_content("/a.css", "classic", default_theme="classic") == "/a.css"
        assert theme_content("/a.css", "default", default_theme="classic") == "/Themes/default/a.css"

    def test_helpers(self):
        assert splice_theme_segment("~/x.js", "/Themes/dark/") == "~/Themes/dark/x.js"
        assert resolve_content_url("/x.js", "/cms") == "/x.js"


class TestThemeSelection:

    def test_sin_parametros_usa_default(self):
        selection = get_theme_selection(make_request())

        assert selection.theme == "default"
        assert selection.style == "default"

    def test_tema_y_estilo_de_la_query(self):
        selection = get_theme_selection(make_request("theme=dark&style=compact"))

        assert selection.theme == "dark"
        assert selection.style == "compact"

    def test_nombre_no_valido_usa_default(self):
        selection = get_theme_selection(make_request("theme=../../etc&style=a%20b"))

        assert selection.theme == "default"
        assert selection.style == "default"


class TestThemeViewEngine:

    def test_candidatos_tema_por_defecto(self, view_engine: ThemeViewEngine):
        assert view_engine.candidate_names("home/index.html", "default") == ["Views/home/index.html"]

    def test_candidatos_tema_con_nombre(self, view_engine: ThemeViewEngine):
        assert view_engine.candidate_names("home/index.html", "dark") == [
            "Themes/dark/Views/home/index.html",
            "Views/home/index.html",
        ]

    def test_vista_del_tema_tiene_prioridad(self, view_engine: ThemeViewEngine):
        layout = view_engine.find_view("shared/layout.html", "dark")

        assert Path(layout.filename).parts[-5:] == ("Themes", "dark", "Views", "shared", "layout.html")

    def test_vista_comun_como_respaldo(self, view_engine: ThemeViewEngine):
        view = view_engine.find_view("home/index.html", "dark")

        assert Path(view.filename).parts[-3:] == ("Views", "home", "index.html")

    def test_tema_inexistente_usa_vistas_comunes(self, view_engine: ThemeViewEngine):
        layout = view_engine.find_view("shared/layout.html", "sepia")

        assert Path(layout.filename).parts[-3:] == ("Views", "shared", "layout.html")
        assert "Themes" not in Path(layout.filename).parts

    def test_vista_inexistente(self, view_engine: ThemeViewEngine):
        with pytest.raises(NotFoundException) as exc_info:
            view_engine.find_view("no/existe.html", "dark")

        assert exc_info.value.status_code == 404

    def test_render_con_tema(self, view_engine: ThemeViewEngine):
        html = view_engine.render(
            make_request("theme=dark&style=compact"),
            "home/index.html",
            {"articles": [], "categories": []},
        )

        assert 'data-theme="dark"' in html
        assert "/Themes/dark/static/css/site.css" in html
        assert "theme-dark style-compact" in html
        assert "No hay artículos publicados." in html

    def test_render_sin_tema(self, view_engine: ThemeViewEngine):
        html = view_engine.render(make_request(), "home/index.html", {"articles": [], "categories": []})

        assert "data-theme" not in html
        assert 'href="/static/css/site.css"' in html

    def test_motor_con_otro_tema_por_defecto(self):
        engine = ThemeViewEngine(settings.templates_dir, default_theme="dark")

        html = engine.render(
            make_request("theme=dark"), "home/index.html", {"articles": [], "categories": []}
        )

        # vistas y URLs siguen la misma regla: 'dark' es el tema base
        assert engine.candidate_names("home/index.html", "dark") == ["Views/home/index.html"]
        assert "data-theme" not in html
        assert 'href="/static/css/site.css"' in html

    def test_tema_propio_en_otra_carpeta(self, tmp_path: Path):
        (tmp_path / "Views" / "shared").mkdir(parents=True)
        (tmp_path / "Views" / "shared" / "layout.html").write_text("comun:{% block content %}{% endblock %}")
        (tmp_path / "Views" / "page.html").write_text("{% extends layout %}{% block content %}{{ theme }}{% endblock %}")
        (tmp_path / "Skins" / "blue" / "Views" / "shared").mkdir(parents=True)
        (tmp_path / "Skins" / "blue" / "Views" / "shared" / "layout.html").write_text(
            "azul:{% block content %}{% endblock %}"
        )
        engine = ThemeViewEngine(str(tmp_path), themes_path="/Skins/")

        assert engine.render(make_request("theme=blue"), "page.html") == "azul:blue"
        assert engine.render(make_request(), "page.html") == "comun:default"


class TestConfigureThemes:

    def test_instala_el_motor_una_vez(self):
        app = FastAPI()

        engine = configure_themes(app)

        assert app.state.view_engine is engine
        mounted = {route.name for route in app.routes}
        assert {"static", "themes"} <= mounted

    def test_acepta_un_motor_propio(self, tmp_path: Path):
        app = FastAPI()
        engine = ThemeViewEngine(str(tmp_path))

        assert configure_themes(app, engine) is engine
        # sin carpetas estáticas no se monta nada
        assert not {"static", "themes"} & {route.name for route in app.routes}
