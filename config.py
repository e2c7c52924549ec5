"""
Configuración centralizada de la aplicación usando pydantic-settings.

Este módulo maneja todas las variables de entorno y configuraciones
de la aplicación de manera tipada y validada.
"""
import logging
from pathlib import Path
from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic import Field, field_validator


logger = logging.getLogger(__name__)

BASE_DIR = Path(__file__).resolve().parent


class Settings(BaseSettings):
    """Configuración de la aplicación cargada desde variables de entorno."""

    # Database
    database_url: str = Field(
        default="sqlite+aiosqlite:///./you.db",
        description="URL de conexión a la base de datos (driver async)"
    )
    concurrency_conflict_policy: str = Field(
        default="ignore",
        description="Qué hacer ante un conflicto de concurrencia optimista: 'ignore' o 'raise'"
    )

    # Application
    app_name: str = Field(
        default="You CMS",
        description="Nombre de la aplicación"
    )
    app_version: str = Field(
        default="1.0.0",
        description="Versión de la aplicación"
    )
    debug_mode: bool = Field(
        default=False,
        description="Modo debug (solo para desarrollo)"
    )

    # Paginación
    default_page_size: int = Field(
        default=10,
        ge=1,
        le=100,
        description="Tamaño de página por defecto para listados"
    )
    max_page_size: int = Field(
        default=100,
        ge=1,
        le=500,
        description="Tamaño máximo de página permitido"
    )

    # Temas
    templates_dir: str = Field(
        default=str(BASE_DIR / "templates"),
        description="Carpeta raíz de vistas y temas"
    )
    themes_path: str = Field(
        default="/Themes/",
        description="Prefijo de la carpeta de temas dentro de templates_dir"
    )
    default_theme: str = Field(
        default="default",
        description="Tema usado cuando la petición no indica ninguno"
    )

    # Logging
    log_level: str = Field(
        default="INFO",
        description="Nivel de logging (DEBUG, INFO, WARNING, ERROR, CRITICAL)"
    )

    # Timezone
    timezone: str = Field(
        default="UTC",
        description="Zona horaria de la aplicación (formato IANA)"
    )

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore"
    )

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Valida que el nivel de logging sea válido."""
        valid_levels = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
        v_upper = v.upper()
        if v_upper not in valid_levels:
            logger.warning(
                f"Nivel de log '{v}' no válido. Usando 'INFO'. "
                f"Niveles válidos: {valid_levels}"
            )
            return "INFO"
        return v_upper

    @field_validator("concurrency_conflict_policy")
    @classmethod
    def validate_conflict_policy(cls, v: str) -> str:
        """Solo se aceptan 'ignore' (last-writer-wins) y 'raise'."""
        v_lower = v.lower()
        if v_lower not in ("ignore", "raise"):
            logger.warning(
                f"Política de concurrencia '{v}' no válida. Usando 'ignore'."
            )
            return "ignore"
        return v_lower

    @property
    def themes_folder(self) -> str:
        """Nombre de la carpeta de temas sin separadores ('Themes')."""
        return self.themes_path.strip("/")

    @property
    def is_production(self) -> bool:
        """Determina si la app está en modo producción."""
        return not self.debug_mode


# Instancia global de configuración
settings = Settings()


def configure_logging():
    """Configura el sistema de logging de la aplicación."""
    log_format = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

    logging.basicConfig(
        level=getattr(logging, settings.log_level),
        format=log_format,
        handlers=[
            logging.StreamHandler(),
        ]
    )

    # Reducir verbosidad de librerías externas
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)
    logging.getLogger("aiosqlite").setLevel(logging.WARNING)

    logger.info(f"🚀 Logging configurado en nivel {settings.log_level}")
    logger.info(f"📦 Aplicación: {settings.app_name} v{settings.app_version}")
    logger.info(f"🔧 Modo: {'Desarrollo' if settings.debug_mode else 'Producción'}")
