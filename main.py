from fastapi import FastAPI
from contextlib import asynccontextmanager
import uvicorn
import logging

from config import settings, configure_logging

from routes import articles_router, categories_router, pages_router
from database.db import create_tables, ping_database
from models.common import HealthCheckResponse
from themes.view_engine import configure_themes

logger = logging.getLogger(__name__)

# Configurar logging una sola vez al inicio
configure_logging()


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Maneja el ciclo de vida de la aplicación."""
    # Startup
    try:
        await create_tables()
    except Exception as e:
        logger.warning(f"No se pudieron crear tablas en la base de datos: {e}")
    yield
    # Shutdown


app = FastAPI(
    title=settings.app_name,
    description="Gestor de contenidos con repositorio genérico async y vistas con temas.",
    version=settings.app_version,
    docs_url="/docs",
    redoc_url="/redoc",
    lifespan=lifespan,
    debug=settings.debug_mode
)

# Motor de vistas con temas: se instala una sola vez
configure_themes(app)

app.include_router(pages_router)
app.include_router(articles_router)
app.include_router(categories_router)


@app.get("/health", response_model=HealthCheckResponse)
async def health_check():
    """Health check endpoint con verificación de base de datos."""
    db_status = "connected" if await ping_database() else "disconnected"

    return HealthCheckResponse(
        status="healthy" if db_status == "connected" else "unhealthy",
        service=settings.app_name,
        version=settings.app_version,
        database=db_status,
        environment="production" if settings.is_production else "development",
    )


if __name__ == "__main__":
    uvicorn.run(
        app,
        host="0.0.0.0",
        port=8000,
        log_level="info"
    )
