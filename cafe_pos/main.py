# cafe_pos/main.py
from typing import Optional
import logging

from fastapi import FastAPI
from contextlib import asynccontextmanager

from cafe_pos.config.settings import Settings, settings as default_settings
from cafe_pos.config.database import create_db_engine, create_session_factory, init_db
from cafe_pos.core.exceptions import setup_exception_handlers
from cafe_pos.core.middleware import setup_middleware, setup_logging
from cafe_pos.api.v1.router import api_router

logger = logging.getLogger(__name__)


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    """
    Raíz de composición: crea el engine y la fábrica de sesiones de esta
    instancia y los deja en app.state. Las rutas reciben la sesión por
    inyección (get_db); no hay conexión global a nivel de módulo.
    """
    settings = settings or default_settings
    setup_logging(settings.log_level)

    engine = create_db_engine(settings)
    session_factory = create_session_factory(engine)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        # Startup
        logger.info(f"🚀 {settings.app_name} iniciando (v{settings.version})")
        logger.info(f"🌍 Ambiente: {'Development' if settings.debug else 'Production'}")
        logger.info(f"🗄️  Database: {settings.database_url.split('@')[1] if '@' in settings.database_url else settings.database_url}")

        if settings.auto_create_schema:
            init_db(engine, session_factory, settings)

        yield

        # Shutdown
        engine.dispose()
        logger.info(f"🛑 {settings.app_name} detenido")

    app = FastAPI(
        title=settings.app_name,
        version=settings.version,
        description="Sistema de ventas e inventario para punto de venta",
        lifespan=lifespan
    )

    app.state.settings = settings
    app.state.engine = engine
    app.state.session_factory = session_factory

    setup_middleware(app, settings)
    setup_exception_handlers(app)

    app.include_router(api_router, prefix="/api/v1")

    @app.get("/")
    async def root():
        return {
            "message": "Bienvenido a la API de Vitoko's Coffee",
            "version": settings.version,
            "endpoints": {
                "productos": "/api/v1/products",
                "clientes": "/api/v1/customers",
                "ventas": "/api/v1/sales",
                "test": "/api/v1/test"
            }
        }

    @app.get("/health")
    async def health_check():
        return {
            "status": "healthy",
            "version": settings.version,
            "app": settings.app_name,
            "environment": "production" if not settings.debug else "development"
        }

    return app


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(
        "cafe_pos.main:create_app",
        factory=True,
        host=default_settings.host,
        port=default_settings.port,
        reload=default_settings.debug
    )
