# -*- coding: utf-8 -*-
"""
backend/app/main.py

Punto de entrada principal del backend RadioHub.

Arranque:
- `create_app()` arma la app con sus servicios en `app.state`
  (StoreClient, ResponseCache, reloj); los tests pasan los suyos.
- /metrics y métricas HTTP por plantilla de ruta (app.observability.prom)
- Scheduler con el barrido del caché de respuestas (analytics_cache_sweep)
- Ciclo de vida con cierre ordenado: scheduler primero, después el engine.
- Sin DATABASE_URL el backend arranca igual; los reportes responden en cero.

Autor: RadioHub
Fecha: 2026-09-13
"""

import sys
import asyncio

if sys.platform.startswith("win"):
    asyncio.set_event_loop_policy(asyncio.WindowsSelectorEventLoopPolicy())

import logging
import os
from contextlib import asynccontextmanager
from pathlib import Path
from typing import Optional

# ---------------------------------------------------------------------------
# Cargar .env ANTES de leer settings
# En PROD: override=False para respetar variables del entorno
# ---------------------------------------------------------------------------
from dotenv import load_dotenv

_ENV_PATH = Path(__file__).resolve().parents[1] / ".env"
_PYTHON_ENV = os.getenv("PYTHON_ENV", "development").strip().strip('"').strip("'").lower()
load_dotenv(dotenv_path=_ENV_PATH, override=_PYTHON_ENV not in ("production", "test"))

from fastapi import FastAPI, Request, HTTPException
from fastapi.middleware.cors import CORSMiddleware
import anyio
import uvicorn

from app.core.settings import get_settings
from app.core.logging import setup_logging_from_settings
from app.core.db import create_store_client_from_settings
from app.observability.prom import setup_observability
from app.shared.cache import ResponseCache
from app.shared.config.settings_base import BaseAppSettings
from app.shared.database import StoreClient
from app.shared.scheduler import SchedulerService
from app.shared.scheduler.jobs import register_cache_sweep_job
from app.shared.utils.json_response import UTF8JSONResponse, json_response_utf8

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    # ────────── STARTUP ──────────
    settings: BaseAppSettings = app.state.settings
    store: StoreClient = app.state.store

    scheduler: Optional[SchedulerService] = None
    if settings.scheduler_enabled:
        try:
            scheduler = SchedulerService()
            register_cache_sweep_job(
                scheduler,
                app.state.response_cache,
                seconds=settings.analytics_cache_sweep_seconds,
            )
            scheduler.start()
            logger.info("⏰ Scheduler iniciado con jobs programados")
        except Exception as e:
            # Sin barrido el caché sigue expirando en lectura
            logger.warning(f"⚠️ No se pudo iniciar scheduler: {e}")
            scheduler = None
    app.state.scheduler = scheduler

    if store.connected:
        logger.info("🟢 Backend de RadioHub iniciado (almacén configurado).")
    else:
        logger.warning("🟡 Backend de RadioHub iniciado sin almacén: reportes en modo degradado.")

    try:
        yield
    finally:
        # ────────── SHUTDOWN ──────────
        logger.info("🔴 Iniciando shutdown ordenado...")
        with anyio.CancelScope(shield=True):
            if scheduler is not None:
                try:
                    scheduler.shutdown(wait=False)
                    logger.info("⏰ Scheduler detenido")
                except Exception as e:
                    logger.warning(f"⚠️ Error deteniendo scheduler: {e}")
            try:
                await store.dispose()
            except Exception as e:
                logger.warning(f"⚠️ Error cerrando el engine: {e}")

        logger.info("🔴 Backend de RadioHub apagado.")


openapi_tags = [
    {"name": "Analytics", "description": "Reportes de descargas"},
    {"name": "Analytics: cache", "description": "Administración del caché de reportes"},
    {"name": "Files: downloads", "description": "Descarga y registro de eventos"},
    {"name": "Health", "description": "Estado del backend"},
]


def _configure_cors(app_instance: FastAPI, settings: BaseAppSettings) -> dict:
    """
    Configura CORS a partir de CORS_ORIGINS.

    "*" con allow_credentials=True es inválido en navegadores: en modo
    wildcard se desactivan las credenciales.
    """
    origins_list = settings.get_cors_origins()
    is_wildcard_only = origins_list == ["*"]
    if "*" in origins_list and not is_wildcard_only:
        logger.warning("⚠️ CORS: Filtrando '*' de origins porque hay otros origins explícitos.")
        origins_list = [o for o in origins_list if o != "*"]

    cors_config = {
        "allow_origins": origins_list,
        "allow_credentials": not is_wildcard_only,
        "allow_methods": ["GET", "POST", "OPTIONS"],
        "allow_headers": ["*"],
        "max_age": 600,
    }
    logger.info(
        "🌐 CORS origins=%s credentials=%s", origins_list, cors_config["allow_credentials"]
    )
    app_instance.add_middleware(CORSMiddleware, **cors_config)
    return cors_config


def create_app(
    settings: Optional[BaseAppSettings] = None,
    store: Optional[StoreClient] = None,
    cache: Optional[ResponseCache] = None,
) -> FastAPI:
    """
    Construye la aplicación.

    Args:
        settings: configuración; por defecto la del entorno (PYTHON_ENV).
        store: cliente del almacén; por defecto se crea desde DATABASE_URL.
        cache: caché de respuestas; por defecto TTL/tamaño de settings.
    """
    settings = settings or get_settings()
    setup_logging_from_settings(settings)

    app = FastAPI(
        title=f"{settings.app_name} API",
        description="Analítica de descargas de RadioHub",
        version=settings.app_version,
        lifespan=lifespan,
        openapi_tags=openapi_tags,
        default_response_class=UTF8JSONResponse,
    )

    app.state.settings = settings
    app.state.store = store if store is not None else create_store_client_from_settings(settings)
    app.state.response_cache = cache if cache is not None else ResponseCache(
        ttl_seconds=settings.analytics_cache_ttl_seconds,
        max_size=settings.analytics_cache_max_size,
    )
    app.state.clock = None
    app.state.scheduler = None

    # Observabilidad primero; CORS al final para ejecutarse primero (outermost)
    setup_observability(app, http_metrics=settings.http_metrics_enabled)
    _configure_cors(app, settings)

    @app.exception_handler(HTTPException)
    async def http_exception_handler(request: Request, exc: HTTPException):
        """HTTPException con charset UTF-8 explícito."""
        return json_response_utf8(
            content={"detail": exc.detail},
            status_code=exc.status_code,
            headers=getattr(exc, "headers", None),
        )

    from app.routes import router as main_router

    app.include_router(main_router)

    @app.get("/", include_in_schema=False)
    async def root():
        return {"service": settings.app_name, "status": "active"}

    return app


app = create_app()


if __name__ == "__main__":
    _settings = get_settings()
    uvicorn.run("app.main:app", host=_settings.app_host, port=_settings.app_port, reload=_settings.is_dev)

# Fin del archivo backend/app/main.py
