# -*- coding: utf-8 -*-
"""
backend/app/shared/database/database.py

Construcción del engine SQLAlchemy async a partir de DATABASE_URL.

- postgresql+asyncpg: timeouts de conexión/consulta vía connect_args.
- sqlite+aiosqlite: check_same_thread=False (tests y desarrollo local).
- Sin URL, o con una URL que no se puede construir (driver ausente, esquema
  inválido): StoreClient desconectado. Nunca se tumba el proceso.

Provee:
- create_store_client(url, ...)
- create_store_client_from_settings(settings)
- check_database_health(store)

Autor: RadioHub
Fecha: 2026-09-02
"""

from __future__ import annotations

import logging
from typing import Any, Dict, Optional

from sqlalchemy.exc import ArgumentError
from sqlalchemy.ext.asyncio import create_async_engine
from sqlalchemy.pool import NullPool

from app.shared.config.settings_base import BaseAppSettings, normalize_database_url
from app.shared.database.base import Base  # reutilizamos la Base única
from app.shared.database.store_client import StoreClient, StoreUnavailableError

logger = logging.getLogger(__name__)


def _connect_args_for(url: str, connect_timeout_s: float) -> Dict[str, Any]:
    if url.startswith("postgresql+asyncpg"):
        return {
            "timeout": connect_timeout_s,          # timeout de conexión
            "command_timeout": connect_timeout_s,  # timeout por consulta
            "server_settings": {"search_path": "public"},
        }
    if url.startswith("sqlite"):
        return {"check_same_thread": False}
    return {}


def _redact(url: str) -> str:
    # Oculta credenciales para logs: esquema://***@host/db
    if "@" not in url:
        return url
    scheme, _, rest = url.partition("://")
    return f"{scheme}://***@{rest.split('@', 1)[1]}"


def create_store_client(
    url: Optional[str],
    *,
    echo: bool = False,
    connect_timeout_s: float = 5.0,
    pool_pre_ping: bool = True,
) -> StoreClient:
    """
    Crea un StoreClient. Si no hay URL o el engine no se puede construir,
    devuelve un cliente desconectado y deja constancia en el log.
    """
    url = normalize_database_url(url)
    if not url:
        logger.warning("[store] DATABASE_URL ausente: analítica en modo degradado")
        return StoreClient(None)

    kwargs: Dict[str, Any] = {
        "echo": echo,
        "connect_args": _connect_args_for(url, connect_timeout_s),
    }
    if url.startswith("sqlite"):
        # Archivo SQLite: una conexión por operación evita locks entre sesiones
        kwargs["poolclass"] = NullPool
    else:
        kwargs["pool_pre_ping"] = pool_pre_ping

    try:
        engine = create_async_engine(url, **kwargs)
    except (ArgumentError, ImportError, ValueError) as e:
        logger.error("[store] No se pudo crear el engine para %s: %s", _redact(url), e)
        return StoreClient(None)

    logger.info("[store] Engine creado → %s (echo=%s)", _redact(url), echo)
    return StoreClient(engine)


def create_store_client_from_settings(settings: BaseAppSettings) -> StoreClient:
    return create_store_client(
        settings.database_url,
        echo=settings.db_echo_sql,
        connect_timeout_s=settings.db_connect_timeout_s,
        pool_pre_ping=settings.db_pool_pre_ping,
    )


async def check_database_health(store: StoreClient, timeout_s: float = 3.0) -> Dict[str, bool]:
    """
    Verifica conectividad a la base de datos.

    Returns:
        {"configured": bool, "reachable": bool}
    """
    reachable = await store.ping(timeout_s=timeout_s) if store.connected else False
    return {"configured": store.connected, "reachable": reachable}


__all__ = [
    "Base",
    "StoreClient",
    "StoreUnavailableError",
    "create_store_client",
    "create_store_client_from_settings",
    "check_database_health",
]
# Fin del archivo backend/app/shared/database/database.py
