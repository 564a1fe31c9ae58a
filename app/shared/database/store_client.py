# -*- coding: utf-8 -*-
"""
backend/app/shared/database/store_client.py

Cliente del almacén relacional (eventos de descarga + catálogo).

El backend puede arrancar sin DATABASE_URL. En ese caso el StoreClient queda
"desconectado": `connected` es False y `session()` lanza StoreUnavailableError,
que la capa de analítica traduce a respuestas en cero.

Provee:
- StoreClient.connected: ¿hay engine configurado?
- StoreClient.session(): context manager async con rollback en error; al
  salir, el cierre descarta lo no confirmado sin expirar las instancias
  cargadas (siguen legibles fuera del bloque)
- StoreClient.ping(): verificación de conectividad con timeout
- StoreClient.dispose(): cierre ordenado del engine

Autor: RadioHub
Fecha: 2026-09-02
"""

from __future__ import annotations

import asyncio
import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator, Optional

from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker

logger = logging.getLogger(__name__)


class StoreUnavailableError(RuntimeError):
    """El almacén no está configurado o no se pudo construir el engine."""


class StoreClient:
    """Envoltura del AsyncEngine con sonda de disponibilidad."""

    def __init__(self, engine: Optional[AsyncEngine] = None):
        self._engine = engine
        self._sessionmaker: Optional[async_sessionmaker[AsyncSession]] = None
        if engine is not None:
            self._sessionmaker = async_sessionmaker(
                bind=engine,
                expire_on_commit=False,
                class_=AsyncSession,
                autoflush=False,
            )

    @property
    def connected(self) -> bool:
        return self._engine is not None

    @property
    def engine(self) -> Optional[AsyncEngine]:
        return self._engine

    @asynccontextmanager
    async def session(self) -> AsyncIterator[AsyncSession]:
        if self._sessionmaker is None:
            raise StoreUnavailableError("DATABASE_URL no configurada")
        async with self._sessionmaker() as session:
            try:
                yield session
            except SQLAlchemyError:
                # Liberar cualquier transacción abierta antes de propagar
                await session.rollback()
                raise

    async def ping(self, timeout_s: float = 3.0) -> bool:
        """
        Verifica conectividad a la base de datos.

        Returns:
            True si SELECT 1 responde dentro del timeout, False en otro caso
            (incluido el caso sin engine).
        """
        if self._engine is None:
            return False
        try:
            async with asyncio.timeout(timeout_s):
                async with self._engine.connect() as conn:
                    await conn.execute(text("SELECT 1"))
            return True
        except (SQLAlchemyError, OSError, TimeoutError) as e:
            logger.warning("[store] ping failed: %s", e)
            return False

    async def dispose(self) -> None:
        if self._engine is not None:
            await self._engine.dispose()
            logger.info("[store] engine disposed")


__all__ = ["StoreClient", "StoreUnavailableError"]

# Fin del archivo backend/app/shared/database/store_client.py
