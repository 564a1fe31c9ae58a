# -*- coding: utf-8 -*-
"""
backend/app/modules/auth/dependencies.py

Dependencias de identidad para FastAPI.

RadioHub recibe la identidad ya autenticada aguas arriba en el header
opcional `X-User-Id`. Aquí sólo se resuelve a un DownloadActor.

Autor: RadioHub
Fecha: 2026-09-12
"""

from __future__ import annotations

from typing import Optional

from fastapi import Depends, Header

from app.core.dependencies import get_store
from app.shared.database import StoreClient
from app.modules.auth.services import DownloadActor, resolve_actor

USER_ID_HEADER = "X-User-Id"


async def get_current_actor(
    x_user_id: Optional[str] = Header(None, alias=USER_ID_HEADER),
    store: StoreClient = Depends(get_store),
) -> DownloadActor:
    return await resolve_actor(store, x_user_id)


__all__ = ["USER_ID_HEADER", "get_current_actor"]

# Fin del archivo backend/app/modules/auth/dependencies.py
