# -*- coding: utf-8 -*-
"""
backend/app/modules/auth/services/actor_service.py

Resolución del actor de una descarga.

Cada evento de descarga guarda una copia de la identidad del usuario
(id, email, nombre, rol). Si el request no trae usuario, o el usuario no
existe en app_users, o el almacén no está disponible, se usa el visitante
anónimo.

Autor: RadioHub
Fecha: 2026-09-12
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional

from sqlalchemy.exc import SQLAlchemyError

from app.shared.database import StoreClient
from app.modules.auth.models import AppUser

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class DownloadActor:
    user_id: str
    email: str
    name: str
    role: str

    @property
    def is_anonymous(self) -> bool:
        return self.user_id == ANONYMOUS_ACTOR.user_id


ANONYMOUS_ACTOR = DownloadActor(
    user_id="anonymous",
    email="anonymous@unknown.com",
    name="Anonymous User",
    role="visitor",
)


def actor_from_user(user: AppUser) -> DownloadActor:
    email = user.email or ANONYMOUS_ACTOR.email
    return DownloadActor(
        user_id=str(user.id),
        email=email,
        name=user.full_name or email,
        role=user.role or "user",
    )


async def resolve_actor(store: StoreClient, user_id: Optional[str]) -> DownloadActor:
    """
    Busca `user_id` en app_users.

    Returns:
        DownloadActor del usuario, o ANONYMOUS_ACTOR si no hay id, no existe
        o el almacén no responde.
    """
    user_id = (user_id or "").strip()
    if not user_id or not store.connected:
        return ANONYMOUS_ACTOR

    try:
        async with store.session() as session:
            user = await session.get(AppUser, user_id)
            actor = actor_from_user(user) if user is not None else None
    except SQLAlchemyError:
        logger.warning("[download_tracking] user lookup failed for id=%s", user_id, exc_info=True)
        return ANONYMOUS_ACTOR

    if actor is None:
        logger.debug("[download_tracking] unknown user id=%s, tracking as anonymous", user_id)
        return ANONYMOUS_ACTOR
    return actor


__all__ = ["DownloadActor", "ANONYMOUS_ACTOR", "actor_from_user", "resolve_actor"]

# Fin del archivo backend/app/modules/auth/services/actor_service.py
