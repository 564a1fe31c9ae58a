# -*- coding: utf-8 -*-
"""
backend/app/modules/auth/models/user_models.py

Modelo de usuarios (AppUser).

RadioHub delega autenticación a un servicio externo; aquí sólo se consulta
el usuario para copiar email, nombre y rol en cada evento de descarga.

Autor: RadioHub
Fecha: 2026-09-05
"""

from __future__ import annotations

from datetime import datetime
from typing import Optional

from sqlalchemy import DateTime, String, func
from sqlalchemy.orm import Mapped, mapped_column

from app.shared.database import Base


class AppUser(Base):
    __tablename__ = "app_users"

    # Id emitido por el proveedor de identidad (no necesariamente UUID)
    id: Mapped[str] = mapped_column(String(255), primary_key=True)
    email: Mapped[Optional[str]] = mapped_column(String(320), unique=True, nullable=True)
    first_name: Mapped[Optional[str]] = mapped_column(String(120), nullable=True)
    last_name: Mapped[Optional[str]] = mapped_column(String(120), nullable=True)
    role: Mapped[str] = mapped_column(String(50), nullable=False, default="user")
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), nullable=False
    )

    @property
    def full_name(self) -> str:
        parts = [p for p in (self.first_name, self.last_name) if p]
        return " ".join(parts)

    def __repr__(self) -> str:
        return f"<AppUser id={self.id!r} email={self.email!r} role={self.role}>"


__all__ = ["AppUser"]

# Fin del archivo backend/app/modules/auth/models/user_models.py
