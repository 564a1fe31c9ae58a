# -*- coding: utf-8 -*-
"""
backend/app/modules/files/models/file_models.py

Catálogo de archivos subidos a RadioHub.

Alineación con DB:
- Tabla `files`. El contenido viaja en `file_data` (base64); la codificación
  de almacenamiento es responsabilidad de la capa de subida.
- `entity_type` / `entity_id` apuntan al dueño: un proyecto, episodio o guion.
- `download_count` y `last_accessed_at` son contadores informativos que se
  actualizan al servir una descarga. La analítica NO los usa: recalcula
  siempre desde download_logs.
- `is_active=False` es borrado lógico.

Autor: RadioHub
Fecha: 2026-09-05
"""

from __future__ import annotations

from datetime import datetime
from typing import Optional
from uuid import UUID, uuid4

from sqlalchemy import Boolean, DateTime, Index, Integer, String, Text, Uuid
from sqlalchemy.orm import Mapped, mapped_column
from sqlalchemy.sql import func

from app.shared.database import Base


class File(Base):
    __tablename__ = "files"

    id: Mapped[UUID] = mapped_column(Uuid(as_uuid=True), primary_key=True, default=uuid4)
    filename: Mapped[str] = mapped_column(String(255), nullable=False)
    original_name: Mapped[str] = mapped_column(String(255), nullable=False)
    mime_type: Mapped[str] = mapped_column(String(255), nullable=False, default="application/octet-stream")
    file_size: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    file_data: Mapped[Optional[str]] = mapped_column(Text, nullable=True)

    # Dueño polimórfico (projects | episodes | scripts, o su forma singular)
    entity_type: Mapped[str] = mapped_column(String(50), nullable=False)
    entity_id: Mapped[UUID] = mapped_column(Uuid(as_uuid=True), nullable=False)

    uploaded_by: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)
    is_active: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)

    download_count: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    last_accessed_at: Mapped[Optional[datetime]] = mapped_column(DateTime(timezone=True), nullable=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), nullable=False
    )

    __table_args__ = (
        Index("ix_files_entity", "entity_type", "entity_id"),
    )

    def __repr__(self) -> str:
        return f"<File id={self.id} filename={self.filename!r} entity={self.entity_type}:{self.entity_id}>"


__all__ = ["File"]

# Fin del archivo backend/app/modules/files/models/file_models.py
