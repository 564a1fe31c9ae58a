# -*- coding: utf-8 -*-
"""
backend/app/modules/files/models/download_log_models.py

Bitácora append-only de descargas (fuente de toda la analítica).

Alineación con DB:
- Tabla `download_logs`. Una fila por intento de descarga; nunca se
  actualiza ni se borra.
- Los datos del usuario (email, nombre, rol) se copian al momento del
  evento para que los reportes no dependan del estado actual del usuario.
- `user_id = "anonymous"` identifica descargas sin sesión.
- `entity_type` / `entity_id` son copia del dueño del archivo al momento
  de la descarga.

Campos clave:
- download_size: bytes transferidos
- download_duration: milisegundos
- download_status: completed | failed | partial

Autor: RadioHub
Fecha: 2026-09-05
"""

from __future__ import annotations

from datetime import datetime
from typing import Optional
from uuid import UUID, uuid4

from sqlalchemy import DateTime, ForeignKey, Index, Integer, String, Text, Uuid
from sqlalchemy.orm import Mapped, mapped_column
from sqlalchemy.sql import func

from app.shared.database import Base
from app.modules.files.enums import DownloadStatus


class DownloadLog(Base):
    """
    Evento de descarga de un archivo.
    """
    __tablename__ = "download_logs"

    id: Mapped[UUID] = mapped_column(Uuid(as_uuid=True), primary_key=True, default=uuid4)

    file_id: Mapped[UUID] = mapped_column(
        Uuid(as_uuid=True),
        ForeignKey("files.id", ondelete="CASCADE"),
        nullable=False,
    )

    # Snapshot del usuario al momento del evento
    user_id: Mapped[str] = mapped_column(String(255), nullable=False)
    user_email: Mapped[str] = mapped_column(String(320), nullable=False)
    user_name: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)
    user_role: Mapped[Optional[str]] = mapped_column(String(50), nullable=True)

    ip_address: Mapped[Optional[str]] = mapped_column(String(64), nullable=True)
    user_agent: Mapped[Optional[str]] = mapped_column(Text, nullable=True)

    download_size: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    download_duration: Mapped[Optional[int]] = mapped_column(Integer, nullable=True)
    download_status: Mapped[str] = mapped_column(
        String(20), nullable=False, default=DownloadStatus.completed.value
    )

    entity_type: Mapped[str] = mapped_column(String(50), nullable=False)
    entity_id: Mapped[UUID] = mapped_column(Uuid(as_uuid=True), nullable=False)
    referer_page: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)

    downloaded_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        server_default=func.now(),
        nullable=False,
    )

    __table_args__ = (
        Index("ix_download_logs_downloaded_at", "downloaded_at"),
        Index("ix_download_logs_file_id", "file_id"),
        Index("ix_download_logs_user_id", "user_id"),
    )

    def __repr__(self) -> str:
        return (
            f"<DownloadLog id={self.id} file_id={self.file_id} user_id={self.user_id!r} "
            f"status={self.download_status} at={self.downloaded_at}>"
        )


__all__ = ["DownloadLog"]

# Fin del archivo backend/app/modules/files/models/download_log_models.py
