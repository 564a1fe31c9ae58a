# -*- coding: utf-8 -*-
"""
backend/app/shared/database/base.py

Metadata única de RadioHub (users, projects, episodes, scripts, files,
download_logs). Los constraints sin nombre explícito reciben uno
estable, así las migraciones no dependen del autogenerado del motor.

Autor: RadioHub
Fecha: 2026-09-02
"""

from __future__ import annotations

from sqlalchemy import MetaData
from sqlalchemy.orm import DeclarativeBase

radiohub_metadata = MetaData(
    naming_convention={
        "pk": "pk_%(table_name)s",
        "fk": "fk_%(table_name)s_%(column_0_name)s_%(referred_table_name)s",
        "uq": "uq_%(table_name)s_%(column_0_name)s",
        "ck": "ck_%(table_name)s_%(constraint_name)s",
        "ix": "ix_%(column_0_label)s",
    }
)


class Base(DeclarativeBase):
    metadata = radiohub_metadata


__all__ = ["Base", "radiohub_metadata"]
# Fin del archivo backend/app/shared/database/base.py
