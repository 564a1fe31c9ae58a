# -*- coding: utf-8 -*-
"""
backend/app/modules/files/enums/entity_type_enum.py

Tipo de entidad dueña de un archivo (y copiada en cada evento de descarga).

Los valores canónicos son plurales; el catálogo histórico también contiene
formas singulares, que se aceptan como aliases.

Autor: RadioHub
Fecha: 2026-09-05
"""

from __future__ import annotations

from typing import Tuple

from .compat_base import TokenEnum


class EntityType(TokenEnum):
    projects = "projects"
    episodes = "episodes"
    scripts = "scripts"

    # Aliases singulares
    project = projects
    episode = episodes
    script = scripts

    @property
    def singular(self) -> str:
        return self.value[:-1]

    @property
    def tokens(self) -> Tuple[str, str]:
        """Valores que pueden aparecer en BD para este tipo (plural y singular)."""
        return (self.value, self.singular)


__all__ = ["EntityType"]
