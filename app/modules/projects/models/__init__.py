# -*- coding: utf-8 -*-
"""
backend/app/modules/projects/models/__init__.py

Modelos del catálogo de producciones.
"""

from .project_models import Project, Episode, Script

__all__ = ["Project", "Episode", "Script"]
