# -*- coding: utf-8 -*-
"""
backend/app/modules/auth/services/__init__.py
"""

from .actor_service import ANONYMOUS_ACTOR, DownloadActor, actor_from_user, resolve_actor

__all__ = ["ANONYMOUS_ACTOR", "DownloadActor", "actor_from_user", "resolve_actor"]
