# -*- coding: utf-8 -*-
"""
backend/app/shared/scheduler/__init__.py

Sistema de jobs programados usando APScheduler.

Autor: RadioHub
Fecha: 2026-09-04
"""

from .scheduler_service import SchedulerService

__all__ = [
    "SchedulerService",
]
