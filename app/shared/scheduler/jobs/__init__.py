# -*- coding: utf-8 -*-
"""
backend/app/shared/scheduler/jobs/__init__.py

Jobs programados del sistema.

Autor: RadioHub
Fecha: 2026-09-04
"""

from .cache_cleanup_job import (
    CACHE_SWEEP_JOB_ID,
    cleanup_cache,
    register_cache_sweep_job,
)

__all__ = [
    "CACHE_SWEEP_JOB_ID",
    "cleanup_cache",
    "register_cache_sweep_job",
]
