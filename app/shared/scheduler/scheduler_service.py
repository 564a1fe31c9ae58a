# -*- coding: utf-8 -*-
"""
backend/app/shared/scheduler/scheduler_service.py

Envoltura mínima de APScheduler (AsyncIOScheduler) para los jobs de
mantenimiento de RadioHub.

La app crea una instancia por lifespan: el scheduler queda ligado al event
loop que sirve las peticiones y se apaga junto con él. Hoy el único job es
el barrido del caché de reportes (jobs/cache_cleanup_job.py).

Autor: RadioHub
Fecha: 2026-09-04
"""

import logging
from typing import Any, Callable, Dict, Optional

from apscheduler.executors.asyncio import AsyncIOExecutor
from apscheduler.job import Job
from apscheduler.jobstores.base import JobLookupError
from apscheduler.jobstores.memory import MemoryJobStore
from apscheduler.schedulers.asyncio import AsyncIOScheduler
from apscheduler.triggers.interval import IntervalTrigger

logger = logging.getLogger(__name__)


def _describe(job: Job) -> Dict[str, Any]:
    return {
        "id": job.id,
        "name": job.name,
        "next_run": getattr(job, "next_run_time", None),
        "trigger": str(job.trigger),
    }


class SchedulerService:
    """
    Jobs por intervalo, en memoria y en UTC.

    - coalesce: si el loop estuvo ocupado, las ejecuciones atrasadas se
      funden en una sola
    - max_instances=1: un barrido no se solapa con el siguiente
    """

    def __init__(self, misfire_grace_time: int = 30):
        self._scheduler = AsyncIOScheduler(
            jobstores={"default": MemoryJobStore()},
            executors={"default": AsyncIOExecutor()},
            job_defaults={
                "coalesce": True,
                "max_instances": 1,
                "misfire_grace_time": misfire_grace_time,
            },
            timezone="UTC",
        )
        self._started = False

    def start(self) -> None:
        """Requiere un event loop en ejecución (llamar desde el lifespan)."""
        if self._started:
            return
        self._scheduler.start()
        self._started = True
        logger.info("[scheduler] started with %d job(s)", len(self._scheduler.get_jobs()))

    def shutdown(self, wait: bool = True) -> None:
        if not self._started:
            return
        self._scheduler.shutdown(wait=wait)
        self._started = False
        logger.info("[scheduler] stopped")

    def add_interval_job(self, func: Callable, job_id: str, *, seconds: int, **kwargs: Any) -> str:
        """
        Programa `func(**kwargs)` cada `seconds`. Un job con el mismo id se
        reemplaza.
        """
        if seconds <= 0:
            raise ValueError("seconds must be positive")
        self._scheduler.add_job(
            func=func,
            trigger=IntervalTrigger(seconds=seconds),
            id=job_id,
            name=job_id,
            replace_existing=True,
            kwargs=kwargs,
        )
        logger.info("[scheduler] job '%s' every %ss", job_id, seconds)
        return job_id

    def remove_job(self, job_id: str) -> bool:
        try:
            self._scheduler.remove_job(job_id)
        except JobLookupError:
            logger.warning("[scheduler] cannot remove job '%s': not found", job_id)
            return False
        logger.info("[scheduler] job '%s' removed", job_id)
        return True

    def get_job_status(self, job_id: str) -> Optional[Dict[str, Any]]:
        job = self._scheduler.get_job(job_id)
        return _describe(job) if job is not None else None

    @property
    def is_running(self) -> bool:
        return self._started and self._scheduler.running


__all__ = ["SchedulerService"]

# Fin del archivo backend/app/shared/scheduler/scheduler_service.py
