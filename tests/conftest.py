# backend/tests/conftest.py
# -*- coding: utf-8 -*-
"""
Config global de tests para RadioHub.

- PYTHON_ENV=test y sin DATABASE_URL antes de importar la app: el módulo
  app.main arma una app "desconectada" al importarse.
- Cada test que necesita BD recibe un StoreClient sobre un archivo SQLite
  propio (tmp_path) con el esquema creado desde Base.metadata.
- FixedClock fija "ahora" para el motor de agregación.
- `seed` inserta catálogo y eventos con timestamps UTC explícitos.
"""

import os
from collections.abc import AsyncIterator
from datetime import datetime, timedelta, timezone
from typing import Optional

import pytest

os.environ["PYTHON_ENV"] = "test"
os.environ.pop("DATABASE_URL", None)

from httpx import AsyncClient, ASGITransport

from app.shared.cache import ResponseCache
from app.shared.config.settings_testing import EnvTestingSettings
from app.shared.database import Base, StoreClient, create_store_client
from app.modules.auth.models import AppUser
from app.modules.files.models import DownloadLog, File
from app.modules.projects.models import Episode, Project, Script

NOW = datetime(2026, 9, 15, 12, 0, 0, tzinfo=timezone.utc)


class FixedClock:
    """Reloj controlable: devuelve siempre `now` hasta que se avance."""

    def __init__(self, now: datetime = NOW):
        self.now = now

    def __call__(self) -> datetime:
        return self.now

    def advance(self, **delta) -> None:
        self.now = self.now + timedelta(**delta)


class MonotonicStub:
    """Reloj en segundos para ResponseCache."""

    def __init__(self, start: float = 1000.0):
        self.value = start

    def __call__(self) -> float:
        return self.value

    def advance(self, seconds: float) -> None:
        self.value += seconds


class Seeder:
    """Inserta filas de catálogo y eventos en el almacén de pruebas."""

    def __init__(self, store: StoreClient):
        self.store = store

    async def add(self, *rows):
        async with self.store.session() as session:
            session.add_all(rows)
            await session.commit()
        return rows[0] if len(rows) == 1 else rows

    async def project(self, name: str = "Morning Show", description: Optional[str] = None) -> Project:
        return await self.add(Project(name=name, description=description))

    async def episode(self, project: Project, title: str = "Episode 1", number: int = 1) -> Episode:
        return await self.add(Episode(project_id=project.id, title=title, episode_number=number))

    async def script(self, project: Project, title: str = "Script 1") -> Script:
        return await self.add(Script(project_id=project.id, title=title))

    async def file(
        self,
        entity_type: str,
        entity_id,
        *,
        filename: str = "audio.mp3",
        original_name: Optional[str] = None,
        size: int = 100,
        data: Optional[str] = None,
        active: bool = True,
        mime_type: str = "audio/mpeg",
    ) -> File:
        return await self.add(
            File(
                filename=filename,
                original_name=original_name or filename,
                mime_type=mime_type,
                file_size=size,
                file_data=data,
                entity_type=entity_type,
                entity_id=entity_id,
                is_active=active,
            )
        )

    async def user(self, user_id: str, email: str, first: str = "", last: str = "", role: str = "user") -> AppUser:
        return await self.add(
            AppUser(id=user_id, email=email, first_name=first or None, last_name=last or None, role=role)
        )

    async def event(
        self,
        file: File,
        *,
        at: datetime,
        user_id: str = "u1",
        email: Optional[str] = None,
        name: Optional[str] = None,
        role: str = "user",
        size: Optional[int] = None,
        status: str = "completed",
    ) -> DownloadLog:
        return await self.add(
            DownloadLog(
                file_id=file.id,
                user_id=user_id,
                user_email=email or f"{user_id}@radiohub.test",
                user_name=name or user_id.upper(),
                user_role=role,
                download_size=file.file_size if size is None else size,
                download_status=status,
                entity_type=file.entity_type,
                entity_id=file.entity_id,
                referer_page="direct",
                downloaded_at=at,
            )
        )


@pytest.fixture
def clock() -> FixedClock:
    return FixedClock()


@pytest.fixture
async def store(tmp_path) -> AsyncIterator[StoreClient]:
    client = create_store_client(f"sqlite+aiosqlite:///{tmp_path / 'analytics.db'}")
    assert client.connected
    async with client.engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield client
    await client.dispose()


@pytest.fixture
def offline_store() -> StoreClient:
    return StoreClient(None)


@pytest.fixture
def seed(store) -> Seeder:
    return Seeder(store)


@pytest.fixture
def test_settings() -> EnvTestingSettings:
    return EnvTestingSettings()


@pytest.fixture
def cache_clock() -> MonotonicStub:
    return MonotonicStub()


@pytest.fixture
def response_cache(cache_clock) -> ResponseCache:
    return ResponseCache(ttl_seconds=300, max_size=100, clock=cache_clock)


def build_app(settings, store, cache, clock=None):
    from app.main import create_app

    fastapi_app = create_app(settings=settings, store=store, cache=cache)
    fastapi_app.state.clock = clock
    return fastapi_app


@pytest.fixture
def app_factory():
    return build_app


@pytest.fixture
def app(test_settings, store, response_cache, clock):
    return build_app(test_settings, store, response_cache, clock)


@pytest.fixture
def offline_app(test_settings, offline_store, response_cache, clock):
    return build_app(test_settings, offline_store, response_cache, clock)


@pytest.fixture
async def async_client(app) -> AsyncIterator[AsyncClient]:
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://testserver") as client:
        yield client


@pytest.fixture
async def offline_client(offline_app) -> AsyncIterator[AsyncClient]:
    transport = ASGITransport(app=offline_app)
    async with AsyncClient(transport=transport, base_url="http://testserver") as client:
        yield client

# Fin del archivo backend/tests/conftest.py
