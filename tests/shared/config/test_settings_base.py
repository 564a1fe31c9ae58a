# -*- coding: utf-8 -*-
import pytest
from pydantic import ValidationError

from app.shared.config.settings_base import BaseAppSettings, normalize_database_url


@pytest.mark.parametrize(
    "raw,expected",
    [
        ("postgres://u:p@h:5432/db", "postgresql+asyncpg://u:p@h:5432/db"),
        ("postgresql://u:p@h:5432/db", "postgresql+asyncpg://u:p@h:5432/db"),
        ("postgresql+asyncpg://u:p@h/db", "postgresql+asyncpg://u:p@h/db"),
        ("sqlite:///./local.db", "sqlite+aiosqlite:///./local.db"),
        ("  ", None),
        (None, None),
    ],
)
def test_normalize_database_url(raw, expected):
    assert normalize_database_url(raw) == expected


def test_database_url_is_optional():
    s = BaseAppSettings()
    assert s.database_url is None
    assert s.database_configured is False


def test_database_url_from_env_is_normalized(monkeypatch):
    monkeypatch.setenv("DATABASE_URL", "postgres://u:p@h:5432/radiohub")
    s = BaseAppSettings()
    assert s.database_url == "postgresql+asyncpg://u:p@h:5432/radiohub"
    assert s.database_configured is True


def test_analytics_defaults():
    s = BaseAppSettings()
    assert s.analytics_cache_ttl_seconds == 300
    assert s.analytics_cache_max_size == 100
    assert s.analytics_cache_sweep_seconds == 60
    assert s.default_page_size == 20
    assert s.max_page_size == 100


def test_cache_ttl_must_be_positive(monkeypatch):
    monkeypatch.setenv("ANALYTICS_CACHE_TTL_SECONDS", "0")
    with pytest.raises(ValidationError):
        BaseAppSettings()


def test_cors_origins_parsing_list(monkeypatch):
    monkeypatch.setenv("CORS_ORIGINS", "https://a.com, https://b.com , 'http://localhost:8080'")
    s = BaseAppSettings()
    assert s.get_cors_origins() == ["https://a.com", "https://b.com", "http://localhost:8080"]


def test_cors_origins_wildcard(monkeypatch):
    monkeypatch.setenv("CORS_ORIGINS", "*")
    s = BaseAppSettings()
    assert s.get_cors_origins() == ["*"]
