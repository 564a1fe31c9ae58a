# -*- coding: utf-8 -*-
from app.shared.config.settings_dev import DevSettings
from app.shared.config.settings_prod import ProdSettings
from app.shared.config.settings_testing import EnvTestingSettings


def test_dev_overrides_defaults():
    s = DevSettings()
    assert s.is_dev
    assert s.log_level.upper() == "DEBUG"
    assert s.log_format in ("plain", "pretty")
    assert s.analytics_cache_ttl_seconds == 60


def test_test_overrides_defaults(monkeypatch):
    monkeypatch.setenv("PYTHON_ENV", "test")
    s = EnvTestingSettings()
    assert s.is_test
    assert s.log_level.upper() == "WARNING"
    assert s.scheduler_enabled is False
    assert s.database_configured is False


def test_test_settings_accept_injected_database_url(monkeypatch):
    monkeypatch.setenv("DATABASE_URL", "sqlite:///./radiohub_test.db")
    s = EnvTestingSettings()
    assert s.database_url == "sqlite+aiosqlite:///./radiohub_test.db"


def test_prod_overrides_defaults(monkeypatch):
    monkeypatch.setenv("PYTHON_ENV", "production")
    s = ProdSettings()
    assert s.is_prod
    assert s.log_level.upper() == "INFO"
    assert s.log_format == "json"
    assert s.analytics_cache_ttl_seconds == 300


def test_prod_respects_env_overrides(monkeypatch):
    monkeypatch.setenv("LOG_LEVEL", "WARNING")
    monkeypatch.setenv("ANALYTICS_CACHE_TTL_SECONDS", "120")
    s = ProdSettings()
    assert s.log_level == "WARNING"
    assert s.analytics_cache_ttl_seconds == 120

# Fin del archivo backend/tests/shared/config/test_settings_envs.py
