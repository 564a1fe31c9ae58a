# -*- coding: utf-8 -*-
"""
backend/app/shared/config/settings_base.py

Base de configuración (Pydantic v2) para RadioHub.
- Esta clase NO instancia singletons ni resuelve .env; eso lo hace config_loader.
- Es la base para settings_dev.py, settings_testing.py y settings_prod.py.

DATABASE_URL es opcional: sin ella el backend arranca igual y los reportes
de analítica responden con sus formas en cero.

Autor: RadioHub
Fecha: 02/09/2026
"""

from typing import Literal, Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


# Tipos de entorno soportados
EnvName = Literal["development", "test", "production"]


def normalize_database_url(url: Optional[str]) -> Optional[str]:
    """
    Normaliza el esquema de DATABASE_URL al driver async correspondiente.

    - postgres:// y postgresql:// -> postgresql+asyncpg://
    - sqlite:// -> sqlite+aiosqlite://
    - Cadena vacía -> None
    """
    if url is None:
        return None
    url = url.strip().strip('"').strip("'")
    if not url:
        return None
    if url.startswith("postgres://"):
        return "postgresql+asyncpg://" + url[len("postgres://"):]
    if url.startswith("postgresql://"):
        return "postgresql+asyncpg://" + url[len("postgresql://"):]
    if url.startswith("sqlite://"):
        return "sqlite+aiosqlite://" + url[len("sqlite://"):]
    return url


class BaseAppSettings(BaseSettings):
    # =========================
    # Núcleo de la aplicación
    # =========================
    python_env: EnvName = Field(default="development", validation_alias="PYTHON_ENV")
    app_name: str = Field(default="RadioHub", validation_alias="APP_NAME")
    app_version: str = Field(default="1.0.0", validation_alias="APP_VERSION")
    app_host: str = Field(default="0.0.0.0", validation_alias="APP_HOST")
    app_port: int = Field(default=8000, validation_alias="APP_PORT")
    debug: bool = Field(default=False, validation_alias="DEBUG")

    # =========================
    # Base de datos (opcional)
    # =========================
    database_url: Optional[str] = Field(default=None, validation_alias="DATABASE_URL")
    db_echo_sql: bool = Field(default=False, validation_alias="DB_ECHO_SQL")
    db_connect_timeout_s: float = Field(default=5.0, validation_alias="DB_CONNECT_TIMEOUT_S")
    db_pool_pre_ping: bool = Field(default=True, validation_alias="DB_POOL_PRE_PING")

    # =========================
    # Caché de respuestas de analítica
    # =========================
    analytics_cache_ttl_seconds: int = Field(default=300, validation_alias="ANALYTICS_CACHE_TTL_SECONDS")
    analytics_cache_max_size: int = Field(default=100, validation_alias="ANALYTICS_CACHE_MAX_SIZE")
    analytics_cache_sweep_seconds: int = Field(default=60, validation_alias="ANALYTICS_CACHE_SWEEP_SECONDS")

    # =========================
    # Paginación de reportes
    # =========================
    default_page_size: int = Field(default=20, validation_alias="DEFAULT_PAGE_SIZE")
    max_page_size: int = Field(default=100, validation_alias="MAX_PAGE_SIZE")

    # =========================
    # Scheduler
    # =========================
    scheduler_enabled: bool = Field(default=True, validation_alias="SCHEDULER_ENABLED")

    # =========================
    # HTTP Metrics (observabilidad)
    # =========================
    http_metrics_enabled: bool = Field(default=True, validation_alias="HTTP_METRICS_ENABLED")

    # =========================
    # CORS / Frontend
    # =========================
    allowed_origins: str = Field(default="*", validation_alias="CORS_ORIGINS")

    # =========================
    # Logging
    # =========================
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = Field(
        default="INFO", validation_alias="LOG_LEVEL"
    )
    log_format: Literal["json", "pretty", "plain"] = Field(default="pretty", validation_alias="LOG_FORMAT")

    # =========================
    # Validadores
    # =========================
    @field_validator("database_url", mode="before")
    @classmethod
    def _normalize_database_url(cls, v):
        return normalize_database_url(v)

    @field_validator("analytics_cache_ttl_seconds", "analytics_cache_sweep_seconds", "max_page_size")
    @classmethod
    def _positive(cls, v: int) -> int:
        if v <= 0:
            raise ValueError("debe ser un entero positivo")
        return v

    # =========================
    # Helpers
    # =========================
    @property
    def is_dev(self) -> bool:
        return self.python_env == "development"

    @property
    def is_test(self) -> bool:
        return self.python_env == "test"

    @property
    def is_prod(self) -> bool:
        return self.python_env == "production"

    @property
    def database_configured(self) -> bool:
        return bool(self.database_url)

    def get_cors_origins(self) -> list[str]:
        """Lista de orígenes CORS a partir de la cadena separada por comas."""
        return [o.strip().strip('"').strip("'") for o in self.allowed_origins.split(",") if o.strip()]

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )


__all__ = ["BaseAppSettings", "EnvName", "normalize_database_url"]

# Fin del archivo backend/app/shared/config/settings_base.py
