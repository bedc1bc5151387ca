"""Configuration management for the AML registrar.

Configuration is loaded from environment variables, one prefix per section.
"""

from __future__ import annotations

from enum import StrEnum
from functools import lru_cache
from urllib.parse import parse_qsl, urlencode, urlsplit, urlunsplit

from pydantic import Field, SecretStr, field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from aml_registrar.utils.constants import DEFAULT_ACCEPTED_RISK_SCORE, MAX_RISK_LEVEL

POSTGRESQL_PREFIX = "postgresql://"
ASYNCPG_DRIVER = "+asyncpg"
ENGINE_OPTION_QUERY_KEYS = frozenset({"pool_size", "max_overflow", "pool_timeout", "pool_recycle"})


def normalize_database_url(url: str) -> str:
    """Strip SQLAlchemy engine options accidentally passed in DATABASE_URL query args."""
    url = url.strip()
    if "?" not in url:
        return url

    parsed = urlsplit(url)
    if not parsed.query:
        return url

    filtered_query = [
        (key, value)
        for key, value in parse_qsl(parsed.query, keep_blank_values=True)
        if key.lower() not in ENGINE_OPTION_QUERY_KEYS
    ]
    return urlunsplit(
        (
            parsed.scheme,
            parsed.netloc,
            parsed.path,
            urlencode(filtered_query, doseq=True),
            parsed.fragment,
        )
    )


def to_asyncpg_url(url: str) -> str:
    """Return a SQLAlchemy URL compatible with the asyncpg dialect."""
    normalized = normalize_database_url(url)
    if normalized.startswith("postgresql+psycopg://"):
        return normalized.replace("+psycopg", ASYNCPG_DRIVER, 1)
    if normalized.startswith(POSTGRESQL_PREFIX):
        return normalized.replace(POSTGRESQL_PREFIX, f"postgresql{ASYNCPG_DRIVER}://", 1)
    return normalized


class AppEnvironment(StrEnum):
    LOCAL = "local"
    TEST = "test"
    PROD = "prod"


class LogLevel(StrEnum):
    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"
    CRITICAL = "CRITICAL"


class AppConfig(BaseSettings):
    name: str = Field(default="aml-registrar")
    env: AppEnvironment = Field(default=AppEnvironment.LOCAL)
    version: str = Field(default="0.1.0")
    log_level: LogLevel = Field(default=LogLevel.INFO)

    model_config = SettingsConfigDict(env_prefix="APP_")

    @field_validator("log_level", mode="before")
    @classmethod
    def validate_log_level(cls, v: str | LogLevel) -> LogLevel:
        if isinstance(v, LogLevel):
            return v
        return LogLevel(v.upper())


class ObservabilityConfig(BaseSettings):
    service_name: str = Field(default="aml-registrar")
    log_record_format: str = Field(default="json")

    model_config = SettingsConfigDict(env_prefix="OBSERVABILITY_")

    @field_validator("log_record_format", mode="after")
    @classmethod
    def validate_log_record_format(cls, v: str) -> str:
        v = v.strip().lower()
        if v not in ("json", "console"):
            raise ValueError(f"Unsupported log record format: {v}")
        return v


class DatabaseConfig(BaseSettings):
    url_app: str = Field(default="", alias="database_url_app")
    url_admin: str = Field(default="", alias="database_url_admin")

    host: str = Field(default="localhost")
    port: int = Field(default=5432)
    name: str = Field(default="aml")
    user: str = Field(default="postgres")
    password: SecretStr = Field(default=SecretStr(""))
    echo: bool = Field(default=False)

    model_config = SettingsConfigDict(
        env_prefix="DATABASE_",
        populate_by_name=True,
    )

    @property
    def async_url(self) -> str:
        if self.url_app:
            return to_asyncpg_url(self.url_app)
        password = self.password.get_secret_value()
        return (
            f"postgresql{ASYNCPG_DRIVER}://{self.user}:{password}"
            f"@{self.host}:{self.port}/{self.name}"
        )

    @property
    def admin_async_url(self) -> str:
        if self.url_admin:
            return to_asyncpg_url(self.url_admin)
        return self.async_url


class RegistrarConfig(BaseSettings):
    """Defaults used when a host creates a fresh registrar."""

    default_authority: str = Field(default="")
    default_accepted_risk_score: int = Field(default=DEFAULT_ACCEPTED_RISK_SCORE)

    model_config = SettingsConfigDict(env_prefix="AML_")

    @field_validator("default_accepted_risk_score", mode="after")
    @classmethod
    def validate_default_accepted_risk_score(cls, v: int) -> int:
        if not 0 < v <= MAX_RISK_LEVEL:
            raise ValueError(f"Accepted risk score must be in 1..{MAX_RISK_LEVEL}, got {v}")
        return v


class Settings(BaseSettings):
    app: AppConfig = Field(default_factory=AppConfig)
    observability: ObservabilityConfig = Field(default_factory=ObservabilityConfig)
    database: DatabaseConfig = Field(default_factory=DatabaseConfig)
    registrar: RegistrarConfig = Field(default_factory=RegistrarConfig)

    @model_validator(mode="after")
    def validate_production_settings(self) -> Settings:
        if self.app.env == AppEnvironment.PROD and not self.registrar.default_authority:
            raise ValueError("AML_DEFAULT_AUTHORITY must be set in production environment")
        return self


@lru_cache
def get_settings() -> Settings:
    return Settings()


def reload_settings() -> Settings:
    get_settings.cache_clear()
    return get_settings()
