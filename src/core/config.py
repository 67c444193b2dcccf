"""Application configuration using Pydantic Settings."""

import logging
from functools import lru_cache

from pydantic import Field, computed_field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Hours API settings, read from the environment and an optional ``.env``."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    app_name: str = Field(default="Hours API")
    app_env: str = Field(default="development")
    debug: bool = Field(default=False)

    host: str = Field(default="0.0.0.0")
    port: int = Field(default=8000)

    # Database
    database_url: str = Field(
        default="postgresql+asyncpg://localhost:5432/hours",
        description="PostgreSQL URL; a plain postgresql:// scheme is accepted",
    )
    database_pool_size: int = Field(default=5, ge=1)
    database_max_overflow: int = Field(default=10, ge=0)
    database_echo: bool = Field(default=False, description="Log every SQL statement")

    # Bearer tokens
    jwt_secret_key: str = Field(default="CHANGE-ME-IN-PRODUCTION")
    jwt_algorithm: str = Field(default="HS256")
    jwt_expire_minutes: int = Field(default=30, ge=1)

    log_level: str = Field(default="INFO")
    log_json: bool | None = Field(
        default=None,
        description="Render logs as JSON; unset means JSON in production only",
    )

    # Per client address; slowapi limit strings
    rate_limit_enabled: bool = Field(default=True)
    rate_limit_read: str = Field(default="30/minute")
    rate_limit_write: str = Field(default="10/minute")

    cors_origins: str = Field(
        default="http://localhost:3000,http://localhost:5173",
        description="Comma-separated list of allowed origins",
    )

    @field_validator("log_level")
    @classmethod
    def _known_log_level(cls, value: str) -> str:
        level = value.upper()
        if not isinstance(logging.getLevelName(level), int):
            raise ValueError(f"unknown log level: {value}")
        return level

    @computed_field  # type: ignore[prop-decorator]
    @property
    def async_database_url(self) -> str:
        """``database_url`` with the asyncpg driver the async engine needs."""
        scheme, sep, rest = self.database_url.partition("://")
        if scheme in ("postgres", "postgresql"):
            return f"postgresql+asyncpg{sep}{rest}"
        return self.database_url

    @computed_field  # type: ignore[prop-decorator]
    @property
    def is_production(self) -> bool:
        return self.app_env == "production"

    @computed_field  # type: ignore[prop-decorator]
    @property
    def cors_origins_list(self) -> list[str]:
        return [origin.strip() for origin in self.cors_origins.split(",") if origin.strip()]


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()


settings = get_settings()
