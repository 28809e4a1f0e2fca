"""Configuration management for ToolHub.

This module uses Pydantic Settings to load and validate configuration from
environment variables and ``.env.local`` / ``.env`` files. Configuration is
loaded once at application startup and is immutable during runtime.
"""

from functools import lru_cache
from typing import Annotated, Literal

from pydantic import Field, field_validator, model_validator
from pydantic_settings import BaseSettings, NoDecode, SettingsConfigDict
from sqlalchemy.engine import URL

DEFAULT_JWT_SECRET = "change-me-in-production-use-openssl-rand-hex-32"


class Settings(BaseSettings):
    """Application configuration settings.

    Settings are loaded from environment variables and .env files.
    All configuration values are validated at startup.
    """

    model_config = SettingsConfigDict(
        env_file=(".env", ".env.local"),
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
        frozen=True,
    )

    # Application Settings
    app_name: str = "ToolHub"
    app_version: str = "0.1.0"
    environment: Literal["development", "production", "testing"] = "development"
    debug: bool = False
    api_prefix: str = "/api/v1"

    # Server Settings
    host: str = "localhost"
    port: int = 8080
    workers: int = 1

    # Database Settings
    database_url: str | None = Field(
        default=None,
        description="Full SQLAlchemy async URL; overrides the POSTGRES_* settings",
    )
    postgres_host: str = "localhost"
    postgres_port: int = 5432
    postgres_user: str = "postgres"
    postgres_password: str = "postgres"
    postgres_database: str = "toolhub"
    db_pool_size: int = 5
    db_max_overflow: int = 10
    db_pool_timeout: int = 30
    db_pool_recycle: int = 3600
    db_echo: bool = False
    db_auto_create: bool = True

    # Security Settings
    jwt_secret: str = Field(
        default=DEFAULT_JWT_SECRET,
        description="Secret key for JWT token signing",
    )
    jwt_alg: Literal["HS256", "HS384", "HS512"] = "HS256"
    access_token_expire_minutes: int = Field(default=60, gt=0)
    principal_lookup_timeout_seconds: float = Field(default=5.0, gt=0)

    # CORS Settings
    cors_origins: Annotated[list[str], NoDecode] = Field(
        default=["http://localhost:8080", "http://localhost:3000"]
    )
    cors_allow_credentials: bool = True
    cors_allow_methods: list[str] = Field(
        default=["OPTIONS", "GET", "POST", "PATCH", "PUT", "DELETE"]
    )
    cors_allow_headers: list[str] = Field(
        default=["Origin", "Content-Type", "Authorization"]
    )
    cors_max_age: int = 600

    # Logging Settings
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] | None = None
    log_format: Literal["json", "console"] = "json"

    # Bootstrap owner (created on startup if set and missing)
    owner_email: str | None = None
    owner_password: str | None = None
    owner_first_name: str = "Owner"
    owner_last_name: str = "Account"

    @field_validator("cors_origins", mode="before")
    @classmethod
    def parse_cors_origins(cls, v: str | list[str]) -> list[str]:
        """Parse CORS origins from comma-separated string or list."""
        if isinstance(v, str):
            return [origin.strip() for origin in v.split(",") if origin.strip()]
        return v

    @model_validator(mode="after")
    def validate_production_secret(self) -> "Settings":
        """Refuse to run in production with the placeholder JWT secret."""
        if self.is_production and self.jwt_secret == DEFAULT_JWT_SECRET:
            raise ValueError(
                "JWT_SECRET must be set to a private value when ENVIRONMENT=production"
            )
        if not self.jwt_secret:
            raise ValueError("JWT_SECRET must not be empty")
        return self

    @property
    def is_production(self) -> bool:
        """Check if running in production environment."""
        return self.environment == "production"

    @property
    def is_development(self) -> bool:
        """Check if running in development environment."""
        return self.environment == "development"

    @property
    def is_testing(self) -> bool:
        """Check if running in testing environment."""
        return self.environment == "testing"

    @property
    def effective_log_level(self) -> str:
        """Log level, defaulting to DEBUG outside production."""
        if self.log_level:
            return self.log_level
        return "INFO" if self.is_production else "DEBUG"

    @property
    def sqlalchemy_url(self) -> str:
        """Get the async database URL used by the engine."""
        if self.database_url:
            return self.database_url
        return URL.create(
            "postgresql+asyncpg",
            username=self.postgres_user,
            password=self.postgres_password,
            host=self.postgres_host,
            port=self.postgres_port,
            database=self.postgres_database,
        ).render_as_string(hide_password=False)


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance.

    Settings are loaded once at startup; later calls return the same object.

    Returns:
        Settings: Cached application settings instance.
    """
    return Settings()
