"""Application configuration using Pydantic Settings."""

from functools import lru_cache

from pydantic import Field, computed_field
from pydantic_settings import BaseSettings, SettingsConfigDict
from sqlalchemy.engine import make_url


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Application
    app_name: str = Field(default="User Directory Service")
    app_env: str = Field(default="development")
    log_level: str = Field(default="INFO")

    # Server
    host: str = Field(default="0.0.0.0")
    port: int = Field(default=8080)
    request_timeout_seconds: float = Field(
        default=30.0,
        gt=0,
        description="Per-request budget, also handed to the database driver",
    )

    # Database
    database_url: str = Field(
        default="postgresql+asyncpg://localhost:5432/user_directory",
        description="PostgreSQL connection URL with asyncpg driver",
    )
    database_user: str | None = Field(default=None)
    database_password: str | None = Field(default=None)
    database_pool_size: int = Field(default=10, ge=1)

    @computed_field  # type: ignore[prop-decorator]
    @property
    def async_database_url(self) -> str:
        """Database URL with the async driver scheme and credentials applied.

        Providers usually hand out a plain ``postgresql://`` URL, while
        SQLAlchemy's async engine requires ``postgresql+asyncpg://``.
        Credentials given separately override the ones embedded in the URL.
        """
        raw = self.database_url
        if raw.startswith("postgresql://"):
            raw = raw.replace("postgresql://", "postgresql+asyncpg://", 1)
        url = make_url(raw)
        if self.database_user:
            url = url.set(username=self.database_user)
        if self.database_password:
            url = url.set(password=self.database_password)
        return url.render_as_string(hide_password=False)

    @computed_field  # type: ignore[prop-decorator]
    @property
    def is_sqlite(self) -> bool:
        """True when the configured backend is SQLite (local runs and tests)."""
        return self.database_url.startswith("sqlite")

    @computed_field  # type: ignore[prop-decorator]
    @property
    def is_production(self) -> bool:
        """Check if running in production environment."""
        return self.app_env == "production"


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
