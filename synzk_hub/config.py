"""
Configuration for SYNZK Hub.
"""

from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    Service configuration settings.

    All settings can be overridden via environment variables.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # HTTP server
    host: str = Field(default="0.0.0.0", description="Bind address")
    # Railway/Heroku style platforms inject PORT
    port: int = Field(default=8080, description="HTTP port")
    debug: bool = Field(default=False, description="Enable auto-reload")

    # CORS
    cors_origin: str = Field(
        default="*",
        description="Allowed cross-origin value ('*' or comma-separated origins)",
    )

    # Storage
    # Empty DATABASE_URL means the in-memory store (non-persistent).
    database_url: str = Field(
        default="",
        description="SQLAlchemy database URL (postgresql://... or sqlite:///...)",
    )
    # Only the literal "0" disables TLS; any other value (true, require, 1) keeps it.
    pgssl: str = Field(
        default="1",
        description="TLS to PostgreSQL without certificate verification unless PGSSL=0",
    )

    # Logging
    environment: str = Field(
        default="development",
        description="Deployment environment; 'production' switches logs to JSON",
    )
    log_level: str = Field(default="INFO", description="Root log level")

    # HTTP headers
    hsts: bool = Field(
        default=True,
        description="Send Strict-Transport-Security on every response",
    )

    # Limits
    max_body_bytes: int = Field(
        default=1024 * 1024,
        gt=0,
        description="Maximum accepted request body size in bytes",
    )

    @property
    def cors_origins(self) -> list[str]:
        """Allowed origins as a list for CORSMiddleware."""
        origins = [o.strip() for o in self.cors_origin.split(",") if o.strip()]
        return origins or ["*"]

    @property
    def pgssl_enabled(self) -> bool:
        return self.pgssl.strip() != "0"

    @property
    def is_production(self) -> bool:
        return self.environment.lower() == "production"


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
