"""Application configuration using pydantic-settings."""
from functools import lru_cache
from urllib.parse import urlparse

from pydantic import Field, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

DEV_SESSION_SECRET = "dev-session-secret-change-me"  # noqa: S105


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        populate_by_name=True,
    )

    # Database
    database_url: str
    db_pool_size: int = Field(default=5, validation_alias="DB_POOL_SIZE")
    db_max_overflow: int = Field(default=10, validation_alias="DB_MAX_OVERFLOW")

    # Signups are closed unless explicitly opened
    signups_enabled: bool = Field(default=False, validation_alias="SIGNUPS_ENABLED")

    # Cookie session
    session_secret: str = Field(default=DEV_SESSION_SECRET, validation_alias="SESSION_SECRET")
    session_max_age: int = Field(
        default=14 * 24 * 60 * 60, validation_alias="SESSION_MAX_AGE",
    )

    # PBKDF2 work factor; tests lower it to keep signups fast
    password_hash_iterations: int = Field(
        default=310_000, validation_alias="PASSWORD_HASH_ITERATIONS",
    )

    # CORS - comma-separated list of allowed origins (stored as string, parsed via property)
    cors_origins_str: str = Field(
        default="http://localhost:5173",
        validation_alias="CORS_ORIGINS",
    )

    # Redis - backs the enrichment work queue
    redis_url: str = Field(default="redis://localhost:6379", validation_alias="REDIS_URL")
    redis_enabled: bool = Field(default=True, validation_alias="REDIS_ENABLED")
    redis_pool_size: int = Field(default=20, validation_alias="REDIS_POOL_SIZE")

    # Enrichment jobs (title/thumbnail scraping)
    enrichment_max_attempts: int = Field(default=3, validation_alias="ENRICHMENT_MAX_ATTEMPTS")
    enrichment_failed_retention: int = Field(
        default=100, validation_alias="ENRICHMENT_FAILED_RETENTION",
    )
    enrichment_fetch_timeout: float = Field(
        default=5.0, validation_alias="ENRICHMENT_FETCH_TIMEOUT",
    )

    @model_validator(mode="after")
    def validate_session_secret(self) -> "Settings":
        """
        Refuse the development session secret outside local development.

        Against a remote database the session cookies belong to real users and
        must not be signed with a key that ships in the source tree.
        """
        if self.session_secret != DEV_SESSION_SECRET:
            return self

        try:
            hostname = urlparse(self.database_url).hostname or ""
        except ValueError:
            hostname = ""

        local_hosts = {"localhost", "127.0.0.1", "0.0.0.0", "::1"}  # noqa: S104
        if hostname.lower() not in local_hosts:
            raise ValueError(
                "SESSION_SECRET must be set when running against "
                f"a non-local database (host '{hostname}').",
            )
        return self

    @property
    def cors_origins(self) -> list[str]:
        """Parse comma-separated CORS origins string into a list."""
        if not self.cors_origins_str:
            return []
        return [origin.strip() for origin in self.cors_origins_str.split(",") if origin.strip()]


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
