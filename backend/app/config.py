"""Application Configuration — environment-driven settings via pydantic-settings.

Invariants:
    - All secrets come from environment variables (the default JWT secret is dev-only)
    - get_settings() is cached (lru_cache) — single instance per process

Design Decisions:
    - pydantic-settings over raw os.environ: validation, type coercion, .env file support
    - Defaults provided for all non-secret settings: SQLite works out-of-the-box
    - Business constants (quota, windows) live in core/, not here: they are rules, not knobs
"""

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict
from functools import lru_cache


class Settings(BaseSettings):
    """Application settings from environment variables."""

    model_config = SettingsConfigDict(env_file=".env", case_sensitive=False)

    # Database
    database_url: str = "sqlite+aiosqlite:///./weeklist.db"

    @field_validator("database_url", mode="before")
    @classmethod
    def convert_postgres_url(cls, v: str) -> str:
        """Hosted Postgres URLs are postgresql:// but asyncpg needs postgresql+asyncpg://."""
        if isinstance(v, str) and v.startswith("postgresql://"):
            return v.replace("postgresql://", "postgresql+asyncpg://", 1)
        return v

    database_pool_size: int = 20
    database_max_overflow: int = 10
    database_create_tables: bool = True

    # Auth
    jwt_secret: str = "dev-only-weeklist-secret-change-me-0123456789"
    jwt_algorithm: str = "HS256"
    access_token_ttl_seconds: int = Field(default=3600, gt=0)
    bcrypt_rounds: int = Field(default=12, ge=4, le=31)

    # Expiry sweeper (original cron: "0 0 * * *")
    sweep_enabled: bool = True
    sweep_hour_utc: int = Field(default=0, ge=0, le=23)

    # Weeklist writes
    weeklist_optimistic_locking: bool = True

    # API
    cors_origins: list[str] = ["http://localhost:5173"]
    legacy_status_codes: bool = False

    # Observability
    log_level: str = "INFO"
    log_format: str = "json"


@lru_cache
def get_settings() -> Settings:
    return Settings()
