"""Application Configuration — environment-driven settings via pydantic-settings.

Invariants:
    - All secrets come from environment variables (never hardcoded)
    - get_settings() is cached (lru_cache) — single instance per process
    - default_locale is always a member of supported_locales

Design Decisions:
    - pydantic-settings over raw os.environ: validation, type coercion, .env file support
    - Locale defaults and the slug fallback token live here and are passed into
      LocaleResolver / SlugIdentityEngine at construction, never read from core
"""

from functools import lru_cache

from pydantic import field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings from environment variables."""

    model_config = SettingsConfigDict(env_file=".env", case_sensitive=False)

    # Database
    database_url: str = (
        "postgresql+asyncpg://catalog:catalog@db:5432/catalog"
    )

    @field_validator("database_url", mode="before")
    @classmethod
    def convert_postgres_url(cls, v: str) -> str:
        """Hosted Postgres hands out postgresql:// but asyncpg needs postgresql+asyncpg://."""
        if isinstance(v, str) and v.startswith("postgresql://"):
            return v.replace("postgresql://", "postgresql+asyncpg://", 1)
        return v

    database_pool_size: int = 20
    database_max_overflow: int = 10

    # Localization
    default_locale: str = "vi"
    supported_locales: list[str] = ["vi", "en"]

    # Identity
    slug_fallback_token: str = "product"

    # API
    api_prefix: str = "/api/v1"
    cors_origins: list[str] = ["http://localhost:5173"]

    # Observability
    log_level: str = "INFO"
    log_format: str = "json"

    @model_validator(mode="after")
    def default_locale_is_supported(self):
        self.default_locale = self.default_locale.strip().lower()
        self.supported_locales = [
            code.strip().lower() for code in self.supported_locales if code.strip()
        ]
        if self.default_locale not in self.supported_locales:
            self.supported_locales.append(self.default_locale)
        return self


@lru_cache
def get_settings() -> Settings:
    return Settings()
