"""Application Configuration: environment-driven settings via pydantic-settings.

Invariants:
    - All secrets come from environment variables or .env
    - get_settings() is cached (lru_cache): single instance per process
    - Empty invoice_api_key disables invoice creation on payment
"""

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict
from functools import lru_cache


class Settings(BaseSettings):
    """Application settings from environment variables."""

    model_config = SettingsConfigDict(env_file=".env", case_sensitive=False)

    # Database
    database_url: str = (
        "postgresql+asyncpg://bookpost:bookpost@db:5432/bookpost"
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

    # Auth
    jwt_secret: str = "change-me-bookpost-development-secret"
    jwt_algorithm: str = "HS256"
    jwt_expire_hours: int = 72
    bcrypt_rounds: int = 12

    # Joke API (fills empty post content)
    joke_api_url: str = "https://api.api-ninjas.com/v1/jokes"
    joke_api_key: str = ""

    # Invoice gateway (Xendit-compatible)
    invoice_api_url: str = "https://api.xendit.co/v2/invoices"
    invoice_api_key: str = ""
    invoice_currency: str = "IDR"
    invoice_duration_seconds: int = 86_400

    http_timeout_seconds: float = 10.0

    # API
    cors_origins: list[str] = ["http://localhost:5173"]

    # Observability
    log_level: str = "INFO"
    log_format: str = "json"
    log_file: str | None = None


@lru_cache
def get_settings() -> Settings:
    return Settings()
