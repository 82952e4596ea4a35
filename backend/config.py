"""Centralized configuration — all env vars in one place."""

import os

from dotenv import load_dotenv

DEFAULT_RAPIDAPI_HOST = "amazon-product-data8.p.rapidapi.com"


def _int_env(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return int(raw)
    except ValueError:
        raise ValueError(f"{name} must be an integer, got {raw!r}") from None


class Settings:
    """Application settings loaded from environment variables."""

    def __init__(self):
        self.port: int = _int_env("PORT", 8080)
        self.cors_origins: list[str] = os.getenv("CORS_ORIGINS", "*").split(",")
        self.git_sha: str = os.getenv("GIT_SHA", "unknown")
        self.environment: str = os.getenv("ENVIRONMENT", "local")

        # RapidAPI upstream
        self.rapidapi_host: str = os.getenv("RAPIDAPI_HOST") or DEFAULT_RAPIDAPI_HOST
        self.rapidapi_key: str | None = os.getenv("RAPIDAPI_KEY")

        # Caching and throttling
        self.cache_ttl_seconds: int = _int_env("CACHE_TTL_SECONDS", 600)
        self.rate_limit_max: int = _int_env("RATE_LIMIT_MAX", 100)
        self.rate_limit_window_seconds: int = _int_env("RATE_LIMIT_WINDOW_SECONDS", 15 * 60)

    @property
    def is_production(self) -> bool:
        return self.environment == "production"

    def validate(self) -> list[str]:
        """Return list of missing env vars required for upstream calls."""
        required = {"RAPIDAPI_KEY": self.rapidapi_key}
        return [var for var, value in required.items() if not value]


# Existing environment variables take precedence over .env entries
load_dotenv()

settings = Settings()
