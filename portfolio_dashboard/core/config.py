"""
Application configuration using Pydantic Settings.

Supports hierarchical environment configuration:
- .env.base: Common non-secret defaults (committed to git)
- .env.{ENVIRONMENT}: Environment-specific overrides (gitignored)
- Environment variables: Highest priority
"""

import os
from functools import lru_cache
from typing import Literal

from pydantic_settings import BaseSettings, SettingsConfigDict

# Get environment from env var, default to development
ENV = os.getenv("ENVIRONMENT", "development")


class Settings(BaseSettings):
    """Application settings with hierarchical env file support."""

    model_config = SettingsConfigDict(
        env_file=[
            ".env.base",
            f".env.{ENV}",
        ],
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Environment
    environment: Literal["development", "test", "production"] = "development"
    log_level: str = "INFO"

    # HTTP
    cors_origins: list[str] = ["http://localhost:3000", "http://127.0.0.1:3000"]
    rate_limit_storage_uri: str = "memory://"

    # Holdings source (empty = built-in sample portfolio)
    holdings_file: str = ""

    # Refresh scheduling
    refresh_interval_ms: int = 15_000  # Matches the dashboard's 15s polling
    auto_refresh_enabled: bool = True

    # Quote lookups
    quote_timeout_seconds: float = 5.0  # Per-symbol bound; expiry = unavailable
    quote_concurrency: int = 8  # Max in-flight quote lookups per run
    quote_latency_seconds: float = 0.0  # Simulated feed delay
    quote_price_jitter: float = 10.0  # Simulated price swing (+/- half)

    # Circuit breaker for failing symbols
    circuit_failure_threshold: int = 5
    circuit_recovery_timeout: float = 60.0

    @property
    def is_development(self) -> bool:
        """Check if running in development mode."""
        return self.environment == "development"


@lru_cache
def get_settings() -> Settings:
    """Get cached application settings."""
    return Settings()
