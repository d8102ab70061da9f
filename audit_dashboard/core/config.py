"""
Application configuration using Pydantic Settings.

Values are read from environment variables (and an optional .env file).
"""

from functools import lru_cache
from typing import List, Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=True,
        extra="ignore",
    )

    # ===========================================
    # Environment
    # ===========================================
    ENVIRONMENT: Literal["local", "production", "test"] = "local"
    DEBUG: bool = False
    LOG_LEVEL: str = "INFO"

    # ===========================================
    # Server
    # ===========================================
    HOST: str = "0.0.0.0"
    PORT: int = 5000
    ALLOWED_ORIGINS: List[str] = Field(
        default=["http://localhost:5000", "http://localhost:5173"]
    )

    # ===========================================
    # Browser sessions
    # ===========================================
    SESSION_COOKIE_NAME: str = "snyk-session-id"
    # Sessions idle for longer than this are purged
    SESSION_IDLE_TIMEOUT_MINUTES: int = 30
    SESSION_SWEEP_INTERVAL_MINUTES: int = 5
    # Lifetime of a stored credential (Snyk token or LLM key)
    CONFIG_TTL_MINUTES: int = 30
    # Only enable behind HTTPS
    COOKIE_SECURE: bool = False

    # ===========================================
    # Snyk REST API
    # ===========================================
    SNYK_API_BASE_URL: str = "https://api.snyk.io/rest"
    SNYK_DEFAULT_API_VERSION: str = "2024-10-15"
    SNYK_REQUEST_TIMEOUT_SECONDS: float = 30.0
    # Page size used when fetching logs for the executive summary
    SUMMARY_FETCH_SIZE: int = 100

    # ===========================================
    # LLM
    # ===========================================
    LLM_REQUEST_TIMEOUT_SECONDS: float = 120.0
    MAX_CHAT_MESSAGE_LENGTH: int = 10000

    @property
    def is_production(self) -> bool:
        """Check if running in production."""
        return self.ENVIRONMENT == "production"

    @property
    def is_test(self) -> bool:
        """Check if running under the test suite."""
        return self.ENVIRONMENT == "test"


@lru_cache()
def get_settings() -> Settings:
    """
    Get cached settings instance.

    Using lru_cache ensures settings are loaded only once.
    """
    return Settings()
