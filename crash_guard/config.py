"""
Application configuration management.
"""

from pydantic_settings import BaseSettings, SettingsConfigDict
from typing import Optional


class Settings(BaseSettings):
    """Crash reporting settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_prefix="CRASH_GUARD_",
        env_file=".env",
        case_sensitive=False,
        extra="ignore",
    )

    # Logging
    log_level: str = "INFO"

    # Sentry backend
    sentry_dsn: Optional[str] = None
    environment: str = "production"
    release: Optional[str] = None
    sample_rate: float = 1.0

    # Collection
    debug: bool = False
    enable_in_debug_mode: bool = False

    # Record building
    max_context_entries: int = 5
    payload_preview_limit: int = 200

    # Reported with every crash as custom keys
    app_version: Optional[str] = None
    build_number: Optional[str] = None

    @property
    def collection_enabled(self) -> bool:
        """Collection is always on outside debug mode, opt-in inside it."""
        return not self.debug or self.enable_in_debug_mode


# Global settings instance
settings = Settings()
