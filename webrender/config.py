"""
Centralized configuration management

All configuration values are read from WEBRENDER_* environment variables,
with sensible defaults for development.
"""

from functools import lru_cache
from typing import Optional

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Application settings loaded from environment variables / .env file."""

    # --- HTTP server ---
    host: str = "0.0.0.0"
    port: int = 8101
    log_level: str = "info"
    body_limit_bytes: int = 4 * 1024 * 1024

    # --- Browser ---
    chrome_path: Optional[str] = None  # None = Playwright's bundled Chromium
    navigation_timeout_ms: int = 30000
    custom_user_agent: str = "Custom"

    # 0 = unbounded; every request still launches its own browser.
    max_concurrent_renders: int = 0

    model_config = {
        "env_prefix": "WEBRENDER_",
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "extra": "ignore",
    }


@lru_cache()
def get_settings() -> Settings:
    """Return cached Settings instance (singleton)."""
    return Settings()
