"""
Centralized configuration for SEO Analyzer
All environment variables and settings are defined here
"""

from typing import Optional
from pydantic_settings import BaseSettings
from pydantic import Field


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.
    Provides centralized configuration with validation and defaults.
    """

    # ======================
    # API Configuration
    # ======================
    ANTHROPIC_API_KEY: str = Field(default="", description="Anthropic API key")
    ANTHROPIC_MODEL: str = Field(
        default="claude-sonnet-4-20250514",
        description="Claude model used for SEO scoring"
    )
    MAX_TOKENS: int = Field(default=1024, description="Max tokens for Claude response")
    MODEL_MAX_ATTEMPTS: int = Field(
        default=1,
        description="Attempts for the model call on connection/rate-limit errors"
    )

    # ======================
    # Redis Configuration
    # ======================
    REDIS_URL: str = Field(
        default="redis://localhost:6379/0",
        description="Redis connection URL (screenshot object store)"
    )

    # ======================
    # Screenshot Configuration
    # ======================
    SCREENSHOT_TTL: int = Field(
        default=0,
        description="Seconds before stored screenshots expire (0 = never)"
    )
    SCREENSHOT_BUCKET_MINUTES: int = Field(
        default=5,
        description="Width of the time bucket used to prefix screenshot keys"
    )

    # ======================
    # Browser Session Configuration
    # ======================
    BROWSER_WS_ENDPOINT: Optional[str] = Field(
        default=None,
        description="CDP endpoint of a remote browser (launches local Chromium if unset)"
    )
    BROWSER_LAUNCH_TIMEOUT: int = Field(
        default=20,
        description="Timeout for launching browser in seconds"
    )
    NAVIGATION_TIMEOUT_MS: int = Field(
        default=0,
        description="Page navigation timeout in milliseconds (0 = wait indefinitely)"
    )
    KEEP_BROWSER_ALIVE_SECONDS: int = Field(
        default=60,
        description="Idle budget before the browser session is closed"
    )
    KEEP_ALIVE_TICK_SECONDS: int = Field(
        default=10,
        description="Keep-alive timer increment in seconds"
    )

    # ======================
    # Logging Configuration
    # ======================
    LOG_LEVEL: str = Field(
        default="INFO",
        description="Logging level"
    )

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"
        case_sensitive = True
        extra = "ignore"  # Allow extra env vars in .env file


# Global settings instance
settings = Settings()

