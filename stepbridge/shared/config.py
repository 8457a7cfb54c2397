"""Configuration management using Pydantic Settings.

Loads bridge configuration from environment variables with validation.
"""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Bridge settings loaded from environment variables."""

    # Invocation failure reporting
    backtrace_limit: int | None = Field(
        default=None,
        ge=1,
        description="Maximum number of innermost traceback frames reported for a failing step (None = all)",
    )

    # Logging
    log_level: str = Field(
        default="INFO", description="Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)"
    )
    log_requests: bool = Field(
        default=False, description="Log every raw request line at DEBUG level"
    )

    model_config = SettingsConfigDict(
        env_file=".env", env_file_encoding="utf-8", case_sensitive=False, extra="ignore"
    )
