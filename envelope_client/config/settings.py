"""Pydantic Settings for the HTTP client.

All environment variables use the APP_ prefix.
Example: APP_API_PREFIX=https://api.example.com/v1, APP_TIMEOUT_SECONDS=10
"""

from __future__ import annotations

from pydantic import Field
from pydantic_settings import BaseSettings


class ClientSettings(BaseSettings):
    """Client configuration validated from environment variables."""

    # Transport
    api_prefix: str  # base URL every relative path is resolved against
    timeout_seconds: float = Field(default=30.0, gt=0)

    # Logging
    log_level: str = "INFO"

    # Message tables (YAML overrides merged over built-in defaults)
    messages_path: str | None = None

    # Persisted key-value store
    access_token_key: str = "access_token"

    # Re-raise classified failures after notifying instead of returning None
    raise_on_failure: bool = False

    model_config = {"env_prefix": "APP_", "frozen": True}
