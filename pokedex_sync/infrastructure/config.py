"""Application configuration.

Loads settings from environment variables with sensible defaults.
"""

from pydantic import Field
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # API
    api_version: str = "0.1.0"
    debug: bool = False

    # Source API
    pokeapi_base_url: str = Field(
        default="https://pokeapi.co/api/v2/",
        description="Base URL of the read-only source API",
    )
    index_limit: int = Field(default=999, ge=1, description="Max index references per load")
    max_concurrent_details: int = Field(
        default=20,
        ge=1,
        description="Cap on in-flight detail requests during one load",
    )
    request_timeout_seconds: float = Field(default=10.0, gt=0)

    # Resilience
    retry_interval_seconds: float = Field(default=5.0, gt=0)
    retry_max_attempts: int | None = Field(
        default=None,
        ge=1,
        description="Stop scheduled retries after this many failures (unbounded if unset)",
    )
    connectivity_probe_interval_seconds: float = Field(default=5.0, gt=0)

    # Logging
    log_level: str = "INFO"
    log_json: bool = True

    model_config = {
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "extra": "ignore",
    }


settings = Settings()
