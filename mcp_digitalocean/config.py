from __future__ import annotations

from functools import lru_cache
from typing import List

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    Central configuration for the DigitalOcean MCP server.

    All values are loaded from environment variables with `DIGITALOCEAN_` prefix.
    You can also use a `.env` file in the working directory during development.
    """

    model_config = SettingsConfigDict(
        env_prefix="DIGITALOCEAN_",
        env_file=".env",
        extra="ignore",
    )

    # General
    log_level: str = "info"
    server_port: int = 8000
    server_host: str = "0.0.0.0"
    transport: str = "stdio"  # "stdio" or "http"

    # Comma-separated service groups to expose, e.g. "droplets,networking".
    # Empty means every supported group.
    services: str = ""

    # DigitalOcean API
    api_token: str
    api_url: str = "https://api.digitalocean.com/v2"
    request_timeout: float = 30.0
    retry_max: int = 4
    retry_wait_min: float = 1.0
    retry_wait_max: float = 30.0

    @field_validator("api_token")
    @classmethod
    def _clean_token(cls, value: str) -> str:
        return value.strip().strip("'")

    def service_list(self) -> List[str]:
        return [s.strip() for s in self.services.split(",") if s.strip()]


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Load and cache settings from environment."""
    return Settings()  # type: ignore[call-arg]
