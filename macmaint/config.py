"""Application Configuration — environment-driven settings via pydantic-settings.

Invariants:
    - Every setting can be overridden with a MACMAINT_-prefixed environment variable
    - get_settings() is cached (lru_cache) — single instance per process

Design Decisions:
    - Timeouts split in two: probes are quick, cleanup commands (brew, docker prune) are not
    - home_override lets the server inspect another account's home without touching HOME
"""

from functools import lru_cache

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env", env_prefix="MACMAINT_", case_sensitive=False,
    )

    # Server
    host: str = "127.0.0.1"
    port: int = 8765

    # External commands
    command_timeout_seconds: float = 30.0
    cleanup_timeout_seconds: float = 300.0
    external_ip_url: str = "ifconfig.me"

    # Apple Silicon uses 16KB pages
    memory_page_size: int = 16384

    home_override: str | None = None

    # Observability
    log_level: str = "INFO"
    log_format: str = "json"

    @field_validator("log_format")
    @classmethod
    def check_log_format(cls, v: str) -> str:
        if v not in ("json", "text"):
            raise ValueError("log_format must be 'json' or 'text'")
        return v


@lru_cache
def get_settings() -> Settings:
    return Settings()
