from __future__ import annotations

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Configuration loaded from environment / .env file (prefix HEALTHCHECK_)."""

    model_config = {
        "env_prefix": "HEALTHCHECK_",
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "extra": "ignore",
    }

    # Logging
    log_level: str = "INFO"

    # Probe runner: tags requested when none are given on the command line
    tags: list[str] = []

    # Stock network checks
    http_timeout_ms: int = 10_000
    http_slow_ms: int = 3_000  # slower than this is WARNING
    dns_timeout_ms: int = 5_000
    tcp_timeout_ms: int = 5_000


settings = Settings()
