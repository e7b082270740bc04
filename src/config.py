from __future__ import annotations

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Central configuration loaded from environment / .env file."""

    model_config = {"env_file": ".env", "env_file_encoding": "utf-8", "extra": "ignore"}

    # HTTP probe
    probe_timeout_ms: int = 10_000
    user_agent: str = "dminder-monitor/1.0"

    # Run
    results_path: str = "check-results.json"
    concurrency: int = 1  # services probed at once; 1 = strictly sequential

    # Logging
    log_level: str = "INFO"


settings = Settings()
