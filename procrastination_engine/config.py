"""Application configuration loaded from environment variables."""

from __future__ import annotations

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    app_name: str = "procrastination-engine"
    debug: bool = False
    log_level: str = "INFO"
    host: str = "127.0.0.1"
    port: int = 8000

    # Rolling history bounds
    behavior_history_limit: int = 100
    task_history_limit: int = 50

    # Pattern accumulation
    pattern_window_hours: float = 24.0

    # Risk aggregation
    severity_weight_low: float = 0.2
    severity_weight_medium: float = 0.5
    severity_weight_high: float = 0.8
    intervention_threshold: float = 0.6

    # Hour-of-day heuristics are evaluated in this zone
    local_timezone: str = "UTC"

    # Per-user detector sessions
    session_ttl_minutes: int = 240

    model_config = {"env_prefix": "PROCRASTINATION_"}


settings = Settings()
