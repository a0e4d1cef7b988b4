"""Runtime configuration from environment variables."""

from __future__ import annotations

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    motionsight_env: str = "development"
    motionsight_log_level: str = "info"

    # Manifest header
    generator_tag: str = "MotionSight v1.0"
    schema_version: str = "1.0"

    # Sampling
    max_duration_ms: float = 5000
    velocity_threshold: float = 0.1
    min_frames: int = 10
    settle_frames: int = 10

    model_config = {"env_file": ".env", "env_file_encoding": "utf-8", "extra": "ignore"}


settings = Settings()
