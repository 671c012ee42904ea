"""Application configuration from environment variables."""

from __future__ import annotations

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    env: str = "development"
    log_level: str = "info"

    # CORS
    cors_origins: list[str] = ["http://localhost:3000"]

    # Canvas
    default_size: int = 800
    max_size: int = 2048

    # Overlay texture: seeded keeps full images byte-identical per identifier
    overlay_seeded: bool = True
    overlay_amount: float = 50.0

    model_config = {"env_prefix": "PHISHMARK_", "env_file": ".env", "env_file_encoding": "utf-8", "extra": "ignore"}


settings = Settings()
