"""Application configuration from environment variables."""

from __future__ import annotations

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    pieceworks_env: str = "development"
    pieceworks_log_level: str = "info"

    # CORS
    cors_origins: list[str] = ["http://localhost:3000"]

    # Raster export
    raster_timeout_s: float = 10.0
    raster_default_scale: float = 2.0

    # FileStore location for last-session settings; also searched for settings.json / defaults.json
    settings_dir: str = ".pieceworks"

    model_config = {"env_file": ".env", "env_file_encoding": "utf-8"}


settings = Settings()
