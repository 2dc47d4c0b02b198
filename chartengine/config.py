"""Application configuration from environment variables."""

from __future__ import annotations

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    chartengine_env: str = "development"
    chartengine_log_level: str = "debug"

    # CORS
    cors_origins: list[str] = ["http://localhost:5173"]

    # Render defaults for API requests that omit them
    default_theme: str = "light"
    default_viewport_width: float = 1280.0

    model_config = {"env_file": ".env", "env_file_encoding": "utf-8"}


settings = Settings()
