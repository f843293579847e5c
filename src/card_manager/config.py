"""Application configuration."""

import os

from pydantic_settings import BaseSettings, SettingsConfigDict

_ENVIRONMENT = os.getenv("ENVIRONMENT", "local")


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    api_base_url: str = "http://localhost:8080"
    upload_path: str = "/api/upload-visiting-card"
    users_path: str = "/api/users"
    page_size: int = 10
    search_debounce_seconds: float = 0.3
    max_upload_bytes: int = 5 * 1024 * 1024
    request_timeout_seconds: float = 15
    upload_timeout_seconds: float = 30
    log_level: str = "INFO"
    environment: str = _ENVIRONMENT

    model_config = SettingsConfigDict(
        env_file=(f".env.{_ENVIRONMENT}", ".env"),
        extra="ignore",
    )
