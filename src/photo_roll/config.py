"""Application configuration."""

import os
from pathlib import Path

from pydantic_settings import BaseSettings, SettingsConfigDict

_ENVIRONMENT = os.getenv("ENVIRONMENT", "local")


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    supabase_url: str
    supabase_service_key: str
    mars_base_url: str = "https://android-kotlin-fun-mars-server.appspot.com"
    mars_photos_path: str = "/photos"
    picsum_base_url: str = "https://picsum.photos"
    picsum_list_path: str = "/v2/list"
    http_timeout_seconds: float = 15
    camera_db_path: Path = Path("data/camera.db")
    environment: str = _ENVIRONMENT

    model_config = SettingsConfigDict(
        env_file=(f".env.{_ENVIRONMENT}", ".env"),
        extra="ignore",
    )
