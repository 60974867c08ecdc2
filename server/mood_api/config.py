"""Application configuration loaded from environment variables."""
import os
from functools import lru_cache
from zoneinfo import ZoneInfo

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment."""

    model_config = SettingsConfigDict(env_prefix="MOOD_API_")

    # Database paths
    data_path: str = os.getenv("DATA_PATH", os.path.dirname(os.path.dirname(os.path.dirname(os.path.abspath(__file__)))))
    db_filename: str = "mood.db"

    @property
    def mood_db_path(self) -> str:
        return os.path.join(self.data_path, self.db_filename)

    # Analytics
    timezone: str = "UTC"
    fetch_timeout_seconds: float = 10.0
    dashboard_window_days: int = 90
    correlation_window_days: int = 30

    @property
    def tzinfo(self) -> ZoneInfo:
        return ZoneInfo(self.timezone)

    # API configuration
    api_host: str = "127.0.0.1"
    api_port: int = 8082
    log_level: str = "INFO"

    # CORS
    cors_origins: list[str] = ["http://localhost:3000", "http://127.0.0.1:3000"]


@lru_cache
def get_settings() -> Settings:
    return Settings()
