"""Configuration management using Pydantic Settings"""

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application configuration loaded from environment variables"""

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    # Snapshot storage
    database_url: str = "sqlite:///./watcard.db"

    # Service
    service_name: str = "watcard-insights"
    log_level: str = "INFO"

    # Analytics
    top_locations_limit: int = 5


settings = Settings()
