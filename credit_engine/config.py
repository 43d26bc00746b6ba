"""Configuration management using Pydantic Settings"""

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application configuration loaded from environment variables"""

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    # Service
    service_name: str = "credit-engine"
    log_level: str = "INFO"

    # Scoring
    default_strategy: str = "AI-Based"  # Used by the HTTP adapter when none is requested


settings = Settings()
