"""Application configuration from environment variables."""

from pydantic_settings import BaseSettings
from functools import lru_cache


class Settings(BaseSettings):
    """Application settings loaded from environment."""

    # Database
    database_url: str = "sqlite:///./fittrack.db"

    # Auth
    jwt_secret_key: str = "dev-secret-key-change-in-prod"
    jwt_algorithm: str = "HS256"
    access_token_expire_minutes: int = 60 * 24 * 7  # 7 days

    # Step aggregation: fixed UTC offset defining calendar days (IST)
    reporting_tz_offset_minutes: int = 330

    # Communities
    join_code_max_attempts: int = 5

    # Frontend
    frontend_url: str = "http://localhost:3000"

    # App settings
    app_name: str = "FitTrack"
    debug: bool = True
    log_dir: str = "logs"
    log_level: str = "INFO"

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"


@lru_cache()
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
