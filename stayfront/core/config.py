"""
Application configuration using pydantic-settings.
All config is loaded from environment variables with sensible defaults.
"""

from pydantic_settings import BaseSettings
from functools import lru_cache


class Settings(BaseSettings):
    # Application
    APP_NAME: str = "Stayfront"
    APP_VERSION: str = "1.0.0"
    ENVIRONMENT: str = "development"
    DEBUG: bool = False
    LOG_LEVEL: str = "INFO"

    # Remote marketplace API
    API_URL: str = "http://localhost:5000"
    API_TIMEOUT: float = 10.0

    # Redis
    REDIS_URL: str = "redis://localhost:6379/0"
    REDIS_ENABLED: bool = False
    LISTINGS_CACHE_TTL: int = 60
    REDIS_RETRY_BACKOFF: float = 30.0  # seconds before reconnecting after a failed ping

    # Session
    TOKEN_STORE: str = "memory"  # memory | redis
    SESSION_COOKIE_NAME: str = "stayfront_session"
    SESSION_TTL: int = 60 * 60 * 24 * 7  # 7 days

    # Booking
    BOOKING_REDIRECT_DELAY: int = 2  # seconds

    model_config = {
        "env_file": ".env",
        "case_sensitive": True,
    }


@lru_cache()
def get_settings() -> Settings:
    return Settings()
