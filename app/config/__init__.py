"""
Application Settings
Load from environment variables
"""

from pydantic_settings import BaseSettings, SettingsConfigDict
from typing import Optional


class Settings(BaseSettings):
    """Application settings from environment"""

    # ======================
    # Application
    # ======================
    APP_ENV: str = "development"
    DEBUG: bool = True
    LOG_LEVEL: str = "INFO"
    API_HOST: str = "0.0.0.0"
    API_PORT: int = 8000

    # ======================
    # Market Data (Alpaca)
    # ======================
    ALPACA_API_KEY: Optional[str] = None
    ALPACA_API_SECRET: Optional[str] = None
    ALPACA_DATA_BASE_URL: Optional[str] = None
    ALPACA_DATA_FEED: Optional[str] = None
    MARKET_DATA_TIMEOUT_SECONDS: float = 30.0
    MARKET_DATA_CACHE_TTL: Optional[int] = None

    # ======================
    # Greeting
    # ======================
    GREETING_ENABLED: bool = True
    GREETING_API_URL: str = "https://randomuser.me/api/?nat=US"

    # ======================
    # Pydantic v2 config
    # ======================
    model_config = SettingsConfigDict(
        env_file=".env",
        case_sensitive=True,
        extra="forbid",
    )


settings = Settings()
