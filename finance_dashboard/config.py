"""Configuration management using Pydantic Settings"""

from typing import Optional

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application configuration loaded from environment variables"""

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    # Service
    service_name: str = "finance-dashboard"
    log_level: str = "INFO"

    # Dashboard
    recent_transactions_limit: int = 5

    # Market data
    crypto_api_base: str = "https://api.coingecko.com/api/v3"
    market_refresh_seconds: int = 60
    market_seed: Optional[int] = None  # fixed seed makes the mock ticker reproducible

    # HTTP Client
    http_timeout_seconds: float = 5.0


settings = Settings()
