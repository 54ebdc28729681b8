"""Storefront Configuration"""

from typing import Optional
from pydantic_settings import BaseSettings
from functools import lru_cache


class Settings(BaseSettings):
    """Application settings loaded from environment"""

    # Application
    app_name: str = "Storefront"
    debug: bool = True
    host: str = "0.0.0.0"
    port: int = 8000

    # Store API (cart, coupons, payments)
    store_base_url: str = "http://localhost:8001/api"
    store_api_token: Optional[str] = None  # Bearer token of the signed-in user
    request_timeout: float = 30.0

    # Checkout
    currency: str = "USD"
    session_max_age_hours: int = 24

    # Mock store (local development)
    mock_store_host: str = "0.0.0.0"
    mock_store_port: int = 8001

    class Config:
        env_file = "config/.env"
        env_file_encoding = "utf-8"
        case_sensitive = False
        extra = "ignore"


@lru_cache()
def get_settings() -> Settings:
    """Get cached settings instance"""
    return Settings()


settings = get_settings()
