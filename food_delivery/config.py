"""
Application configuration using Pydantic Settings
"""

from typing import List
from pydantic_settings import BaseSettings
from functools import lru_cache


class Settings(BaseSettings):
    """Application settings loaded from environment variables"""

    # Database
    database_url: str = "sqlite+aiosqlite:///./food_delivery.db"
    db_echo: bool = False
    auto_create_schema: bool = True

    # JWT / Auth
    jwt_secret_key: str = "your-super-secret-jwt-key-change-in-production"
    jwt_algorithm: str = "HS256"
    access_token_expire_minutes: int = 60
    refresh_token_expire_days: int = 7

    # Pricing (amounts in minor currency units)
    tax_rate_percent: float = 5.0
    delivery_fee_per_km_cents: int = 500
    default_delivery_fee_cents: int = 4000
    max_delivery_distance_km: float = 10.0
    average_delivery_speed_kmh: float = 20.0

    # Time windows
    review_edit_window_hours: int = 24
    refund_window_hours: int = 24

    # Simulated payment gateway
    payment_success_rate: float = 0.9
    refund_success_rate: float = 0.95

    # API Server
    api_host: str = "0.0.0.0"
    api_port: int = 8000
    api_debug: bool = False
    cors_origins: str = "http://localhost:3000,http://localhost:3001"

    # Logging
    log_level: str = "INFO"
    log_format: str = "json"

    @property
    def cors_origins_list(self) -> List[str]:
        """Parse CORS origins from comma-separated string"""
        return [origin.strip() for origin in self.cors_origins.split(",")]

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"


@lru_cache()
def get_settings() -> Settings:
    """Get cached settings instance"""
    return Settings()


settings = get_settings()
