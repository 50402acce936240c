"""Storefront Configuration"""

from typing import Optional
from pydantic_settings import BaseSettings
from functools import lru_cache


class Settings(BaseSettings):
    """Storefront settings loaded from environment"""

    # Site
    site_url: str = "http://localhost:8001"
    catalog_path: str = "/data/products.json"
    preference_path: str = "/api/create-preference"

    # Cart storage
    storage_path: Optional[str] = None  # In-memory storage when unset
    cart_storage_key: str = "absoluta_cart_v1"

    # Behaviour
    search_debounce_seconds: float = 0.3
    request_timeout: float = 30.0
    debug: bool = False

    class Config:
        env_prefix = "STOREFRONT_"
        env_file = ".env"
        env_file_encoding = "utf-8"
        case_sensitive = False
        extra = "ignore"

    @property
    def catalog_url(self) -> str:
        return f"{self.site_url.rstrip('/')}{self.catalog_path}"

    @property
    def preference_url(self) -> str:
        return f"{self.site_url.rstrip('/')}{self.preference_path}"


@lru_cache()
def get_settings() -> Settings:
    """Get cached settings instance"""
    return Settings()
