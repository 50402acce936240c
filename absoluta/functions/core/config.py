"""Payment Functions Configuration"""

from typing import Optional
from pydantic_settings import BaseSettings
from functools import lru_cache


class Settings(BaseSettings):
    """Application settings loaded from environment"""

    # Application
    app_name: str = "Absoluta Store Functions"
    debug: bool = False
    host: str = "0.0.0.0"
    port: int = 8001

    # Public base URL of the site, used for provider callbacks
    url: Optional[str] = None

    # Mercado Pago
    mp_access_token: Optional[str] = None
    mp_api_base_url: str = "https://api.mercadopago.com"
    mp_timeout: float = 30.0
    currency_id: str = "BRL"
    statement_descriptor: str = "ABSOLUTASTORE"
    external_reference_prefix: str = "absoluta"
    default_picture_url: str = "https://via.placeholder.com/150"
    default_category_id: str = "beauty"

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"
        case_sensitive = False
        extra = "ignore"

    @property
    def site_url(self) -> Optional[str]:
        return self.url.rstrip("/") if self.url else None

    @property
    def payments_configured(self) -> bool:
        return bool(self.mp_access_token)


@lru_cache()
def get_settings() -> Settings:
    """Get cached settings instance"""
    return Settings()
