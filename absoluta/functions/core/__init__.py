# Core modules

from .config import Settings, get_settings
from .dependencies import get_payment_client, get_notification_handler

__all__ = ["Settings", "get_settings", "get_payment_client", "get_notification_handler"]
