# Core modules

from .config import Settings, get_settings
from .session import CheckoutSession
from .storage import Storage, MemoryStorage, FileStorage, create_storage

__all__ = [
    "Settings",
    "get_settings",
    "CheckoutSession",
    "Storage",
    "MemoryStorage",
    "FileStorage",
    "create_storage",
]
