# Storefront client logic

from .app import create_controller, create_search_debouncer

__all__ = ["create_controller", "create_search_debouncer"]
