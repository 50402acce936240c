# Storefront Services

from .catalog import CatalogStore, CatalogLoadError, format_category, format_price
from .filters import filter_products, CATEGORY_ALIASES
from .navigation import FilterState, encode, decode, decode_url, share_link
from .cart import CartStore, CART_STORAGE_KEY
from .checkout import (
    CheckoutOrchestrator,
    CheckoutError,
    EmptyCartError,
    CheckoutInProgressError,
    PreferenceCreationError,
    build_preference_request,
)
from .controller import StorefrontController, SearchDebouncer, Renderer

__all__ = [
    "CatalogStore",
    "CatalogLoadError",
    "format_category",
    "format_price",
    "filter_products",
    "CATEGORY_ALIASES",
    "FilterState",
    "encode",
    "decode",
    "decode_url",
    "share_link",
    "CartStore",
    "CART_STORAGE_KEY",
    "CheckoutOrchestrator",
    "CheckoutError",
    "EmptyCartError",
    "CheckoutInProgressError",
    "PreferenceCreationError",
    "build_preference_request",
    "StorefrontController",
    "SearchDebouncer",
    "Renderer",
]
