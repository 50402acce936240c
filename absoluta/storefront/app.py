"""
Storefront Application

Builds the storefront stores for one browsing session from settings.
"""

import logging
from typing import Optional

import httpx

from .core.config import Settings, get_settings
from .core.storage import create_storage
from .services.cart import CartStore
from .services.catalog import CatalogStore
from .services.checkout import CheckoutOrchestrator
from .services.controller import Renderer, SearchDebouncer, StorefrontController

logger = logging.getLogger(__name__)


def create_controller(
    renderer: Renderer,
    settings: Optional[Settings] = None,
    http_client: Optional[httpx.AsyncClient] = None,
) -> StorefrontController:
    """
    Create a controller wired to the configured site and cart storage.

    A client passed in stays open after ``controller.close()``; one created
    here is closed with the controller.
    """
    settings = settings or get_settings()
    client = http_client or httpx.AsyncClient(timeout=settings.request_timeout)

    logger.debug(f"Storefront site: {settings.site_url}")
    return StorefrontController(
        catalog=CatalogStore(settings.catalog_url, http_client=client),
        cart=CartStore(create_storage(settings.storage_path), key=settings.cart_storage_key),
        checkout=CheckoutOrchestrator(settings.preference_url, http_client=client),
        renderer=renderer,
        owned_client=client if http_client is None else None,
    )


def create_search_debouncer(
    controller: StorefrontController,
    settings: Optional[Settings] = None,
) -> SearchDebouncer:
    """Debouncer feeding search input into the controller"""
    settings = settings or get_settings()
    return SearchDebouncer(controller.on_search_input, delay=settings.search_debounce_seconds)
