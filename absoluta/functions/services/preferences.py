"""Builds Mercado Pago checkout preferences from storefront orders"""

import logging
import time
from typing import Optional

from ...models.checkout import PreferenceRequest
from ..core.config import Settings

logger = logging.getLogger(__name__)

WEBHOOK_PATH = "/api/webhook"


def build_preference(
    order: PreferenceRequest,
    settings: Settings,
    reference: Optional[str] = None,
) -> dict:
    """
    Provider preference for an order.

    Args:
        order: Items and total sent by the storefront
        settings: Supplies currency, callback base URL and defaults
        reference: External reference; a timestamped one is generated if omitted
    """
    if abs(order.items_total - order.total) > 0.005:
        logger.warning(
            f"Order total {order.total} does not match item sum {order.items_total}"
        )

    preference = {
        "items": [
            {
                "id": str(item.id),
                "title": item.title,
                "quantity": item.quantity,
                "currency_id": settings.currency_id,
                "unit_price": item.unit_price,
                "description": item.description,
                "picture_url": item.picture_url or settings.default_picture_url,
                "category_id": item.category_id or settings.default_category_id,
            }
            for item in order.items
        ],
        "auto_return": "all",
        "external_reference": reference or (
            f"{settings.external_reference_prefix}-{int(time.time() * 1000)}"
        ),
        "statement_descriptor": settings.statement_descriptor,
        "binary_mode": True,
    }

    site_url = settings.site_url
    if site_url:
        preference["back_urls"] = {
            "success": f"{site_url}/success",
            "pending": f"{site_url}/pending",
            "failure": f"{site_url}/error",
        }
        preference["notification_url"] = f"{site_url}{WEBHOOK_PATH}"
    else:
        logger.warning("URL not configured - preference has no callback URLs")

    return preference


def checkout_url(provider_response: dict) -> Optional[str]:
    """Live checkout URL, falling back to the sandbox one"""
    return provider_response.get("init_point") or provider_response.get("sandbox_init_point")
