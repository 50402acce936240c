# Storefront Models

from .product import Product, PLACEHOLDER_IMAGE
from .cart import CartLine
from .checkout import (
    CheckoutState,
    PreferenceItem,
    PreferenceRequest,
    PreferenceResponse,
    ErrorResponse,
)
from .payment import PaymentStatus, WebhookNotification, WebhookAck

__all__ = [
    "Product",
    "PLACEHOLDER_IMAGE",
    "CartLine",
    "CheckoutState",
    "PreferenceItem",
    "PreferenceRequest",
    "PreferenceResponse",
    "ErrorResponse",
    "PaymentStatus",
    "WebhookNotification",
    "WebhookAck",
]
