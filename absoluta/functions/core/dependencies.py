"""Shared dependencies for the payment function routes"""

from typing import Optional

from .config import get_settings
from ..services.mercadopago import MercadoPagoClient
from ..services.notifications import LoggingNotificationHandler, PaymentNotificationHandler

# Initialize services lazily (overridden in tests)
payment_client: Optional[MercadoPagoClient] = None
notification_handler: Optional[PaymentNotificationHandler] = None


def get_payment_client() -> MercadoPagoClient:
    """Get or create the Mercado Pago client"""
    global payment_client
    if payment_client is None:
        settings = get_settings()
        payment_client = MercadoPagoClient(
            access_token=settings.mp_access_token,
            base_url=settings.mp_api_base_url,
            timeout=settings.mp_timeout,
        )
    return payment_client


def get_notification_handler() -> PaymentNotificationHandler:
    """Get or create the payment notification handler"""
    global notification_handler
    if notification_handler is None:
        notification_handler = LoggingNotificationHandler()
    return notification_handler


async def close_payment_client() -> None:
    global payment_client
    if payment_client is not None:
        await payment_client.close()
        payment_client = None
