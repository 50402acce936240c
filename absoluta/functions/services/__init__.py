# Payment Function Services

from .mercadopago import MercadoPagoClient, MercadoPagoError, ConfigurationError
from .preferences import build_preference, checkout_url
from .notifications import PaymentNotificationHandler, LoggingNotificationHandler

__all__ = [
    "MercadoPagoClient",
    "MercadoPagoError",
    "ConfigurationError",
    "build_preference",
    "checkout_url",
    "PaymentNotificationHandler",
    "LoggingNotificationHandler",
]
