"""Payment notification models"""

from pydantic import BaseModel
from typing import Optional
from enum import Enum


class PaymentStatus(str, Enum):
    """Payment statuses reported by Mercado Pago"""
    PENDING = "pending"
    APPROVED = "approved"
    AUTHORIZED = "authorized"
    IN_PROCESS = "in_process"
    IN_MEDIATION = "in_mediation"
    REJECTED = "rejected"
    CANCELLED = "cancelled"
    REFUNDED = "refunded"
    CHARGED_BACK = "charged_back"


FINAL_STATUSES = {
    PaymentStatus.APPROVED,
    PaymentStatus.REJECTED,
    PaymentStatus.CANCELLED,
    PaymentStatus.REFUNDED,
    PaymentStatus.CHARGED_BACK,
}


class WebhookNotification(BaseModel):
    """A payment status reported by one provider callback.

    ``status`` stays a plain string so statuses the provider adds later are
    carried through instead of failing validation.
    """
    payment_id: str
    status: str

    @property
    def known_status(self) -> Optional[PaymentStatus]:
        try:
            return PaymentStatus(self.status)
        except ValueError:
            return None

    @property
    def is_final(self) -> bool:
        return self.known_status in FINAL_STATUSES


class WebhookAck(BaseModel):
    """Acknowledgement returned to the provider"""
    received: bool = True
