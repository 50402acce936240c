"""
Payment notification handling.

The webhook hands every confirmed notification to a handler. The default
one only logs; storing order and payment state belongs in a subclass.
"""

import logging
from collections import OrderedDict

from ...models.payment import WebhookNotification

logger = logging.getLogger(__name__)

DEFAULT_MAX_REMEMBERED = 10_000


class PaymentNotificationHandler:
    """Receives payment notifications after the payment has been fetched.

    The provider may deliver the same notification several times and in any
    order, so implementations must be safe to call repeatedly.
    """

    async def handle(self, notification: WebhookNotification, payment: dict) -> None:
        raise NotImplementedError


class LoggingNotificationHandler(PaymentNotificationHandler):
    """
    Logs each (payment, status) pair once.

    Only the most recent ``max_remembered`` pairs are kept in memory, oldest
    dropped first, so a very late redelivery may be logged again. A
    persistent handler should record processed notifications in its store.
    """

    def __init__(self, max_remembered: int = DEFAULT_MAX_REMEMBERED):
        self.max_remembered = max_remembered
        self.processed: OrderedDict[tuple[str, str], None] = OrderedDict()

    def _remember(self, key: tuple[str, str]) -> bool:
        """Record key; False if it was already seen"""
        if key in self.processed:
            self.processed.move_to_end(key)
            return False
        self.processed[key] = None
        while len(self.processed) > self.max_remembered:
            self.processed.popitem(last=False)
        return True

    async def handle(self, notification: WebhookNotification, payment: dict) -> None:
        if not self._remember((notification.payment_id, notification.status)):
            logger.debug(f"Duplicate notification for payment {notification.payment_id}")
            return

        logger.info(
            f"Payment {notification.payment_id} status: {notification.status} "
            f"(reference={payment.get('external_reference')}, "
            f"amount={payment.get('transaction_amount')})"
        )
        if notification.known_status is None:
            logger.warning(f"Unknown payment status '{notification.status}'")
