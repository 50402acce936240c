"""Payment webhook route"""

import json
import logging
from typing import Optional

from fastapi import APIRouter, HTTPException, Depends, Request

from ...models.checkout import ErrorResponse
from ...models.payment import WebhookAck, WebhookNotification
from ..core.dependencies import get_notification_handler, get_payment_client
from ..services.mercadopago import MercadoPagoClient, MercadoPagoError
from ..services.notifications import PaymentNotificationHandler

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/webhook", tags=["Payments"])


async def extract_payment_id(request: Request) -> Optional[str]:
    """
    Payment ID from a provider notification.

    Older notifications send ``?id=``, newer ones ``?data.id=`` and a JSON
    body with ``data.id``.
    """
    payment_id = request.query_params.get("id") or request.query_params.get("data.id")
    if payment_id:
        return payment_id

    body = await request.body()
    if not body:
        return None
    try:
        payload = json.loads(body)
    except ValueError:
        return None
    data = payload.get("data") if isinstance(payload, dict) else None
    if isinstance(data, dict) and data.get("id"):
        return str(data["id"])
    return None


def is_valid_payment_id(payment_id: str) -> bool:
    return payment_id.isascii() and payment_id.isdigit()


def _failure(details: str) -> HTTPException:
    return HTTPException(
        status_code=500,
        detail=ErrorResponse(error="Error processing webhook", details=details).model_dump(
            exclude_none=True
        ),
    )


@router.post("", response_model=WebhookAck)
async def payment_webhook(
    request: Request,
    client: MercadoPagoClient = Depends(get_payment_client),
    handler: PaymentNotificationHandler = Depends(get_notification_handler),
):
    """
    Receive a Mercado Pago payment notification.

    Failures to fetch the payment answer 500 so the provider delivers the
    notification again later.
    """
    payment_id = await extract_payment_id(request)
    if not payment_id:
        raise HTTPException(status_code=400, detail="Missing payment ID")
    # Mercado Pago payment IDs are numeric; anything else never reaches the API
    if not is_valid_payment_id(payment_id):
        logger.warning(f"Rejected webhook with invalid payment ID {payment_id!r}")
        raise HTTPException(status_code=400, detail="Invalid payment ID")

    try:
        payment = await client.get_payment(payment_id)
    except MercadoPagoError as e:
        logger.error(f"Webhook error for payment {payment_id}: {e}")
        raise _failure(str(e))

    notification = WebhookNotification(
        payment_id=payment_id,
        status=str(payment.get("status") or "unknown"),
    )

    try:
        await handler.handle(notification, payment)
    except Exception as e:
        logger.exception(f"Notification handler failed for payment {payment_id}")
        raise _failure(str(e))

    return WebhookAck()
