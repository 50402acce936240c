"""Preference creation route"""

import logging
from fastapi import APIRouter, HTTPException, Depends

from ...models.checkout import ErrorResponse, PreferenceRequest, PreferenceResponse
from ..core.config import Settings, get_settings
from ..core.dependencies import get_payment_client
from ..services.mercadopago import MercadoPagoClient, MercadoPagoError
from ..services.preferences import build_preference, checkout_url

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/create-preference", tags=["Checkout"])


def _failure(details: str) -> HTTPException:
    return HTTPException(
        status_code=500,
        detail=ErrorResponse(
            error="Error creating payment preference",
            details=details,
        ).model_dump(exclude_none=True),
    )


@router.post("", response_model=PreferenceResponse)
async def create_preference(
    order: PreferenceRequest,
    settings: Settings = Depends(get_settings),
    client: MercadoPagoClient = Depends(get_payment_client),
):
    """
    Create a Mercado Pago preference for the storefront cart.

    Returns the hosted checkout URL the storefront redirects to.
    """
    preference = build_preference(order, settings)

    try:
        result = await client.create_preference(preference)
    except MercadoPagoError as e:
        logger.error(f"Error creating preference: {e}")
        raise _failure(str(e))

    url = checkout_url(result)
    if not url:
        logger.error(f"Preference {result.get('id')} has no checkout URL")
        raise _failure("Preference response has no checkout URL")

    logger.info(
        f"Preference {result.get('id')} created: {len(order.items)} items, "
        f"total {order.total} ({preference['external_reference']})"
    )
    return PreferenceResponse(url=url, preference_id=str(result.get("id")))
