"""
Checkout Orchestrator

Turns the cart into a payment preference request, calls the
preference-creation endpoint and hands back the provider checkout URL.
"""

import logging
from typing import Optional, Sequence

import httpx
from pydantic import ValidationError

from ...models.cart import CartLine
from ...models.checkout import (
    CheckoutState,
    PreferenceItem,
    PreferenceRequest,
    PreferenceResponse,
)
from ..core.session import CheckoutSession

logger = logging.getLogger(__name__)

PLACEHOLDER_PICTURE_URL = "https://via.placeholder.com/150"
DEFAULT_CATEGORY_ID = "beauty"


class CheckoutError(Exception):
    """Base exception for checkout failures"""
    pass


class EmptyCartError(CheckoutError):
    """Checkout attempted with nothing in the cart"""

    def __init__(self, message: str = "Cart is empty"):
        super().__init__(message)


class CheckoutInProgressError(CheckoutError):
    """A previous checkout attempt has not finished yet"""
    pass


class PreferenceCreationError(CheckoutError):
    """The preference endpoint rejected the order or could not be reached"""

    def __init__(
        self,
        message: str,
        details: Optional[str] = None,
        status_code: Optional[int] = None,
    ):
        super().__init__(message)
        self.message = message
        self.details = details
        self.status_code = status_code


def build_preference_request(lines: Sequence[CartLine]) -> PreferenceRequest:
    """Map cart lines to the payment provider's order shape"""
    items = [
        PreferenceItem(
            id=line.id,
            title=line.name,
            quantity=line.quantity,
            unit_price=line.price,
            picture_url=line.image or PLACEHOLDER_PICTURE_URL,
            description=f"Produto: {line.name}",
            category_id=DEFAULT_CATEGORY_ID,
        )
        for line in lines
    ]
    total = round(sum(line.subtotal for line in lines), 2)
    return PreferenceRequest(items=items, total=total)


class CheckoutOrchestrator:
    """
    Client for the preference-creation endpoint.

    One attempt runs at a time: a second call while an attempt is submitting
    or redirecting raises CheckoutInProgressError instead of creating another
    preference.
    """

    def __init__(
        self,
        preference_url: str,
        http_client: Optional[httpx.AsyncClient] = None,
        timeout: float = 30.0,
    ):
        self.preference_url = preference_url
        self._http_client = http_client or httpx.AsyncClient(timeout=timeout)
        self._owns_client = http_client is None
        self.session = CheckoutSession()

    async def close(self) -> None:
        """Close HTTP client"""
        if self._owns_client:
            await self._http_client.aclose()

    @property
    def state(self) -> CheckoutState:
        return self.session.state

    def reset(self) -> None:
        self.session.reset()

    async def checkout(self, lines: Sequence[CartLine]) -> str:
        """
        Create a payment preference for the cart.

        Returns:
            The provider checkout URL to redirect to

        Raises:
            EmptyCartError: nothing to buy; no request is made
            CheckoutInProgressError: another attempt is still running
            PreferenceCreationError: the endpoint failed or was unreachable
        """
        if not lines:
            raise EmptyCartError()

        if self.session.in_flight:
            raise CheckoutInProgressError(
                f"Checkout already {self.session.state.value}"
            )

        request = build_preference_request(lines)
        self.session.update_state(CheckoutState.SUBMITTING)
        self.session.attempts += 1
        self.session.error = None

        try:
            result = await self._create_preference(request)
        except PreferenceCreationError as e:
            self.session.error = e.message
            self.session.update_state(CheckoutState.FAILED)
            raise
        except BaseException as e:
            # cancelled or unexpected: never leave the session stuck submitting
            self.session.error = str(e) or type(e).__name__
            self.session.update_state(CheckoutState.FAILED)
            raise

        self.session.preference_id = result.preference_id
        self.session.redirect_url = result.redirect_url
        self.session.update_state(CheckoutState.REDIRECTING)
        logger.info(
            f"Preference {result.preference_id} created for "
            f"{len(request.items)} items, total {request.total}"
        )
        return result.redirect_url

    async def _create_preference(self, request: PreferenceRequest) -> PreferenceResponse:
        try:
            response = await self._http_client.post(
                self.preference_url,
                json=request.model_dump(mode="json"),
                headers={"Accept": "application/json"},
            )
        except httpx.HTTPError as e:
            logger.error(f"Preference request failed: {e}")
            raise PreferenceCreationError(
                "Erro ao processar o pagamento", details=str(e)
            ) from e

        if response.status_code >= 400:
            logger.error(f"Preference request failed: {response.status_code} - {response.text}")
            error, details = _error_detail(response)
            raise PreferenceCreationError(
                error, details=details, status_code=response.status_code
            )

        try:
            result = PreferenceResponse.model_validate(response.json())
        except (ValueError, ValidationError) as e:
            raise PreferenceCreationError(
                "Invalid preference response", details=str(e),
                status_code=response.status_code,
            ) from e

        if not result.redirect_url:
            raise PreferenceCreationError(
                "Preference response has no checkout URL",
                status_code=response.status_code,
            )
        return result


def _error_detail(response: httpx.Response) -> tuple[str, Optional[str]]:
    try:
        body = response.json()
    except ValueError:
        return "Erro ao processar o pagamento", response.text or None
    if not isinstance(body, dict):
        return "Erro ao processar o pagamento", None
    return body.get("error") or "Erro ao processar o pagamento", body.get("details")
