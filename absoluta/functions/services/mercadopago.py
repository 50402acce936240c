"""
Mercado Pago API Client

HTTP client for the Mercado Pago REST API: checkout preferences and payments.
"""

import logging
from typing import Optional, Any
from urllib.parse import quote

import httpx

logger = logging.getLogger(__name__)


class MercadoPagoError(Exception):
    """Base exception for Mercado Pago client errors"""
    pass


class ConfigurationError(MercadoPagoError):
    """The client is missing its access token"""
    pass


class MercadoPagoClient:
    """
    Client for the Mercado Pago API.

    Usage:
        client = MercadoPagoClient(access_token="APP_USR-...")
        preference = await client.create_preference({...})
        payment = await client.get_payment("123456789")
    """

    def __init__(
        self,
        access_token: Optional[str],
        base_url: str = "https://api.mercadopago.com",
        timeout: float = 30.0,
        http_client: Optional[httpx.AsyncClient] = None,
    ):
        self.access_token = access_token
        self.base_url = base_url.rstrip("/")
        self._http_client = http_client or httpx.AsyncClient(timeout=timeout)

    async def close(self) -> None:
        """Close HTTP client"""
        await self._http_client.aclose()

    def _headers(self) -> dict[str, str]:
        if not self.access_token:
            raise ConfigurationError("Mercado Pago access token not configured")
        return {
            "Authorization": f"Bearer {self.access_token}",
            "Content-Type": "application/json",
            "Accept": "application/json",
        }

    async def _request(
        self,
        method: str,
        path: str,
        body: Optional[dict] = None,
    ) -> dict[str, Any]:
        """Make an authenticated request, raising MercadoPagoError on failure"""
        url = f"{self.base_url}{path}"
        headers = self._headers()

        try:
            response = await self._http_client.request(
                method=method,
                url=url,
                headers=headers,
                json=body,
            )
        except httpx.HTTPError as e:
            logger.error(f"Mercado Pago request failed: {method} {path} - {e}")
            raise MercadoPagoError(f"Mercado Pago unreachable: {e}") from e

        if response.status_code >= 400:
            logger.error(f"Mercado Pago request failed: {response.status_code} - {response.text}")
            raise MercadoPagoError(_error_message(response))

        return response.json()

    async def create_preference(self, preference: dict) -> dict:
        """Create a checkout preference"""
        return await self._request("POST", "/checkout/preferences", body=preference)

    async def get_payment(self, payment_id: str) -> dict:
        """Get payment details"""
        return await self._request("GET", f"/v1/payments/{quote(str(payment_id), safe='')}")


def _error_message(response: httpx.Response) -> str:
    try:
        body = response.json()
    except ValueError:
        return f"HTTP {response.status_code}"
    if isinstance(body, dict) and body.get("message"):
        return f"{body['message']} (HTTP {response.status_code})"
    return f"HTTP {response.status_code}"
