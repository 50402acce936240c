"""Checkout models shared by the storefront and the payment functions"""

from pydantic import BaseModel, ConfigDict, Field
from typing import Optional
from enum import Enum


class CheckoutState(str, Enum):
    """Where a checkout attempt currently is"""
    IDLE = "idle"
    SUBMITTING = "submitting"
    REDIRECTING = "redirecting"
    FAILED = "failed"


class PreferenceItem(BaseModel):
    """One order item, in the payment provider's item shape"""
    id: int
    title: str
    quantity: int = Field(gt=0)
    unit_price: float = Field(ge=0)
    picture_url: Optional[str] = None
    description: Optional[str] = None
    category_id: Optional[str] = None


class PreferenceRequest(BaseModel):
    """Order payload sent to the preference-creation endpoint"""
    items: list[PreferenceItem] = Field(min_length=1)
    total: float = Field(ge=0)

    @property
    def items_total(self) -> float:
        return round(sum(item.unit_price * item.quantity for item in self.items), 2)


class PreferenceResponse(BaseModel):
    """Response from the preference-creation endpoint.

    The endpoint answers with ``url``. When the raw provider body is passed
    through instead, the live ``init_point`` wins over ``sandbox_init_point``.
    """

    model_config = ConfigDict(populate_by_name=True)

    url: Optional[str] = None
    preference_id: Optional[str] = Field(default=None, alias="preferenceId")
    init_point: Optional[str] = Field(default=None, exclude=True)
    sandbox_init_point: Optional[str] = Field(default=None, exclude=True)

    @property
    def redirect_url(self) -> Optional[str]:
        return self.url or self.init_point or self.sandbox_init_point


class ErrorResponse(BaseModel):
    """Error body returned by the payment functions"""
    error: str
    details: Optional[str] = None
