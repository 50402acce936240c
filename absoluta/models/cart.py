"""Cart models for the storefront"""

from pydantic import BaseModel, Field
from typing import Optional


class CartLine(BaseModel):
    """Line item in the shopping cart.

    ``price`` is a snapshot taken when the product was first added.
    """
    id: int
    name: str
    price: float = Field(ge=0)
    image: Optional[str] = None
    quantity: int = Field(ge=1)
    color: Optional[str] = None

    @property
    def subtotal(self) -> float:
        return self.price * self.quantity
