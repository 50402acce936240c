"""Product models for the storefront catalog"""

from pydantic import BaseModel, ConfigDict, Field, model_validator
from typing import Any, Optional

PLACEHOLDER_IMAGE = "assets/images/product-placeholder.png"


class Product(BaseModel):
    """Product in the catalog"""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    id: int
    name: str
    category: str
    price: float = Field(ge=0)
    description: Optional[str] = None
    images: list[str] = Field(min_length=1)
    rating: Optional[float] = Field(default=None, ge=0, le=5)
    colors: list[str] = []
    featured: bool = False

    # Product page details
    long_description: Optional[str] = Field(default=None, alias="longDescription")
    ingredients: Optional[str] = None
    how_to_use: Optional[str] = Field(default=None, alias="howToUse")
    benefits: list[str] = []

    @model_validator(mode="before")
    @classmethod
    def _normalize_images(cls, data: Any) -> Any:
        # Older catalog records carry a single "image" instead of "images"
        if isinstance(data, dict) and not data.get("images"):
            data = dict(data)
            data["images"] = [data.pop("image", None) or PLACEHOLDER_IMAGE]
        return data

    @property
    def sku(self) -> str:
        return f"ABS-{self.id:04d}"

    @property
    def primary_image(self) -> str:
        return self.images[0]

    def installment_price(self, installments: int = 12) -> float:
        """Price of each interest-free instalment"""
        if installments < 1:
            raise ValueError("installments must be at least 1")
        return round(self.price / installments, 2)
