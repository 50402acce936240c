"""Cart storage for the storefront"""

import json
import logging
from typing import Callable, Optional

from pydantic import TypeAdapter, ValidationError

from ...models.cart import CartLine
from ...models.product import Product
from ..core.storage import Storage

logger = logging.getLogger(__name__)

CART_STORAGE_KEY = "absoluta_cart_v1"

_line_list = TypeAdapter(list[CartLine])

CartListener = Callable[[list[CartLine]], None]


class CartStore:
    """
    Shopping cart persisted to durable storage.

    Every operation re-reads storage before mutating and commits the whole
    collection afterwards. Other tabs sharing the storage win if they write
    last.
    """

    def __init__(self, storage: Storage, key: str = CART_STORAGE_KEY):
        self.storage = storage
        self.key = key
        self._listeners: list[CartListener] = []

    def subscribe(self, listener: CartListener) -> None:
        """Call listener with the committed lines after every mutation"""
        self._listeners.append(listener)

    def _load(self) -> list[CartLine]:
        raw = self.storage.get_item(self.key)
        if not raw:
            return []
        try:
            return _line_list.validate_json(raw)
        except ValidationError as e:
            logger.warning(f"Discarding unreadable cart data under {self.key}: {e}")
            return []

    def _save(self, lines: list[CartLine]) -> None:
        payload = json.dumps([line.model_dump() for line in lines])
        self.storage.set_item(self.key, payload)
        for listener in self._listeners:
            listener(list(lines))

    def lines(self) -> list[CartLine]:
        """Snapshot of the current cart lines"""
        return self._load()

    def is_empty(self) -> bool:
        return not self._load()

    def add(
        self,
        product: Product,
        quantity: int = 1,
        color: Optional[str] = None,
    ) -> list[CartLine]:
        """Add a product, merging into its existing line if there is one"""
        if quantity < 1:
            raise ValueError("quantity must be at least 1")

        lines = self._load()
        existing = next((line for line in lines if line.id == product.id), None)

        if existing:
            existing.quantity += quantity
        else:
            lines.append(
                CartLine(
                    id=product.id,
                    name=product.name,
                    price=product.price,
                    image=product.primary_image,
                    quantity=quantity,
                    color=color,
                )
            )

        self._save(lines)
        return lines

    def remove(self, product_id: int) -> list[CartLine]:
        """Remove a product's line; nothing happens if it is not in the cart"""
        lines = self._load()
        remaining = [line for line in lines if line.id != product_id]
        if len(remaining) != len(lines):
            self._save(remaining)
        return remaining

    def update_quantity(self, product_id: int, delta: int) -> list[CartLine]:
        """
        Change a line's quantity by delta.

        A result of zero or less removes the line. Unknown products are ignored.
        """
        lines = self._load()
        line = next((line for line in lines if line.id == product_id), None)
        if not line:
            return lines

        new_quantity = line.quantity + delta
        if new_quantity <= 0:
            return self.remove(product_id)

        line.quantity = new_quantity
        self._save(lines)
        return lines

    def clear(self) -> None:
        """Remove every line"""
        self._save([])

    def total(self) -> float:
        return round(sum(line.subtotal for line in self._load()), 2)

    def item_count(self) -> int:
        return sum(line.quantity for line in self._load())
