"""
Catalog Store

Loads the product catalog document and holds it for the session.
"""

import logging
import random
from typing import Optional

import httpx
from pydantic import TypeAdapter, ValidationError

from ...models.product import Product

logger = logging.getLogger(__name__)

CATEGORY_NAMES = {
    "skincare": "Skincare",
    "maquiagem": "Maquiagem",
    "cabelos": "Cabelos",
    "cabelo": "Cabelos",
    "acessorios": "Acessórios",
}

_product_list = TypeAdapter(list[Product])


class CatalogLoadError(Exception):
    """The catalog document could not be fetched or parsed"""
    pass


class CatalogStore:
    """In-memory product set, reloaded on every page load"""

    def __init__(
        self,
        catalog_url: str,
        http_client: Optional[httpx.AsyncClient] = None,
        timeout: float = 30.0,
    ):
        self.catalog_url = catalog_url
        self._http_client = http_client or httpx.AsyncClient(timeout=timeout)
        self._owns_client = http_client is None
        self.products: list[Product] = []

    async def close(self) -> None:
        """Close HTTP client"""
        if self._owns_client:
            await self._http_client.aclose()

    async def load(self) -> list[Product]:
        """
        Fetch the catalog.

        On any failure the product set is emptied and CatalogLoadError is
        raised; the caller is expected to tell the user and may call again.
        """
        try:
            response = await self._http_client.get(self.catalog_url)
            response.raise_for_status()
            products = _product_list.validate_python(response.json())
        except (httpx.HTTPError, ValueError, ValidationError) as e:
            self.products = []
            logger.error(f"Failed to load catalog from {self.catalog_url}: {e}")
            raise CatalogLoadError(str(e)) from e

        self.products = products
        logger.info(f"Loaded {len(products)} products")
        return list(products)

    def get(self, product_id: int) -> Optional[Product]:
        """Get a product by ID"""
        return next((p for p in self.products if p.id == product_id), None)

    def featured(self) -> list[Product]:
        """Products highlighted on the landing page"""
        return [p for p in self.products if p.featured]

    def categories(self) -> list[str]:
        """Distinct category slugs in catalog order"""
        return list(dict.fromkeys(p.category for p in self.products))

    def related(
        self,
        product: Product,
        limit: int = 4,
        rng: Optional[random.Random] = None,
    ) -> list[Product]:
        """Random pick of other products from the same category"""
        candidates = [
            p for p in self.products
            if p.id != product.id and p.category == product.category
        ]
        (rng or random).shuffle(candidates)
        return candidates[:limit]


def format_category(category: str) -> str:
    """Display name for a category slug"""
    return CATEGORY_NAMES.get(category, category)


def format_price(amount: float) -> str:
    """Format an amount as Brazilian reais, e.g. R$ 1.234,56"""
    formatted = f"{amount:,.2f}".replace(",", "_").replace(".", ",").replace("_", ".")
    return f"R$ {formatted}"
