"""Product filtering by category and search term"""

from typing import Iterable, Optional

from ...models.product import Product

ALL_CATEGORIES = "all"

# Alternate slug -> canonical slug
CATEGORY_ALIASES = {
    "cabelo": "cabelos",
}


def canonical_category(category: str) -> str:
    return CATEGORY_ALIASES.get(category, category)


def matches_category(product: Product, category: Optional[str]) -> bool:
    if not category or category == ALL_CATEGORIES:
        return True
    return (
        product.category == category
        or canonical_category(product.category) == canonical_category(category)
    )


def matches_search(product: Product, search_term: Optional[str]) -> bool:
    term = (search_term or "").strip().lower()
    if not term:
        return True
    if term in product.name.lower():
        return True
    return bool(product.description) and term in product.description.lower()


def filter_products(
    products: Iterable[Product],
    category: Optional[str] = ALL_CATEGORIES,
    search_term: Optional[str] = "",
) -> list[Product]:
    """
    Visible subset of products for a category and search term.

    Keeps the input order. An unknown category gives an empty list.
    """
    return [
        p for p in products
        if matches_category(p, category) and matches_search(p, search_term)
    ]
