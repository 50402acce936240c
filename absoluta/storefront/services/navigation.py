"""
Navigation state <-> URL mapping

The category lives in the URL fragment (``#skincare``), and the search term
rides along as a query inside the fragment (``#skincare?search=creme``) so the
state can be pushed to history without a page reload.
"""

from typing import NamedTuple, Optional
from urllib.parse import parse_qs, quote, urlsplit

from ...models.product import Product
from .filters import ALL_CATEGORIES

SEARCH_PARAM = "search"
CATEGORY_PARAM = "category"
PRODUCT_PAGE = "produto.html"


class FilterState(NamedTuple):
    """Category and search term currently applied to the catalog"""
    category: str = ALL_CATEGORIES
    search_term: str = ""


def encode(category: Optional[str], search_term: Optional[str] = "") -> str:
    """Build the URL fragment for a category and search term"""
    fragment = "#"
    if category and category != ALL_CATEGORIES:
        fragment += category
    if search_term:
        fragment += f"?{SEARCH_PARAM}={quote(search_term, safe='')}"
    return fragment


def _first(params: dict[str, list[str]], name: str) -> str:
    values = params.get(name)
    return values[0] if values else ""


def decode(fragment: Optional[str]) -> FilterState:
    """Read the category and search term back from a URL fragment"""
    fragment = (fragment or "").lstrip("#")
    path, _, query = fragment.partition("?")
    params = parse_qs(query, keep_blank_values=True)
    return FilterState(
        category=path or ALL_CATEGORIES,
        search_term=_first(params, SEARCH_PARAM),
    )


def decode_url(url: str) -> FilterState:
    """
    Read the filter state from a full page URL.

    The fragment wins; the page query string is the fallback for older links
    such as the product page breadcrumb (``index.html?category=skincare``).
    """
    parts = urlsplit(url)
    state = decode(parts.fragment)
    params = parse_qs(parts.query, keep_blank_values=True)
    category = state.category
    if category == ALL_CATEGORIES:
        category = _first(params, CATEGORY_PARAM) or ALL_CATEGORIES
    search_term = state.search_term or _first(params, SEARCH_PARAM)
    return FilterState(category=category, search_term=search_term)


def product_link(product_id: int) -> str:
    return f"{PRODUCT_PAGE}?id={product_id}"


def product_id_from_url(url: str) -> Optional[int]:
    """Product ID from a product page URL, or None"""
    params = parse_qs(urlsplit(url).query)
    try:
        return int(_first(params, "id"))
    except ValueError:
        return None


def share_link(network: str, page_url: str, product: Product) -> Optional[str]:
    """
    Social share URL for a product page.

    Returns None for networks without a share endpoint.
    """
    url = quote(page_url, safe="")
    text = quote(f"Confira {product.name} na Absoluta Store!", safe="")

    if network == "facebook":
        return f"https://www.facebook.com/sharer/sharer.php?u={url}"
    if network == "twitter":
        return f"https://twitter.com/intent/tweet?url={url}&text={text}"
    if network == "pinterest":
        media = quote(product.primary_image, safe="")
        return f"https://pinterest.com/pin/create/button/?url={url}&media={media}&description={text}"
    if network == "whatsapp":
        return f"https://wa.me/?text={text}%20{url}"
    return None
