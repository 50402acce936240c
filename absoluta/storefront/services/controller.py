"""
Storefront Controller

Command interface between the page and the storefront stores. The page
calls the ``on_*`` methods; everything visible goes back out through a
Renderer.
"""

import asyncio
import logging
from typing import Awaitable, Callable, Optional, Protocol

import httpx

from ...models.cart import CartLine
from ...models.product import Product
from .cart import CartStore
from .catalog import CatalogLoadError, CatalogStore
from .checkout import CheckoutError, CheckoutOrchestrator, EmptyCartError
from .filters import ALL_CATEGORIES, filter_products
from .navigation import FilterState, decode, encode

logger = logging.getLogger(__name__)


class Renderer(Protocol):
    """Everything the controller asks the page to do"""

    def render_products(self, products: list[Product]) -> None: ...

    def render_cart(self, lines: list[CartLine], total: float, item_count: int) -> None: ...

    def notify(self, message: str) -> None: ...

    def push_url(self, fragment: str) -> None: ...

    def redirect(self, url: str) -> None: ...


class StorefrontController:
    """Wires catalog, filters, navigation, cart and checkout to a renderer"""

    def __init__(
        self,
        catalog: CatalogStore,
        cart: CartStore,
        checkout: CheckoutOrchestrator,
        renderer: Renderer,
        owned_client: Optional[httpx.AsyncClient] = None,
    ):
        """
        Args:
            owned_client: HTTP client shared by catalog and checkout that
                this controller closes in close()
        """
        self.catalog = catalog
        self.cart = cart
        self.checkout = checkout
        self.renderer = renderer
        self.filter_state = FilterState()
        self.visible: list[Product] = []
        self._owned_client = owned_client
        self.cart.subscribe(self._render_cart)

    async def close(self) -> None:
        """Close catalog, checkout and the shared HTTP client"""
        await self.catalog.close()
        await self.checkout.close()
        if self._owned_client is not None:
            await self._owned_client.aclose()

    async def __aenter__(self) -> "StorefrontController":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.close()

    async def start(self, fragment: Optional[str] = None) -> None:
        """Load the catalog and render the initial view"""
        try:
            await self.catalog.load()
        except CatalogLoadError:
            self.renderer.notify("Não foi possível carregar os produtos")

        if fragment and fragment != "#":
            self._apply(decode(fragment))
        else:
            self.visible = self.catalog.featured()
            self.renderer.render_products(self.visible)
        self._render_cart(self.cart.lines())

    def _apply(self, state: FilterState) -> None:
        self.filter_state = state
        self.visible = filter_products(self.catalog.products, state.category, state.search_term)
        self.renderer.render_products(self.visible)

    def _navigate(self, state: FilterState) -> None:
        self.renderer.push_url(encode(state.category, state.search_term))
        self._apply(state)

    def on_search_input(self, term: str) -> None:
        self._navigate(self.filter_state._replace(search_term=term.strip()))

    def on_category_select(self, category: Optional[str]) -> None:
        self._navigate(self.filter_state._replace(category=category or ALL_CATEGORIES))

    def on_navigation(self, fragment: Optional[str]) -> None:
        """Back/forward: the URL already changed, so only re-render"""
        self._apply(decode(fragment))

    def _render_cart(self, lines: list[CartLine]) -> None:
        total = round(sum(line.subtotal for line in lines), 2)
        count = sum(line.quantity for line in lines)
        self.renderer.render_cart(lines, total, count)

    def _update_cart(self, action: Callable[..., None], *args) -> bool:
        try:
            action(*args)
        except (ValueError, OSError) as e:
            logger.warning(f"Cart update failed: {e}")
            self.renderer.notify("Não foi possível atualizar o carrinho")
            return False
        return True

    def on_add_to_cart(
        self,
        product_id: int,
        quantity: int = 1,
        color: Optional[str] = None,
    ) -> None:
        product = self.catalog.get(product_id)
        if not product:
            self.renderer.notify("Produto não encontrado")
            return
        if quantity < 1:
            self.renderer.notify("Quantidade inválida")
            return
        if not self._update_cart(self.cart.add, product, quantity, color):
            return
        if quantity > 1:
            self.renderer.notify(f"{quantity}x {product.name} adicionados ao carrinho")
        else:
            self.renderer.notify("Produto adicionado ao carrinho")

    def on_remove_from_cart(self, product_id: int) -> None:
        self._update_cart(self.cart.remove, product_id)

    def on_quantity_change(self, product_id: int, delta: int) -> None:
        self._update_cart(self.cart.update_quantity, product_id, delta)

    async def on_checkout(self) -> Optional[str]:
        """Start checkout; returns the redirect URL, or None on failure"""
        try:
            url = await self.checkout.checkout(self.cart.lines())
        except EmptyCartError:
            self.renderer.notify("Adicione itens ao carrinho antes de finalizar")
            return None
        except CheckoutError as e:
            logger.warning(f"Checkout failed: {e}")
            self.renderer.notify(f"Erro ao processar o pagamento: {e}")
            return None

        self.renderer.redirect(url)
        return url


class SearchDebouncer:
    """
    Coalesces rapid search input.

    Only the last term submitted within ``delay`` seconds reaches the
    callback. Must be used from a running event loop.
    """

    def __init__(
        self,
        callback: Callable[[str], Optional[Awaitable[None]]],
        delay: float = 0.3,
    ):
        self.callback = callback
        self.delay = delay
        self._handle: Optional[asyncio.TimerHandle] = None

    def submit(self, term: str) -> None:
        self.cancel()
        loop = asyncio.get_running_loop()
        self._handle = loop.call_later(self.delay, self._fire, term)

    def flush(self, term: str) -> None:
        """Run immediately, e.g. when the user presses Enter"""
        self.cancel()
        self._fire(term)

    def cancel(self) -> None:
        if self._handle is not None:
            self._handle.cancel()
            self._handle = None

    @property
    def pending(self) -> bool:
        return self._handle is not None

    def _fire(self, term: str) -> None:
        self._handle = None
        result = self.callback(term)
        if asyncio.iscoroutine(result):
            asyncio.ensure_future(result)
