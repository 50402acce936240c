"""Shared pytest fixtures for the storefront and payment function tests."""

from typing import Any, Optional

import pytest
from fastapi.testclient import TestClient

from absoluta.functions.core.config import Settings, get_settings
from absoluta.functions.core.dependencies import get_notification_handler, get_payment_client
from absoluta.functions.main import app
from absoluta.functions.services.mercadopago import MercadoPagoError
from absoluta.functions.services.notifications import LoggingNotificationHandler
from absoluta.models import Product
from absoluta.storefront.core.storage import MemoryStorage
from absoluta.storefront.services.cart import CartStore


CATALOG: list[dict[str, Any]] = [
    {
        "id": 1,
        "name": "Sérum Facial Vitamina C",
        "category": "skincare",
        "price": 89.9,
        "description": "Sérum antioxidante que ilumina a pele.",
        "images": ["img/serum.jpg", "img/serum-2.jpg"],
        "rating": 4.8,
        "featured": True,
    },
    {
        "id": 2,
        "name": "Creme Hidratante Facial",
        "category": "skincare",
        "price": 64.5,
        "description": "Hidratação por 24 horas.",
        "images": ["img/creme.jpg"],
    },
    {
        "id": 3,
        "name": "Batom Matte",
        "category": "maquiagem",
        "price": 39.9,
        "images": ["img/batom.jpg"],
        "colors": ["vermelho", "rosa"],
        "featured": True,
    },
    {
        "id": 4,
        "name": "Máscara Capilar",
        "category": "cabelos",
        "price": 54.9,
        "description": "Reconstrução com creme de karité.",
        "images": ["img/mascara.jpg"],
    },
    {
        "id": 5,
        "name": "Óleo Finalizador",
        "category": "cabelo",
        "price": 45.0,
        "description": "Brilho sem pesar.",
        "image": "img/oleo.jpg",
    },
]


@pytest.fixture
def catalog_data() -> list[dict[str, Any]]:
    return [dict(record) for record in CATALOG]


@pytest.fixture
def products(catalog_data) -> list[Product]:
    return [Product.model_validate(record) for record in catalog_data]


@pytest.fixture
def product_by_id(products) -> dict[int, Product]:
    return {p.id: p for p in products}


@pytest.fixture
def storage() -> MemoryStorage:
    return MemoryStorage()


@pytest.fixture
def cart(storage) -> CartStore:
    return CartStore(storage)


class FakeRenderer:
    """Records everything the controller asks the page to do."""

    def __init__(self):
        self.rendered: list[list[Product]] = []
        self.carts: list[tuple[list, float, int]] = []
        self.notices: list[str] = []
        self.urls: list[str] = []
        self.redirects: list[str] = []

    def render_products(self, products):
        self.rendered.append(list(products))

    def render_cart(self, lines, total, item_count):
        self.carts.append((list(lines), total, item_count))

    def notify(self, message):
        self.notices.append(message)

    def push_url(self, fragment):
        self.urls.append(fragment)

    def redirect(self, url):
        self.redirects.append(url)


@pytest.fixture
def renderer() -> FakeRenderer:
    return FakeRenderer()


class FakePaymentClient:
    """Stands in for MercadoPagoClient and records calls."""

    def __init__(
        self,
        payment: Optional[dict] = None,
        preference: Optional[dict] = None,
        error: Optional[Exception] = None,
    ):
        self.payment = payment or {"id": 123, "status": "approved"}
        self.preference = preference or {
            "id": "pref-123",
            "init_point": "https://www.mercadopago.com.br/checkout/v1/redirect?pref_id=pref-123",
            "sandbox_init_point": "https://sandbox.mercadopago.com.br/checkout/v1/redirect?pref_id=pref-123",
        }
        self.error = error
        self.calls: list[tuple[str, Any]] = []

    async def get_payment(self, payment_id: str) -> dict:
        self.calls.append(("get_payment", payment_id))
        if self.error:
            raise self.error
        return self.payment

    async def create_preference(self, preference: dict) -> dict:
        self.calls.append(("create_preference", preference))
        if self.error:
            raise self.error
        return self.preference


@pytest.fixture
def payment_client() -> FakePaymentClient:
    return FakePaymentClient()


@pytest.fixture
def notification_handler() -> LoggingNotificationHandler:
    return LoggingNotificationHandler()


@pytest.fixture
def function_settings() -> Settings:
    return Settings(url="https://loja.example.com/", mp_access_token="TEST-token")


@pytest.fixture
def client(payment_client, notification_handler, function_settings):
    app.dependency_overrides[get_payment_client] = lambda: payment_client
    app.dependency_overrides[get_notification_handler] = lambda: notification_handler
    app.dependency_overrides[get_settings] = lambda: function_settings
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def failing_payment_client() -> FakePaymentClient:
    return FakePaymentClient(error=MercadoPagoError("Mercado Pago unreachable: timed out"))
