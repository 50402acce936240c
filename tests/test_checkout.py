"""Tests for the checkout orchestrator."""

import asyncio
import json

import httpx
import pytest

from absoluta.models import CartLine, CheckoutState
from absoluta.storefront.services.checkout import (
    PLACEHOLDER_PICTURE_URL,
    CheckoutInProgressError,
    CheckoutOrchestrator,
    EmptyCartError,
    PreferenceCreationError,
    build_preference_request,
)

PREFERENCE_URL = "http://loja.test/api/create-preference"
CHECKOUT_URL = "https://www.mercadopago.com.br/checkout/v1/redirect?pref_id=pref-1"


def line(product_id=1, name="X", price=10.0, quantity=2, image="img/x.jpg") -> CartLine:
    return CartLine(id=product_id, name=name, price=price, quantity=quantity, image=image)


def orchestrator(handler) -> CheckoutOrchestrator:
    client = httpx.AsyncClient(transport=httpx.MockTransport(handler))
    return CheckoutOrchestrator(PREFERENCE_URL, http_client=client)


def ok_handler(requests):
    def handler(request: httpx.Request) -> httpx.Response:
        requests.append(request)
        return httpx.Response(200, json={"url": CHECKOUT_URL, "preferenceId": "pref-1"})

    return handler


class TestBuildPreferenceRequest:
    """Tests for mapping cart lines to a preference request."""

    def test_single_line(self):
        request = build_preference_request([line(1, "X", 10, 2)])

        assert len(request.items) == 1
        item = request.items[0]
        assert item.id == 1
        assert item.title == "X"
        assert item.quantity == 2
        assert item.unit_price == 10
        assert item.description == "Produto: X"
        assert item.category_id == "beauty"
        assert request.total == 20

    def test_total_matches_cart_total(self, cart):
        from absoluta.models import Product

        cart.add(Product(id=1, name="A", category="skincare", price=10, images=["a.jpg"]), 2)
        cart.add(Product(id=2, name="B", category="skincare", price=5.5, images=["b.jpg"]), 1)

        assert build_preference_request(cart.lines()).total == cart.total() == 25.5

    def test_missing_image_uses_placeholder(self):
        request = build_preference_request([line(image=None)])

        assert request.items[0].picture_url == PLACEHOLDER_PICTURE_URL


@pytest.mark.asyncio
async def test_empty_cart_makes_no_request():
    requests = []
    checkout = orchestrator(ok_handler(requests))

    with pytest.raises(EmptyCartError):
        await checkout.checkout([])

    assert requests == []
    assert checkout.state == CheckoutState.IDLE


@pytest.mark.asyncio
async def test_successful_checkout_returns_redirect_url():
    requests = []
    checkout = orchestrator(ok_handler(requests))

    url = await checkout.checkout([line(1, "X", 10, 2)])

    assert url == CHECKOUT_URL
    assert checkout.state == CheckoutState.REDIRECTING
    assert checkout.session.preference_id == "pref-1"

    [request] = requests
    assert request.method == "POST"
    assert str(request.url) == PREFERENCE_URL
    body = json.loads(request.content)
    assert body["total"] == 20
    assert body["items"] == [
        {
            "id": 1,
            "title": "X",
            "quantity": 2,
            "unit_price": 10.0,
            "picture_url": "img/x.jpg",
            "description": "Produto: X",
            "category_id": "beauty",
        }
    ]


@pytest.mark.asyncio
async def test_live_url_preferred_over_sandbox():
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(
            200,
            json={"id": "pref-2", "init_point": "https://live", "sandbox_init_point": "https://sandbox"},
        )

    checkout = orchestrator(handler)

    assert await checkout.checkout([line()]) == "https://live"


@pytest.mark.asyncio
async def test_second_attempt_is_rejected_until_reset():
    requests = []
    checkout = orchestrator(ok_handler(requests))
    await checkout.checkout([line()])

    with pytest.raises(CheckoutInProgressError):
        await checkout.checkout([line()])
    assert len(requests) == 1

    checkout.reset()
    await checkout.checkout([line()])
    assert len(requests) == 2


@pytest.mark.asyncio
async def test_error_response_carries_remote_detail_and_allows_retry():
    responses = [
        httpx.Response(
            500,
            json={"error": "Error creating payment preference", "details": "invalid token"},
        ),
        httpx.Response(200, json={"url": CHECKOUT_URL, "preferenceId": "pref-1"}),
    ]

    def handler(request: httpx.Request) -> httpx.Response:
        return responses.pop(0)

    checkout = orchestrator(handler)

    with pytest.raises(PreferenceCreationError) as exc_info:
        await checkout.checkout([line()])

    assert exc_info.value.message == "Error creating payment preference"
    assert exc_info.value.details == "invalid token"
    assert exc_info.value.status_code == 500
    assert checkout.state == CheckoutState.FAILED
    assert checkout.session.error == "Error creating payment preference"

    assert await checkout.checkout([line()]) == CHECKOUT_URL
    assert checkout.session.attempts == 2


@pytest.mark.asyncio
async def test_non_json_error_response():
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(502, text="Bad Gateway")

    checkout = orchestrator(handler)

    with pytest.raises(PreferenceCreationError) as exc_info:
        await checkout.checkout([line()])

    assert exc_info.value.status_code == 502
    assert exc_info.value.details == "Bad Gateway"


@pytest.mark.asyncio
async def test_unreachable_endpoint():
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("connection refused", request=request)

    checkout = orchestrator(handler)

    with pytest.raises(PreferenceCreationError) as exc_info:
        await checkout.checkout([line()])

    assert exc_info.value.status_code is None
    assert checkout.state == CheckoutState.FAILED


@pytest.mark.asyncio
async def test_success_without_url_is_an_error():
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, json={"preferenceId": "pref-1"})

    checkout = orchestrator(handler)

    with pytest.raises(PreferenceCreationError):
        await checkout.checkout([line()])
    assert checkout.state == CheckoutState.FAILED


@pytest.mark.asyncio
async def test_cancelled_attempt_does_not_block_next_checkout():
    started = asyncio.Event()
    release = asyncio.Event()
    requests = []

    async def handler(request: httpx.Request) -> httpx.Response:
        requests.append(request)
        if len(requests) == 1:
            started.set()
            await release.wait()
        return httpx.Response(200, json={"url": CHECKOUT_URL, "preferenceId": "pref-1"})

    checkout = orchestrator(handler)
    task = asyncio.ensure_future(checkout.checkout([line()]))
    await started.wait()
    task.cancel()

    with pytest.raises(asyncio.CancelledError):
        await task
    assert checkout.state == CheckoutState.FAILED

    assert await checkout.checkout([line()]) == CHECKOUT_URL
    assert checkout.state == CheckoutState.REDIRECTING


@pytest.mark.asyncio
async def test_unexpected_error_marks_attempt_failed():
    def handler(request: httpx.Request) -> httpx.Response:
        raise RuntimeError("transport bug")

    checkout = orchestrator(handler)

    with pytest.raises(RuntimeError):
        await checkout.checkout([line()])
    assert checkout.state == CheckoutState.FAILED
    assert checkout.session.error == "transport bug"
