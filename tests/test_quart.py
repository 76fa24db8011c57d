"""Async tests for flask_storefront Quart compatibility."""

import pytest
from quart import Quart

from flask_storefront import Storefront
from flask_storefront.exceptions import CheckoutError

from conftest import HOSTED_URL


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------

@pytest.fixture
def quart_app(gateway):
    """Quart app with Storefront (async blueprint)."""
    app = Quart(__name__)
    app.config["TESTING"] = True
    app.config["STOREFRONT_STRIPE_PRICE_ID"] = "price_test_123"
    Storefront(app, gateway=gateway)
    return app


# ---------------------------------------------------------------------------
# Storefront page
# ---------------------------------------------------------------------------

@pytest.mark.asyncio
async def test_quart_index(quart_app):
    async with quart_app.test_client() as client:
        resp = await client.get("/")
        assert resp.status_code == 200
        html = await resp.get_data(as_text=True)
        assert "Card Payment" in html
        assert "Proceed to Checkout" in html


# ---------------------------------------------------------------------------
# Checkout session
# ---------------------------------------------------------------------------

@pytest.mark.asyncio
async def test_quart_checkout_form(quart_app, gateway):
    """POST with a form field redirects to the hosted page with 303."""
    async with quart_app.test_client() as client:
        resp = await client.post("/api/checkout_session", form={"paymentMethod": "paypal"})
        assert resp.status_code == 303
        assert resp.headers["Location"] == HOSTED_URL
        assert await resp.get_data() == b""

    assert gateway.created[0]["payment_method_types"] == ["paypal"]


@pytest.mark.asyncio
async def test_quart_checkout_json_fallback(quart_app, gateway):
    async with quart_app.test_client() as client:
        resp = await client.post("/api/checkout_session", json={"paymentMethod": "all"})
        assert resp.status_code == 303

    assert gateway.created[0]["payment_method_types"] == ["card", "klarna", "paypal"]


@pytest.mark.asyncio
@pytest.mark.parametrize("verb", ["GET", "HEAD", "OPTIONS", "PUT", "TRACE"])
async def test_quart_checkout_other_verbs_not_allowed(quart_app, gateway, verb):
    async with quart_app.test_client() as client:
        resp = await client.open("/api/checkout_session", method=verb)
        assert resp.status_code == 405
        assert resp.headers["Allow"] == "POST"

    assert gateway.created == []


@pytest.mark.asyncio
async def test_quart_checkout_provider_error(quart_app, gateway):
    gateway.create_error = CheckoutError("Your card was declined.", 402)
    async with quart_app.test_client() as client:
        resp = await client.post("/api/checkout_session", form={"paymentMethod": "card"})
        assert resp.status_code == 402
        data = await resp.get_json()
        assert data == {"error": "Your card was declined."}


# ---------------------------------------------------------------------------
# Success page
# ---------------------------------------------------------------------------

@pytest.mark.asyncio
async def test_quart_success_without_session_id(quart_app):
    async with quart_app.test_client() as client:
        resp = await client.get("/success")
        assert resp.status_code == 302
        assert resp.headers["Location"] == "/"


@pytest.mark.asyncio
async def test_quart_success_open_and_unknown(quart_app):
    async with quart_app.test_client() as client:
        for session_id in ("cs_open", "not_a_session"):
            resp = await client.get(f"/success?session_id={session_id}")
            assert resp.status_code == 302
            assert resp.headers["Location"] == "/"


@pytest.mark.asyncio
async def test_quart_success_complete(quart_app):
    async with quart_app.test_client() as client:
        resp = await client.get("/success?session_id=cs_complete")
        assert resp.status_code == 200
        html = await resp.get_data(as_text=True)
        assert "a@b.com" in html


# ---------------------------------------------------------------------------
# Blueprint detection
# ---------------------------------------------------------------------------

def test_quart_blueprint_selected(gateway):
    """Storefront selects the async blueprint for Quart apps."""
    app = Quart(__name__)
    app.config["TESTING"] = True
    Storefront(app, gateway=gateway)

    rules = {rule.rule for rule in app.url_map.iter_rules()}
    assert "/api/checkout_session" in rules
    assert "/success" in rules
    assert app.view_functions["storefront.success"].__module__ == "flask_storefront.quart_views"
