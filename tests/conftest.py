"""Shared pytest fixtures for flask-storefront tests."""

import pytest
from flask import Flask

from flask_storefront import Storefront
from flask_storefront.exceptions import SessionLookupError
from flask_storefront.models import (
    CheckoutSessionResult,
    SessionState,
    SessionStatusView,
)

HOSTED_URL = "https://checkout.stripe.com/c/pay/cs_test_123"


class FakeGateway:
    """In-memory stand-in for :class:`~flask_storefront.StripeGateway`."""

    def __init__(self, *, create_error=None, sessions=None):
        self.create_error = create_error
        self.sessions = dict(sessions or {})
        self.created = []
        self.lookups = []

    def create_checkout_session(self, **params):
        self.created.append(params)
        if self.create_error is not None:
            raise self.create_error
        return CheckoutSessionResult(redirect_url=HOSTED_URL, session_id="cs_test_123")

    def retrieve_session(self, session_id):
        self.lookups.append(session_id)
        try:
            return self.sessions[session_id]
        except KeyError:
            raise SessionLookupError(f"No such checkout.session: {session_id}") from None


@pytest.fixture
def gateway():
    """Fake gateway preloaded with an open, a complete and an expired session."""
    return FakeGateway(
        sessions={
            "cs_open": SessionStatusView(SessionState.OPEN),
            "cs_complete": SessionStatusView(SessionState.COMPLETE, "a@b.com"),
            "cs_expired": SessionStatusView(SessionState.OTHER),
        }
    )


@pytest.fixture
def app(gateway):
    """Flask app configured with the fake gateway and test settings."""
    application = Flask(__name__)
    application.config["TESTING"] = True
    application.config["STOREFRONT_STRIPE_PRICE_ID"] = "price_test_123"

    Storefront(application, gateway=gateway)

    yield application


@pytest.fixture
def client(app):
    """Flask test client."""
    return app.test_client()


@pytest.fixture
def ext(app):
    """The Storefront extension instance."""
    return app.extensions["storefront"]
