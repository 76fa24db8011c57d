"""Stripe Checkout gateway.

The gateway is the storefront's only provider dependency.  It is built once
per application by :class:`~flask_storefront.Storefront` and shared read-only
between requests.  The secret key is sent with every call instead of being
assigned to the global ``stripe.api_key``, so several gateways (or several
applications) can coexist in one process.
"""

from __future__ import annotations

import logging

import stripe

from flask_storefront.exceptions import CheckoutError, SessionLookupError
from flask_storefront.models import (
    CheckoutSessionResult,
    SessionState,
    SessionStatusView,
)

logger = logging.getLogger(__name__)

SESSION_EXPAND = ["line_items", "payment_intent"]


def _error_message(exc: stripe.StripeError) -> str:
    return exc.user_message or str(exc)


class StripeGateway:
    """Create and look up hosted Checkout Sessions with the Stripe API."""

    def __init__(self, api_key: str | None) -> None:
        self.api_key = api_key

    def __repr__(self) -> str:
        return f"<StripeGateway configured={bool(self.api_key)}>"

    def create_checkout_session(
        self,
        *,
        price_id: str | None,
        payment_method_types: list[str],
        success_url: str,
        cancel_url: str,
    ) -> CheckoutSessionResult:
        """Open a one-item payment session and return its hosted URL.

        Raises:
            CheckoutError: For any Stripe failure, carrying Stripe's HTTP
                status (500 when there is none).
        """
        try:
            session = stripe.checkout.Session.create(
                api_key=self.api_key,
                mode="payment",
                line_items=[{"price": price_id, "quantity": 1}],
                payment_method_types=payment_method_types,
                success_url=success_url,
                cancel_url=cancel_url,
            )
        except stripe.StripeError as exc:
            raise CheckoutError(_error_message(exc), exc.http_status) from exc
        logger.debug("stripe.session.created id=%s methods=%s", session.id, payment_method_types)
        return CheckoutSessionResult(redirect_url=session.url, session_id=session.id)

    def retrieve_session(self, session_id: str) -> SessionStatusView:
        """Fetch *session_id* and return its status and the payer's email.

        Raises:
            SessionLookupError: When Stripe cannot return the session, or
                returns one without customer details.
        """
        try:
            session = stripe.checkout.Session.retrieve(
                session_id,
                api_key=self.api_key,
                expand=SESSION_EXPAND,
            )
        except stripe.StripeError as exc:
            raise SessionLookupError(_error_message(exc)) from exc

        details = getattr(session, "customer_details", None)
        if details is None:
            raise SessionLookupError(f"checkout session {session_id} has no customer details")
        return SessionStatusView(
            status=SessionState.from_provider(getattr(session, "status", None)),
            customer_email=getattr(details, "email", None),
        )
