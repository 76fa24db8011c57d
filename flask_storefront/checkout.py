"""Checkout-session initiation and confirmation lookup.

Both functions take the provider gateway as an explicit argument; they hold
no state of their own and are shared by the Flask and Quart blueprints.
"""

from __future__ import annotations

import logging

from flask_storefront.exceptions import SessionLookupError
from flask_storefront.methods import select_payment_methods
from flask_storefront.models import (
    CheckoutSessionRequest,
    CheckoutSessionResult,
    Confirmation,
    Redirect,
    SessionState,
)

logger = logging.getLogger(__name__)

SESSION_ID_PLACEHOLDER = "{CHECKOUT_SESSION_ID}"


def create_checkout_session(
    gateway,
    request: CheckoutSessionRequest,
    origin: str,
    *,
    price_id: str | None,
    success_path: str,
    cancel_path: str,
) -> CheckoutSessionResult:
    """Ask the provider for a hosted checkout session.

    The selection in *request* is narrowed to a single method only when it
    names a known one; every other value offers all methods.  Return URLs are
    built from *origin* plus the given paths.

    Raises:
        CheckoutError: Propagated unchanged from the gateway.
    """
    origin = origin.rstrip("/")
    methods = select_payment_methods(request.selected_method)
    return gateway.create_checkout_session(
        price_id=price_id,
        payment_method_types=methods,
        success_url=f"{origin}{success_path}?session_id={SESSION_ID_PLACEHOLDER}",
        cancel_url=f"{origin}{cancel_path}?canceled=true",
    )


def resolve_session(gateway, session_id: str | None, *, start_location: str):
    """Decide what the confirmation page shows for *session_id*.

    Returns a :class:`~flask_storefront.models.Redirect` to *start_location*
    when the id is missing, the lookup fails, or the checkout is still open;
    otherwise a :class:`~flask_storefront.models.Confirmation`.  Never raises.
    """
    if not session_id:
        return Redirect(start_location)

    try:
        view = gateway.retrieve_session(session_id)
    except SessionLookupError as exc:
        logger.warning("checkout.resolve failed session_id=%s error=%s", session_id, exc)
        return Redirect(start_location)
    except Exception:  # noqa: BLE001
        logger.exception("checkout.resolve crashed session_id=%s", session_id)
        return Redirect(start_location)

    if view.status is SessionState.OPEN:
        logger.info("checkout.resolve open session_id=%s", session_id)
        return Redirect(start_location)

    return Confirmation(view)


def request_origin(base_url: str | None, origin_header: str | None, host_url: str) -> str:
    """Return the origin used to build provider return URLs.

    A configured *base_url* wins, then the request's ``Origin`` header, then
    the URL of the host that served the request.
    """
    for candidate in (base_url, origin_header, host_url):
        if candidate and candidate != "null":
            return candidate.rstrip("/")
    return ""
