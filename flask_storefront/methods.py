"""Catalog of the payment methods offered on the storefront page.

The catalog is static: descriptors are defined at import time, rendered in
declaration order, and the identifiers in :data:`ALL_PAYMENT_METHODS` form the
closed set a submitted selection is validated against.
"""

from __future__ import annotations

from flask_storefront.models import PaymentMethod

#: Selection value meaning "offer every known method".
ALL_METHODS = "all"

#: Method identifiers sent to the provider when no single method is chosen.
ALL_PAYMENT_METHODS: tuple[str, ...] = ("card", "klarna", "paypal")

PAYMENT_METHODS: tuple[PaymentMethod, ...] = (
    PaymentMethod(
        id="card",
        label="Card Payment",
        description="Pay with Credit or Debit Card",
    ),
    PaymentMethod(
        id="paypal",
        label="PayPal",
        description="Pay with your PayPal account",
    ),
    PaymentMethod(
        id="klarna",
        label="Klarna",
        description="Pay later with Klarna",
    ),
    PaymentMethod(
        id=ALL_METHODS,
        label="All Payment Methods",
        description="All payments",
    ),
)

ALLOWED_METHOD_IDS: frozenset[str] = frozenset(ALL_PAYMENT_METHODS)


def select_payment_methods(value) -> list[str]:
    """Return the provider method list for a submitted selection.

    An exact match on a single known identifier selects only that method.
    Anything else (``"all"``, an empty or missing value, unknown strings,
    non-string values) falls back to every method in :data:`ALL_PAYMENT_METHODS`.
    """
    if isinstance(value, str) and value in ALLOWED_METHOD_IDS:
        return [value]
    return list(ALL_PAYMENT_METHODS)
