"""Exceptions raised by flask-storefront."""

from __future__ import annotations


class StorefrontError(Exception):
    """Base class for all flask-storefront errors."""


class CheckoutError(StorefrontError):
    """The provider refused or failed to create a checkout session.

    ``status_code`` is the HTTP status the provider answered with, or 500
    when the failure carried none (network errors, missing credentials).
    """

    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.status_code = status_code or 500


class SessionLookupError(StorefrontError):
    """A checkout session could not be retrieved from the provider."""
