"""flask_storefront – Flask/Quart extension for a Stripe hosted-checkout storefront."""

from __future__ import annotations

import logging
import os

from flask_storefront.gateway import StripeGateway
from flask_storefront.views import create_blueprint
from flask_storefront.version import __version__

__all__ = ["Storefront", "StripeGateway", "__version__"]

logger = logging.getLogger(__name__)


def _is_quart_app(app) -> bool:
    """Return ``True`` when *app* is a :class:`quart.Quart` instance."""
    try:
        from quart import Quart

        return isinstance(app, Quart)
    except ImportError:
        return False


class Storefront:
    """Flask/Quart extension that serves a hosted-checkout storefront.

    Usage – application factory pattern::

        from flask import Flask
        from flask_storefront import Storefront

        storefront = Storefront()

        def create_app():
            app = Flask(__name__)
            storefront.init_app(app)
            return app

    Usage – direct initialisation::

        app = Flask(__name__)
        app.config["STOREFRONT_STRIPE_SECRET_KEY"] = "sk_test_..."
        app.config["STOREFRONT_STRIPE_PRICE_ID"] = "price_..."
        ext = Storefront(app)

    Usage – with Quart (async)::

        from quart import Quart

        app = Quart(__name__)
        ext = Storefront(app)   # async blueprint selected automatically

    Usage – with an explicit gateway (any object exposing
    ``create_checkout_session`` and ``retrieve_session``)::

        ext = Storefront(app, gateway=StripeGateway("sk_test_..."))

    Configuration keys (set on ``app.config``):

    ``STOREFRONT_STRIPE_SECRET_KEY``
        Stripe secret key.  Defaults to the ``STRIPE_SECRET_KEY``
        environment variable.  Only used server-side.
    ``STOREFRONT_STRIPE_PRICE_ID``
        Price of the single line item.  Defaults to the ``STRIPE_PRICE_ID``
        environment variable.
    ``STOREFRONT_URL_PREFIX``
        URL prefix for the blueprint (default: ``""``).
    ``STOREFRONT_BASE_URL``
        Origin used for the Stripe return URLs.  When ``None`` (default) the
        request's ``Origin`` header, then its host URL, is used.
    ``STOREFRONT_SUPPORT_EMAIL``
        Address shown on the confirmation page
        (default: ``"orders@example.com"``).
    """

    def __init__(self, app=None, *, gateway=None) -> None:
        self._gateway = gateway
        self._app_gateway = None

        if app is not None:
            self.init_app(app)

    # ------------------------------------------------------------------
    # Initialisation
    # ------------------------------------------------------------------

    def init_app(self, app, *, gateway=None) -> None:
        """Initialise the extension against *app* (Flask or Quart).

        A *gateway* given here replaces one given to the constructor.
        """
        if gateway is not None:
            self._gateway = gateway

        app.config.setdefault("STOREFRONT_STRIPE_SECRET_KEY", os.environ.get("STRIPE_SECRET_KEY"))
        app.config.setdefault("STOREFRONT_STRIPE_PRICE_ID", os.environ.get("STRIPE_PRICE_ID"))
        app.config.setdefault("STOREFRONT_URL_PREFIX", "")
        app.config.setdefault("STOREFRONT_BASE_URL", None)
        app.config.setdefault("STOREFRONT_SUPPORT_EMAIL", "orders@example.com")

        if self._gateway is None:
            secret_key = app.config["STOREFRONT_STRIPE_SECRET_KEY"]
            if not secret_key:
                logger.warning("storefront.init STOREFRONT_STRIPE_SECRET_KEY is not set")
            self._app_gateway = StripeGateway(secret_key)
        else:
            self._app_gateway = self._gateway

        if not app.config["STOREFRONT_STRIPE_PRICE_ID"]:
            logger.warning("storefront.init STOREFRONT_STRIPE_PRICE_ID is not set")

        if _is_quart_app(app):
            from flask_storefront.quart_views import create_async_blueprint

            blueprint = create_async_blueprint(self)
        else:
            blueprint = create_blueprint(self)

        url_prefix = app.config["STOREFRONT_URL_PREFIX"] or None
        app.register_blueprint(blueprint, url_prefix=url_prefix)

        app.extensions["storefront"] = self

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    @property
    def gateway(self):
        """The provider gateway shared by every request."""
        if self._app_gateway is None:
            raise RuntimeError(
                "Storefront extension not initialised. Call init_app(app) first."
            )
        return self._app_gateway
