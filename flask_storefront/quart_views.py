"""Async blueprint for Quart applications.

This module mirrors :mod:`flask_storefront.views` but uses ``async def``
view functions, awaits Quart's coroutine-based request helpers
(``await request.get_json()``, ``await request.form``) and runs the blocking
provider calls in a worker thread via :func:`quart.utils.run_sync`.

It is selected automatically by :meth:`~flask_storefront.Storefront.init_app`
when the application is a :class:`quart.Quart` instance.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from flask_storefront.checkout import (
    create_checkout_session,
    request_origin,
    resolve_session,
)
from flask_storefront.exceptions import CheckoutError
from flask_storefront.methods import PAYMENT_METHODS
from flask_storefront.models import CheckoutSessionRequest, Redirect
from flask_storefront.views import CHECKOUT_METHODS

if TYPE_CHECKING:
    from flask_storefront import Storefront

logger = logging.getLogger(__name__)


def create_async_blueprint(ext: "Storefront"):
    """Return a Quart Blueprint pre-configured with the extension instance."""
    try:
        from quart import (
            Blueprint,
            Response,
            current_app,
            jsonify,
            redirect,
            render_template,
            request,
            url_for,
        )
        from quart.utils import run_sync
    except ImportError as exc:  # pragma: no cover
        raise ImportError(
            "quart is required for flask_storefront.quart_views. "
            "Install it with: pip install 'flask-storefront[quart]'"
        ) from exc

    bp = Blueprint("storefront", __name__, template_folder="templates")

    def method_not_allowed():
        return jsonify({"error": "Method not allowed"}), 405, {"Allow": "POST"}

    def see_other(location: str):
        return Response("", status=303, headers={"Location": location})

    # ------------------------------------------------------------------
    # Storefront – payment method selection
    # ------------------------------------------------------------------

    @bp.route("/")
    async def index():
        """Render the payment method selection form."""
        canceled = bool(request.args.get("canceled"))
        if canceled:
            logger.info("checkout.canceled")
        return await render_template(
            "storefront/index.html",
            payment_methods=PAYMENT_METHODS,
            canceled=canceled,
        )

    # ------------------------------------------------------------------
    # Checkout – open a hosted checkout session
    # ------------------------------------------------------------------

    @bp.route(
        "/api/checkout_session",
        methods=CHECKOUT_METHODS,
        provide_automatic_options=False,
    )
    async def checkout_session():
        """Create a hosted checkout session and redirect the browser to it."""
        if request.method != "POST":
            return method_not_allowed()

        payload = await request.get_json(silent=True)
        data = payload if isinstance(payload, dict) else await request.form
        checkout_request = CheckoutSessionRequest(data.get("paymentMethod"))

        origin = request_origin(
            current_app.config["STOREFRONT_BASE_URL"],
            request.headers.get("Origin"),
            request.host_url,
        )
        price_id = current_app.config["STOREFRONT_STRIPE_PRICE_ID"]
        success_path = url_for("storefront.success")
        cancel_path = url_for("storefront.index")

        try:
            result = await run_sync(create_checkout_session)(
                ext.gateway,
                checkout_request,
                origin,
                price_id=price_id,
                success_path=success_path,
                cancel_path=cancel_path,
            )
        except CheckoutError as exc:
            logger.error("checkout.create failed status=%s error=%s", exc.status_code, exc.message)
            return jsonify({"error": exc.message}), exc.status_code

        logger.info("checkout.create ok session_id=%s", result.session_id)
        return see_other(result.redirect_url)

    # ------------------------------------------------------------------
    # Success – confirmation page
    # ------------------------------------------------------------------

    @bp.route("/success")
    async def success():
        """Show the confirmation for a finished checkout session."""
        result = await run_sync(resolve_session)(
            ext.gateway,
            request.args.get("session_id"),
            start_location=url_for("storefront.index"),
        )
        if isinstance(result, Redirect):
            return redirect(result.location, code=result.code)

        return await render_template(
            "storefront/success.html",
            view=result.view,
            support_email=current_app.config["STOREFRONT_SUPPORT_EMAIL"],
        )

    return bp
