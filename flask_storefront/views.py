"""Blueprint with the storefront, checkout-session and success routes."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from flask import (
    Blueprint,
    Response,
    current_app,
    jsonify,
    redirect,
    render_template,
    request,
    url_for,
)

from flask_storefront.checkout import (
    create_checkout_session,
    request_origin,
    resolve_session,
)
from flask_storefront.exceptions import CheckoutError
from flask_storefront.methods import PAYMENT_METHODS
from flask_storefront.models import CheckoutSessionRequest, Redirect

if TYPE_CHECKING:
    from flask_storefront import Storefront

logger = logging.getLogger(__name__)

#: Verbs routed to the checkout endpoint so that all but POST get a 405.
#: HEAD is added by the router alongside GET.
CHECKOUT_METHODS = [
    "GET",
    "POST",
    "PUT",
    "PATCH",
    "DELETE",
    "OPTIONS",
    "TRACE",
    "CONNECT",
]


def method_not_allowed():
    return jsonify({"error": "Method not allowed"}), 405, {"Allow": "POST"}


def see_other(location: str) -> Response:
    """Return an empty-bodied 303 pointing at *location*."""
    return Response(status=303, headers={"Location": location})


def create_blueprint(ext: "Storefront") -> Blueprint:
    """Return a Blueprint pre-configured with the extension instance."""

    bp = Blueprint("storefront", __name__, template_folder="templates")

    # ------------------------------------------------------------------
    # Storefront – payment method selection
    # ------------------------------------------------------------------

    @bp.route("/")
    def index():
        """Render the payment method selection form."""
        canceled = bool(request.args.get("canceled"))
        if canceled:
            logger.info("checkout.canceled")
        return render_template(
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
    def checkout_session():
        """Create a hosted checkout session and redirect the browser to it.

        Accepts the ``paymentMethod`` field from a form **or** a JSON body.
        """
        if request.method != "POST":
            return method_not_allowed()

        payload = request.get_json(silent=True)
        data = payload if isinstance(payload, dict) else request.form
        checkout_request = CheckoutSessionRequest(data.get("paymentMethod"))

        origin = request_origin(
            current_app.config["STOREFRONT_BASE_URL"],
            request.headers.get("Origin"),
            request.host_url,
        )

        try:
            result = create_checkout_session(
                ext.gateway,
                checkout_request,
                origin,
                price_id=current_app.config["STOREFRONT_STRIPE_PRICE_ID"],
                success_path=url_for("storefront.success"),
                cancel_path=url_for("storefront.index"),
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
    def success():
        """Show the confirmation for a finished checkout session."""
        result = resolve_session(
            ext.gateway,
            request.args.get("session_id"),
            start_location=url_for("storefront.index"),
        )
        if isinstance(result, Redirect):
            return redirect(result.location, code=result.code)

        return render_template(
            "storefront/success.html",
            view=result.view,
            support_email=current_app.config["STOREFRONT_SUPPORT_EMAIL"],
        )

    return bp
