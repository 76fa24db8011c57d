"""Plain data types passed between the storefront views and the provider gateway.

Nothing here is persisted: every object is built for a single request and
dropped once the response is sent::

    from flask_storefront.models import Confirmation, Redirect

    result = resolve_session(gateway, request.args.get("session_id"), start_location="/")
    if isinstance(result, Redirect):
        return redirect(result.location)
    return render_template("storefront/success.html", view=result.view)
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


@dataclass(frozen=True)
class PaymentMethod:
    """A selectable payment method shown on the storefront page."""

    id: str
    label: str
    description: str


@dataclass(frozen=True)
class CheckoutSessionRequest:
    """The customer's untrusted payment-method selection."""

    selected_method: str | None = None


@dataclass(frozen=True)
class CheckoutSessionResult:
    """Hosted checkout session returned by the provider."""

    redirect_url: str
    session_id: str | None = None


class SessionState(str, Enum):
    """Checkout session status as seen by the storefront."""

    OPEN = "open"
    COMPLETE = "complete"
    OTHER = "other"

    @classmethod
    def from_provider(cls, value) -> "SessionState":
        """Map a provider status string; unknown values become :attr:`OTHER`."""
        try:
            return cls(value)
        except ValueError:
            return cls.OTHER


@dataclass(frozen=True)
class SessionStatusView:
    """Status snapshot rendered on the confirmation page."""

    status: SessionState
    customer_email: str | None = None

    @property
    def is_complete(self) -> bool:
        return self.status is SessionState.COMPLETE


@dataclass(frozen=True)
class Confirmation:
    """Resolver outcome: render the confirmation page for *view*."""

    view: SessionStatusView


@dataclass(frozen=True)
class Redirect:
    """Resolver outcome: send the browser to *location*."""

    location: str
    permanent: bool = False

    @property
    def code(self) -> int:
        return 308 if self.permanent else 302
