"""Stripe access for the webhook processor.

``PaymentProvider`` is the narrow interface the processor depends on;
``StripeGateway`` implements it over the ``stripe`` SDK.  SDK objects are
converted to plain dicts and validated into the schemas in
``app.models.schemas`` so nothing downstream depends on SDK types.
"""

from __future__ import annotations

import json
import logging
from typing import Any, Iterable, Protocol, Sequence

import stripe
from pydantic import ValidationError

from app.models.schemas import CheckoutSessionDetail, StripeEvent, SubscriptionDetail
from app.services.errors import VerificationError

logger = logging.getLogger(__name__)


class PaymentProvider(Protocol):
    def verify_signature(self, payload: bytes, signature: str | None, secrets: Sequence[str]) -> StripeEvent: ...

    def fetch_session(self, session_id: str, expand: Iterable[str] = ("line_items",)) -> CheckoutSessionDetail: ...

    def fetch_subscription(self, subscription_id: str) -> SubscriptionDetail: ...


def _plain(obj: Any) -> Any:
    """Recursively convert SDK objects (dict subclasses) into plain containers."""
    if isinstance(obj, dict):
        return {k: _plain(v) for k, v in obj.items()}
    if isinstance(obj, list):
        return [_plain(v) for v in obj]
    return obj


class StripeGateway:
    """``PaymentProvider`` backed by the Stripe SDK."""

    def __init__(self, api_key: str | None, client: Any = stripe):
        self._api_key = api_key
        self._stripe = client

    def verify_signature(self, payload: bytes, signature: str | None, secrets: Sequence[str]) -> StripeEvent:
        """Verify ``signature`` against each secret in order and return the event.

        Stripe enforces its default 300 second timestamp tolerance.
        """
        if not signature:
            raise VerificationError("Missing stripe-signature header")
        if not secrets:
            raise VerificationError("Webhook secret not configured")

        last_error: Exception | None = None
        for secret in secrets:
            try:
                self._stripe.Webhook.construct_event(payload=payload, sig_header=signature, secret=secret)
            except self._stripe.SignatureVerificationError as e:
                last_error = e
                continue
            except ValueError as e:
                # Malformed payload; no other secret will fix it
                raise VerificationError(f"Invalid payload: {e}") from e
            break
        else:
            logger.warning("[stripe] invalid signature after trying %d secrets: %s", len(secrets), last_error)
            raise VerificationError(str(last_error) if last_error else "Invalid signature")

        try:
            body = json.loads(payload.decode("utf-8") if isinstance(payload, (bytes, bytearray)) else payload)
        except ValueError as e:
            raise VerificationError(f"Invalid payload: {e}") from e
        try:
            return StripeEvent.model_validate(body)
        except ValidationError as e:
            raise VerificationError(f"Invalid payload: {e}") from e

    def fetch_session(self, session_id: str, expand: Iterable[str] = ("line_items",)) -> CheckoutSessionDetail:
        session = _plain(
            self._stripe.checkout.Session.retrieve(session_id, expand=list(expand), api_key=self._api_key)
        )
        line_items = session.get("line_items") or {}
        if isinstance(line_items, dict):
            session["line_items"] = line_items.get("data") or []
        return CheckoutSessionDetail.model_validate(session)

    def fetch_subscription(self, subscription_id: str) -> SubscriptionDetail:
        subscription = _plain(self._stripe.Subscription.retrieve(subscription_id, api_key=self._api_key))
        return SubscriptionDetail.model_validate(subscription)
