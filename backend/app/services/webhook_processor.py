"""Stripe webhook processing.

``WebhookProcessor.handle`` takes the raw request body and the
``stripe-signature`` header and returns the acknowledgement to send back:

1. verify the signature (400 on failure, nothing is written);
2. dispatch on the event type;
3. answer 200 ``"Webhook received"``, or 400 ``"Webhook Error"`` when
   dispatch raised.

Handled events:

- ``checkout.session.completed``: binds the Stripe customer to the user on
  first checkout, upserts the user's subscription for every recurring line
  item and moves the user to ``premium``.
- ``customer.subscription.deleted``: moves the owning user back to
  ``free``; the subscription row is kept.

Anything else is acknowledged without side effects.  Writes are not
rolled back when a later step fails.
"""

from __future__ import annotations

import datetime as dt
import logging
from dataclasses import dataclass
from typing import Awaitable, Callable, Dict, Sequence

from app.core.config import PriceCatalog
from app.core.observability import sentry_breadcrumb, sentry_capture_exception, sentry_metric_inc
from app.models.enums import PlanType
from app.models.schemas import StripeEvent
from app.services.billing_store import BillingStore
from app.services.errors import InvalidPriceError, UserNotFoundError, VerificationError
from app.services.stripe_gateway import PaymentProvider
from app.utils.helpers import period_end, utcnow

logger = logging.getLogger(__name__)

CHECKOUT_SESSION_COMPLETED = "checkout.session.completed"
CUSTOMER_SUBSCRIPTION_DELETED = "customer.subscription.deleted"


@dataclass(frozen=True)
class WebhookResult:
    status_code: int
    body: str


class WebhookProcessor:
    def __init__(
        self,
        provider: PaymentProvider,
        store: BillingStore,
        catalog: PriceCatalog,
        secrets: Sequence[str],
        clock: Callable[[], dt.datetime] = utcnow,
    ):
        self.provider = provider
        self.store = store
        self.catalog = catalog
        self.secrets = list(secrets)
        self.clock = clock
        self._handlers: Dict[str, Callable[[StripeEvent], Awaitable[None]]] = {
            CHECKOUT_SESSION_COMPLETED: self._handle_checkout_completed,
            CUSTOMER_SUBSCRIPTION_DELETED: self._handle_subscription_deleted,
        }

    def verify(self, payload: bytes, signature: str | None) -> StripeEvent:
        return self.provider.verify_signature(payload, signature, self.secrets)

    async def handle(self, payload: bytes, signature: str | None) -> WebhookResult:
        try:
            event = self.verify(payload, signature)
        except VerificationError as e:
            logger.error("[stripe] webhook signature verification failed: %s", e.message)
            sentry_metric_inc("stripe.webhook.invalid_signature")
            return WebhookResult(400, f"Webhook Error: {e.message}")

        logger.info("[stripe] received event id=%s type=%s object=%s", event.id, event.type, event.object_id)
        sentry_metric_inc("stripe.webhook.received", tags={"event_type": event.type})
        sentry_breadcrumb(category="stripe", message=f"webhook:{event.type}", data={"id": event.object_id})

        try:
            await self.dispatch(event)
        except Exception as e:
            logger.exception("[stripe] error handling event %s: %s", event.type, e)
            sentry_metric_inc("stripe.webhook.handler_error", tags={"event_type": event.type})
            sentry_capture_exception(e)
            return WebhookResult(400, "Webhook Error")

        return WebhookResult(200, "Webhook received")

    async def dispatch(self, event: StripeEvent) -> None:
        handler = self._handlers.get(event.type)
        if handler is None:
            logger.debug("[stripe] unhandled event type=%s id=%s", event.type, event.object_id)
            return
        await handler(event)

    async def _handle_checkout_completed(self, event: StripeEvent) -> None:
        # The event payload may be truncated; line items are only on the expanded session
        session = self.provider.fetch_session(event.object_id, expand=["line_items"])
        customer_id = session.customer
        email = session.customer_email
        if not email:
            logger.info("[stripe] checkout session %s has no customer email; nothing to reconcile", session.id)
            return

        user = await self.store.find_user_by_email(email)
        if user is None:
            raise UserNotFoundError(email=email)

        # First subscribing checkout binds the Stripe customer to the user
        if not user.customer_id and customer_id:
            await self.store.update_user(user.id, customer_id=customer_id)
            logger.info("[stripe] linked user id=%s to stripe customer=%s", user.id, customer_id)

        for item in session.line_items:
            price = item.price
            if price is None or not price.is_recurring:
                # One-time purchases are not fulfilled here yet
                logger.debug("[stripe] skipping non-recurring line item %s", item.id)
                continue

            period = self.catalog.period_for(price.id)
            if period is None:
                raise InvalidPriceError(price.id)

            start = self.clock()
            end = period_end(start, period)
            await self.store.upsert_subscription(
                user.id,
                plan=PlanType.PREMIUM,
                period=period,
                start_date=start,
                end_date=end,
            )
            await self.store.update_user(user.id, plan=PlanType.PREMIUM)
            logger.info(
                "[stripe] user id=%s subscribed period=%s until=%s price=%s",
                user.id, period.value, end.isoformat(), price.id,
            )

    async def _handle_subscription_deleted(self, event: StripeEvent) -> None:
        subscription = self.provider.fetch_subscription(event.object_id)
        customer_id = subscription.customer
        user = await self.store.find_user_by_customer_id(customer_id) if customer_id else None
        if user is None:
            logger.error("[stripe] user not found for subscription deleted event sub=%s customer=%s", subscription.id, customer_id)
            raise UserNotFoundError("User not found for the subscription deleted event.", customer_id=customer_id)

        await self.store.update_user(user.id, plan=PlanType.FREE)
        logger.info("[stripe] downgraded user id=%s to FREE due to subscription %s", user.id, subscription.id)
