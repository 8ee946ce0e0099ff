"""Fakes for the payment provider and billing store used across tests."""

from __future__ import annotations

import datetime as dt
import json
import types

from pydantic import ValidationError

from app.models.enums import PlanType
from app.models.schemas import CheckoutSessionDetail, StripeEvent, SubscriptionDetail
from app.services.errors import VerificationError

MONTHLY_PRICE = "price_monthly_test"
YEARLY_PRICE = "price_yearly_test"
FIXED_NOW = dt.datetime(2026, 1, 31, 12, 0, tzinfo=dt.timezone.utc)


def make_event(event_type: str, object_id: str, event_id: str = "evt_test_1") -> dict:
    return {"id": event_id, "type": event_type, "data": {"object": {"id": object_id}}}


class FakeProvider:
    """Accepts signatures equal to "valid"; serves sessions/subscriptions from dicts."""

    def __init__(self):
        self.sessions: dict[str, dict] = {}
        self.subscriptions: dict[str, dict] = {}
        self.fetches: list[tuple[str, str]] = []

    def verify_signature(self, payload, signature, secrets):
        if signature != "valid":
            raise VerificationError("No signatures found matching the expected signature for payload")
        try:
            return StripeEvent.model_validate(json.loads(payload))
        except ValidationError as e:
            raise VerificationError(f"Invalid payload: {e}") from e

    def fetch_session(self, session_id, expand=("line_items",)):
        self.fetches.append(("session", session_id))
        return CheckoutSessionDetail.model_validate(self.sessions[session_id])

    def fetch_subscription(self, subscription_id):
        self.fetches.append(("subscription", subscription_id))
        return SubscriptionDetail.model_validate(self.subscriptions[subscription_id])


class FakeStore:
    """In-memory BillingStore recording every call."""

    def __init__(self):
        self.users: dict[int, types.SimpleNamespace] = {}
        self.subscriptions: dict[int, types.SimpleNamespace] = {}
        self.calls: list[str] = []
        self.writes: list[tuple] = []

    def add_user(self, id: int, email: str, customer_id: str | None = None, plan: PlanType = PlanType.FREE):
        user = types.SimpleNamespace(id=id, email=email, customer_id=customer_id, plan=plan)
        self.users[id] = user
        return user

    async def find_user_by_email(self, email):
        self.calls.append("find_user_by_email")
        return next((u for u in self.users.values() if u.email == email), None)

    async def find_user_by_customer_id(self, customer_id):
        self.calls.append("find_user_by_customer_id")
        return next((u for u in self.users.values() if u.customer_id == customer_id), None)

    async def update_user(self, user_id, **fields):
        self.calls.append("update_user")
        self.writes.append(("user", user_id, fields))
        for name, value in fields.items():
            setattr(self.users[user_id], name, value)

    async def upsert_subscription(self, user_id, *, plan, period, start_date, end_date):
        self.calls.append("upsert_subscription")
        self.writes.append(("subscription", user_id, period))
        sub = self.subscriptions.get(user_id) or types.SimpleNamespace(id=len(self.subscriptions) + 1, user_id=user_id)
        sub.plan, sub.period, sub.start_date, sub.end_date = plan, period, start_date, end_date
        self.subscriptions[user_id] = sub
        return sub

