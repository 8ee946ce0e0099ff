"""Pydantic schemas for payment provider payloads.

The webhook processor never works with raw SDK objects.  The Stripe
gateway converts events, checkout sessions and subscriptions into these
models so the reconciliation logic only sees the fields it needs and
tests can build fixtures from plain dicts.

Unknown fields are ignored; Stripe adds fields to its objects over time.
"""

from __future__ import annotations

from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field


class _ProviderModel(BaseModel):
    model_config = ConfigDict(extra="ignore")


class StripeEventData(_ProviderModel):
    object: Dict[str, Any] = Field(default_factory=dict)


class StripeEvent(_ProviderModel):
    """A verified webhook event."""

    id: Optional[str] = None
    type: str = ""
    created: Optional[int] = None
    data: StripeEventData = Field(default_factory=StripeEventData)

    @property
    def object_id(self) -> Optional[str]:
        return self.data.object.get("id")


class PriceDetail(_ProviderModel):
    id: Optional[str] = None
    type: Optional[str] = Field(default=None, description="recurring or one_time")

    @property
    def is_recurring(self) -> bool:
        return self.type == "recurring"


class LineItemDetail(_ProviderModel):
    """One purchased price within a checkout session."""

    id: Optional[str] = None
    price: Optional[PriceDetail] = None
    quantity: Optional[int] = None


class CustomerDetails(_ProviderModel):
    email: Optional[str] = None
    name: Optional[str] = None


class CheckoutSessionDetail(_ProviderModel):
    """Checkout session re-fetched with ``line_items`` expanded."""

    id: str
    customer: Optional[str] = None
    customer_details: Optional[CustomerDetails] = None
    mode: Optional[str] = None
    line_items: List[LineItemDetail] = Field(default_factory=list)

    @property
    def customer_email(self) -> Optional[str]:
        return self.customer_details.email if self.customer_details else None


class SubscriptionDetail(_ProviderModel):
    id: str
    customer: Optional[str] = None
    status: Optional[str] = None
