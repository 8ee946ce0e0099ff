"""Persistence operations used by the webhook processor.

Each operation commits on its own; there is no transaction spanning
several calls.  A failure part-way through an event therefore leaves the
earlier writes in place, and Stripe's redelivery re-runs the whole event.
"""

from __future__ import annotations

import datetime as dt
from typing import Any, Optional, Protocol

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.models.enums import BillingPeriod, PlanType
from app.models.tables import Subscription, User


class BillingStore(Protocol):
    async def find_user_by_email(self, email: str) -> Optional[User]: ...

    async def find_user_by_customer_id(self, customer_id: str) -> Optional[User]: ...

    async def update_user(self, user_id: int, **fields: Any) -> None: ...

    async def upsert_subscription(
        self,
        user_id: int,
        *,
        plan: PlanType,
        period: BillingPeriod,
        start_date: dt.datetime,
        end_date: dt.datetime,
    ) -> Subscription: ...


class SqlBillingStore:
    """``BillingStore`` over an SQLAlchemy async session."""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def find_user_by_email(self, email: str) -> Optional[User]:
        return await self.session.scalar(select(User).where(User.email == email))

    async def find_user_by_customer_id(self, customer_id: str) -> Optional[User]:
        return await self.session.scalar(select(User).where(User.customer_id == customer_id))

    async def update_user(self, user_id: int, **fields: Any) -> None:
        user = await self.session.get(User, user_id)
        if user is None:
            return
        for name, value in fields.items():
            setattr(user, name, value)
        await self.session.commit()

    async def upsert_subscription(
        self,
        user_id: int,
        *,
        plan: PlanType,
        period: BillingPeriod,
        start_date: dt.datetime,
        end_date: dt.datetime,
    ) -> Subscription:
        """Create the user's subscription row or replace its values in place."""
        sub = await self.session.scalar(select(Subscription).where(Subscription.user_id == user_id))
        if sub is None:
            sub = Subscription(user_id=user_id)
            self.session.add(sub)
        sub.plan = plan
        sub.period = period
        sub.start_date = start_date
        sub.end_date = end_date
        await self.session.commit()
        return sub
