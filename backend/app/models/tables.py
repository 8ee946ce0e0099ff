"""SQLAlchemy ORM models for billing state.

Users are created elsewhere (sign-up flow); this service only binds the
Stripe customer id and maintains the plan.  A subscription row is created
on the first subscribing checkout and updated in place afterwards; it is
never deleted on cancellation.

If you extend or modify these models remember to add an Alembic
migration or call the ``init_db`` helper during development to recreate
the tables.
"""

from __future__ import annotations

import datetime as dt

from sqlalchemy import (
    Column,
    Integer,
    String,
    DateTime,
    Enum,
    ForeignKey,
)
from sqlalchemy.orm import relationship

from app.core.database import Base
from .enums import PlanType, BillingPeriod


def _utcnow() -> dt.datetime:
    return dt.datetime.now(dt.timezone.utc)


class User(Base):
    """User account that can hold a premium subscription."""

    __tablename__ = "users"

    id = Column(Integer, primary_key=True, index=True)
    email = Column(String, unique=True, nullable=False)
    # Stripe customer reference (e.g., "cus_..."); set once on first checkout
    customer_id = Column(String, unique=True, nullable=True)
    plan = Column(Enum(PlanType), nullable=False, default=PlanType.FREE)
    created_at = Column(DateTime(timezone=True), default=_utcnow, nullable=False)
    updated_at = Column(DateTime(timezone=True), default=_utcnow, onupdate=_utcnow, nullable=False)

    subscription = relationship("Subscription", back_populates="user", uselist=False)


class Subscription(Base):
    """Current subscription of a user; one row per user, no history."""

    __tablename__ = "subscriptions"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("users.id"), unique=True, nullable=False)
    start_date = Column(DateTime(timezone=True), nullable=False)
    end_date = Column(DateTime(timezone=True), nullable=False)
    plan = Column(Enum(PlanType), nullable=False, default=PlanType.PREMIUM)
    period = Column(Enum(BillingPeriod), nullable=False)
    created_at = Column(DateTime(timezone=True), default=_utcnow, nullable=False)
    updated_at = Column(DateTime(timezone=True), default=_utcnow, onupdate=_utcnow, nullable=False)

    user = relationship("User", back_populates="subscription")
