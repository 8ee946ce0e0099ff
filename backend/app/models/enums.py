"""Enumeration types used by the billing models.

When modifying these enums you should update the corresponding database
columns (and add an Alembic migration) so that new values are accepted.
"""

from enum import Enum


class PlanType(str, Enum):
    """Subscription tier for a user."""

    FREE = "free"
    PREMIUM = "premium"


class BillingPeriod(str, Enum):
    """Billing cadence of a recurring price."""

    MONTHLY = "monthly"
    YEARLY = "yearly"
