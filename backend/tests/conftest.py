from __future__ import annotations

import os
import sys
from pathlib import Path

import pytest

# Add backend folder to sys.path so `import app...` works in tests when running from backend root
BACKEND_DIR = Path(__file__).resolve().parents[1]
if str(BACKEND_DIR) not in sys.path:
    sys.path.insert(0, str(BACKEND_DIR))

# Settings are read at import time; never require a real database in tests
os.environ.setdefault("DB_DEV_FALLBACK_SQLITE", "true")
os.environ.setdefault("ENVIRONMENT", "test")

from app.core.config import PriceCatalog  # noqa: E402
from app.models.enums import BillingPeriod  # noqa: E402
from stripe_fakes import FIXED_NOW, MONTHLY_PRICE, YEARLY_PRICE, FakeProvider, FakeStore  # noqa: E402


@pytest.fixture
def price_catalog() -> PriceCatalog:
    return PriceCatalog(periods={MONTHLY_PRICE: BillingPeriod.MONTHLY, YEARLY_PRICE: BillingPeriod.YEARLY})


@pytest.fixture
def provider() -> FakeProvider:
    return FakeProvider()


@pytest.fixture
def store() -> FakeStore:
    return FakeStore()


@pytest.fixture
def processor(provider, store, price_catalog):
    from app.services.webhook_processor import WebhookProcessor

    return WebhookProcessor(
        provider=provider,
        store=store,
        catalog=price_catalog,
        secrets=["whsec_test"],
        clock=lambda: FIXED_NOW,
    )
