from __future__ import annotations

from functools import lru_cache

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.config import PriceCatalog, build_price_catalog, get_webhook_secret_list, settings
from app.core.database import get_db
from app.services.billing_store import SqlBillingStore
from app.services.stripe_gateway import StripeGateway
from app.services.webhook_processor import WebhookProcessor


@lru_cache(maxsize=1)
def get_price_catalog() -> PriceCatalog:
    """Price catalog built once per process; raises on incomplete config."""
    return build_price_catalog(settings)


@lru_cache(maxsize=1)
def get_stripe_gateway() -> StripeGateway:
    return StripeGateway(api_key=settings.STRIPE_API_KEY)


async def get_webhook_processor(db: AsyncSession = Depends(get_db)) -> WebhookProcessor:
    return WebhookProcessor(
        provider=get_stripe_gateway(),
        store=SqlBillingStore(db),
        catalog=get_price_catalog(),
        secrets=get_webhook_secret_list(settings),
    )
