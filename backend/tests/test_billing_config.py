from __future__ import annotations

import pytest

from app.core.config import Settings, build_price_catalog, get_webhook_secret_list
from app.models.enums import BillingPeriod
from app.services.errors import ConfigurationError


def _settings(**overrides) -> Settings:
    base = dict(
        STRIPE_WEBHOOK_SECRET=None,
        STRIPE_WEBHOOK_SECRETS=None,
        STRIPE_MONTHLY_PRICE_ID=None,
        STRIPE_YEARLY_PRICE_ID=None,
    )
    base.update(overrides)
    return Settings(**base)


def test_price_catalog_maps_both_prices():
    catalog = build_price_catalog(_settings(STRIPE_MONTHLY_PRICE_ID="price_m", STRIPE_YEARLY_PRICE_ID="price_y"))

    assert catalog.period_for("price_m") == BillingPeriod.MONTHLY
    assert catalog.period_for("price_y") == BillingPeriod.YEARLY
    assert catalog.period_for("price_other") is None
    assert catalog.period_for(None) is None
    assert "price_m" in catalog


def test_price_catalog_rejects_missing_price():
    with pytest.raises(ConfigurationError) as exc:
        build_price_catalog(_settings(STRIPE_MONTHLY_PRICE_ID="price_m"))
    assert "STRIPE_YEARLY_PRICE_ID" in exc.value.message


def test_price_catalog_rejects_identical_prices():
    with pytest.raises(ConfigurationError):
        build_price_catalog(_settings(STRIPE_MONTHLY_PRICE_ID="price_x", STRIPE_YEARLY_PRICE_ID="price_x"))


def test_webhook_secrets_prefer_rotation_list():
    cfg = _settings(STRIPE_WEBHOOK_SECRET="whsec_single", STRIPE_WEBHOOK_SECRETS="whsec_new, whsec_old ,")
    assert get_webhook_secret_list(cfg) == ["whsec_new", "whsec_old"]


def test_webhook_secrets_fall_back_to_single_secret():
    assert get_webhook_secret_list(_settings(STRIPE_WEBHOOK_SECRET=" whsec_single ")) == ["whsec_single"]
    assert get_webhook_secret_list(_settings()) == []
