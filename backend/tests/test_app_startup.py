from __future__ import annotations

import importlib
import warnings

import pytest
from fastapi.exceptions import RequestValidationError
from fastapi.testclient import TestClient

from app.api import deps
from app.core.config import settings
from app.services.errors import ConfigurationError


@pytest.fixture
def configured(monkeypatch):
    monkeypatch.setattr(settings, "STRIPE_MONTHLY_PRICE_ID", "price_m", raising=False)
    monkeypatch.setattr(settings, "STRIPE_YEARLY_PRICE_ID", "price_y", raising=False)
    monkeypatch.setattr(settings, "STRIPE_WEBHOOK_SECRETS", None, raising=False)
    monkeypatch.setattr(settings, "STRIPE_WEBHOOK_SECRET", "whsec_test", raising=False)
    deps.get_price_catalog.cache_clear()
    yield monkeypatch
    deps.get_price_catalog.cache_clear()


def test_startup_succeeds_with_complete_billing_config(configured):
    from app.api.main import app

    with TestClient(app) as client:
        assert client.get("/health").status_code == 200


def test_startup_fails_without_price_ids(configured):
    from app.api.main import app

    configured.setattr(settings, "STRIPE_YEARLY_PRICE_ID", None, raising=False)

    with pytest.raises(ConfigurationError) as exc:
        with TestClient(app):
            pass
    assert "STRIPE_YEARLY_PRICE_ID" in exc.value.message


def test_startup_fails_without_webhook_secret(configured):
    from app.api.main import app

    configured.setattr(settings, "STRIPE_WEBHOOK_SECRET", None, raising=False)

    with pytest.raises(ConfigurationError) as exc:
        with TestClient(app):
            pass
    assert "STRIPE_WEBHOOK_SECRET" in exc.value.message


def test_error_handlers_import_without_deprecation_warnings():
    from app.api import error_handlers

    with warnings.catch_warnings():
        warnings.simplefilter("error", DeprecationWarning)
        module = importlib.reload(error_handlers)

    resp = module.validation_exception_handler(None, RequestValidationError([]))
    assert resp.status_code == 422
