"""Configuration management.

This module defines a ``Settings`` class that reads configuration values
from environment variables and ``.env`` files.  ``.env`` files are loaded
from the repository root first, then whatever python-dotenv discovers from
the current working directory.  Files never override variables that are
already set in the process environment.

Billing-specific configuration (webhook secrets and the price catalog) is
exposed through small helpers so the webhook processor receives explicit,
validated values instead of reading the environment at call time.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, Optional

from dotenv import find_dotenv, load_dotenv
from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from app.models.enums import BillingPeriod
from app.services.errors import ConfigurationError

# -----------------------------------------------------------------------------
# .env loading
#
# Prefer a .env in the repository root but allow fallback to whatever
# python-dotenv discovers from the current working directory.

_THIS_FILE = Path(__file__).resolve()
_REPO_ROOT = _THIS_FILE.parents[3]
_ROOT_ENV = _REPO_ROOT / ".env"

_candidate_envs: list[str] = []
if _ROOT_ENV.exists():
    _candidate_envs.append(str(_ROOT_ENV))

_FOUND_ENV = find_dotenv(usecwd=True)
if _FOUND_ENV and _FOUND_ENV not in _candidate_envs:
    _candidate_envs.append(_FOUND_ENV)

for _env_path in _candidate_envs:
    load_dotenv(dotenv_path=_env_path, override=False)


class Settings(BaseSettings):
    """Application settings.

    Any attribute defined here can be overridden by setting the
    corresponding environment variable.
    """

    model_config = SettingsConfigDict(
        env_file=tuple(_candidate_envs) if _candidate_envs else (".env",),
        case_sensitive=True,
        extra="allow",
    )

    PROJECT_NAME: str = "Subscription Webhooks"
    ENVIRONMENT: str = Field(default="development")
    LOG_LEVEL: str = Field(default="INFO")

    # Database
    DATABASE_URL: Optional[str] = Field(default=None)
    # Dev DB fallback (fail fast by default)
    DB_DEV_FALLBACK_SQLITE: bool = Field(default=False)

    # Sentry
    SENTRY_DSN: Optional[str] = Field(default=None)
    SENTRY_TRACES_SAMPLE_RATE: float = Field(default=0.0)
    SENTRY_RELEASE: Optional[str] = Field(default=None)

    # Stripe
    STRIPE_API_KEY: Optional[str] = Field(default=None)
    STRIPE_WEBHOOK_SECRET: Optional[str] = Field(default=None)
    # Comma separated, ordered; used while rotating endpoint secrets
    STRIPE_WEBHOOK_SECRETS: Optional[str] = Field(default=None)
    STRIPE_MONTHLY_PRICE_ID: Optional[str] = Field(default=None)
    STRIPE_YEARLY_PRICE_ID: Optional[str] = Field(default=None)


# Instantiate global settings
settings = Settings()


def get_webhook_secret_list(source: Settings | None = None) -> list[str]:
    """Return list of webhook secrets for signature verification.

    Precedence:
    1. STRIPE_WEBHOOK_SECRETS (comma separated, ordered)
    2. Fallback to singular STRIPE_WEBHOOK_SECRET if set
    """
    cfg = source or settings
    secrets: list[str] = []
    if cfg.STRIPE_WEBHOOK_SECRETS:
        secrets.extend([s.strip() for s in cfg.STRIPE_WEBHOOK_SECRETS.split(",") if s.strip()])
    elif cfg.STRIPE_WEBHOOK_SECRET:
        secrets.append(cfg.STRIPE_WEBHOOK_SECRET.strip())
    return secrets


@dataclass(frozen=True)
class PriceCatalog:
    """Known recurring price ids and the billing period each one grants."""

    periods: Dict[str, BillingPeriod] = field(default_factory=dict)

    def period_for(self, price_id: str | None) -> Optional[BillingPeriod]:
        if not price_id:
            return None
        return self.periods.get(price_id)

    def __contains__(self, price_id: object) -> bool:
        return price_id in self.periods


def build_price_catalog(source: Settings | None = None) -> PriceCatalog:
    """Build the price catalog from settings, failing on incomplete config."""
    cfg = source or settings
    monthly = (cfg.STRIPE_MONTHLY_PRICE_ID or "").strip()
    yearly = (cfg.STRIPE_YEARLY_PRICE_ID or "").strip()
    missing = [
        name
        for name, value in (("STRIPE_MONTHLY_PRICE_ID", monthly), ("STRIPE_YEARLY_PRICE_ID", yearly))
        if not value
    ]
    if missing:
        raise ConfigurationError(f"Missing price configuration: {', '.join(missing)}")
    if monthly == yearly:
        raise ConfigurationError("STRIPE_MONTHLY_PRICE_ID and STRIPE_YEARLY_PRICE_ID must differ")
    return PriceCatalog(periods={monthly: BillingPeriod.MONTHLY, yearly: BillingPeriod.YEARLY})
