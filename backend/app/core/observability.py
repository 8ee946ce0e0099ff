"""Observability helpers (Sentry init & common scrubbing).

Keeps initialisation a no-op if the SDK or DSN are missing.  Webhook
payloads carry customer emails, so request bodies and the signature header
are always stripped before events leave the process.
"""

from __future__ import annotations

from typing import Any, Dict, Optional

from app.core.config import settings

try:  # Optional import
	import sentry_sdk  # type: ignore
	from sentry_sdk.integrations.fastapi import FastApiIntegration  # type: ignore
	from sentry_sdk.integrations.sqlalchemy import SqlalchemyIntegration  # type: ignore
	_SENTRY_AVAILABLE = True
except ImportError:  # pragma: no cover
	_SENTRY_AVAILABLE = False

_SCRUBBED_HEADERS = ("authorization", "cookie", "set-cookie", "stripe-signature")


def _enabled() -> bool:
	return bool(_SENTRY_AVAILABLE and settings.SENTRY_DSN)


def _before_send(event: Dict[str, Any], hint: Dict[str, Any] | None = None):  # type: ignore[override]
	"""Drop secrets and raw bodies before sending to Sentry."""
	req = event.get("request") or {}
	headers = req.get("headers") or {}
	for k in list(headers.keys()):
		if k.lower() in _SCRUBBED_HEADERS:
			headers.pop(k, None)
	# Avoid leaking raw webhook bodies
	req.pop("data", None)
	event["request"] = req
	return event


def init_sentry(service: str) -> bool:
	"""Initialise Sentry once for a given process.

	Returns True if Sentry was initialised; False otherwise.
	"""
	if not _enabled():  # pragma: no cover - simple guard
		return False
	if getattr(init_sentry, "_done", False):  # prevent duplicate init in same process
		return True
	sentry_sdk.init(
		dsn=settings.SENTRY_DSN,
		integrations=[FastApiIntegration(), SqlalchemyIntegration()],
		traces_sample_rate=float(settings.SENTRY_TRACES_SAMPLE_RATE or 0),
		environment=settings.ENVIRONMENT,
		release=settings.SENTRY_RELEASE,
		before_send=_before_send,
	)
	sentry_sdk.set_tag("service", service)
	init_sentry._done = True  # type: ignore[attr-defined]
	return True


def sentry_breadcrumb(category: str, message: str, level: str = "info", data: Optional[Dict[str, Any]] = None) -> None:
	"""Best-effort: add a breadcrumb for important lifecycle steps."""
	if not _enabled():
		return
	try:
		sentry_sdk.add_breadcrumb(category=category, message=message, level=level, data=data or {})
	except Exception:  # pragma: no cover - instrumentation only
		return


def sentry_metric_inc(name: str, value: int = 1, tags: Optional[Dict[str, Any]] = None) -> None:
	"""Best-effort: increment a Sentry metric; no-op when metrics are unavailable."""
	if not _enabled():
		return
	try:
		from sentry_sdk import metrics  # type: ignore
		# Coerce tag values to short strings to avoid PII/large payloads
		safe_tags = {str(k): str(v)[:64] for k, v in (tags or {}).items()}
		metrics.increment(name, value=value, tags=safe_tags)  # type: ignore
	except Exception:  # pragma: no cover - metrics API varies across SDK versions
		return


def sentry_capture_exception(exc: BaseException) -> None:
	"""Best-effort: report a handled exception."""
	if not _enabled():
		return
	try:
		sentry_sdk.capture_exception(exc)
	except Exception:  # pragma: no cover
		return


__all__ = ["init_sentry", "sentry_breadcrumb", "sentry_metric_inc", "sentry_capture_exception"]
