"""API package.

This exposes router modules to simplify test imports like:
	from app.api.routes.stripe_webhooks import router
"""

__all__ = [
	"routes",
]
