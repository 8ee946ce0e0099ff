"""
Webhook processing exceptions.

Every error raised while verifying or reconciling a provider event derives
from ``WebhookError`` so the processor can convert them into a single
failure response at its boundary.
"""

from __future__ import annotations


class WebhookError(Exception):
    """Base exception for webhook and billing errors."""

    def __init__(self, message: str, code: str = "WEBHOOK_ERROR", details: dict | None = None):
        self.message = message
        self.code = code
        self.details = details or {}
        super().__init__(self.message)

    def to_dict(self) -> dict:
        """Convert exception to dictionary for logs and API responses."""
        return {
            "error": self.code,
            "message": self.message,
            "details": self.details,
        }


class VerificationError(WebhookError):
    """Raised when the provider signature is missing, malformed, mismatched or expired."""

    def __init__(self, message: str = "Invalid signature"):
        super().__init__(message=message, code="VERIFICATION_FAILED")


class UserNotFoundError(WebhookError):
    """
    Raised when an event references a user that does not exist locally.

    Attributes:
        email: Email looked up (checkout events)
        customer_id: Provider customer id looked up (subscription events)
    """

    def __init__(self, message: str = "User not found", email: str | None = None, customer_id: str | None = None):
        details = {}
        if email:
            details["email"] = email
        if customer_id:
            details["customer_id"] = customer_id
        super().__init__(message=message, code="USER_NOT_FOUND", details=details)
        self.email = email
        self.customer_id = customer_id


class InvalidPriceError(WebhookError):
    """Raised when a recurring line item carries a price id outside the catalog."""

    def __init__(self, price_id: str | None):
        super().__init__(
            message=f"Invalid priceId: {price_id}",
            code="INVALID_PRICE",
            details={"price_id": price_id},
        )
        self.price_id = price_id


class ConfigurationError(WebhookError):
    """Raised at startup when billing configuration is incomplete."""

    def __init__(self, message: str):
        super().__init__(message=message, code="CONFIGURATION_ERROR")
