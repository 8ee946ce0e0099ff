from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, Request
from fastapi.responses import PlainTextResponse

from app.api.deps import get_webhook_processor
from app.services.webhook_processor import WebhookProcessor

logger = logging.getLogger(__name__)

router = APIRouter(tags=["webhooks"])


@router.post("/api/webhooks/stripe", response_class=PlainTextResponse)
async def stripe_webhook(request: Request, processor: WebhookProcessor = Depends(get_webhook_processor)):
    """Handle Stripe webhook events.

    Verifies the ``stripe-signature`` header against the configured webhook
    secrets. Responds 200 once the event is reconciled (or ignored), 400 on
    signature errors or when reconciliation fails.
    """
    # Raw body is required for signature verification
    payload = await request.body()
    sig_header = request.headers.get("stripe-signature")
    result = await processor.handle(payload, sig_header)
    return PlainTextResponse(result.body, status_code=result.status_code)
