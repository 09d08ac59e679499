"""Stripe webhook endpoint."""

from typing import Dict, Optional

from fastapi import APIRouter, Depends, Header, Request

from ....application.services.webhook_processor import WebhookProcessor
from ....core.dependencies import get_webhook_processor

router = APIRouter(prefix="/api/stripe", tags=["Stripe Webhook"])


@router.post("/webhook", include_in_schema=False)
async def stripe_webhook(
    request: Request,
    stripe_signature: Optional[str] = Header(None, alias="Stripe-Signature"),
    processor: WebhookProcessor = Depends(get_webhook_processor),
) -> Dict[str, bool]:
    """Handle Stripe webhook events.

    Any non-2xx answer makes Stripe redeliver the event.
    """
    # Signature verification needs the body byte-for-byte.
    payload = await request.body()
    processor.process(payload, stripe_signature)
    return {"received": True}
