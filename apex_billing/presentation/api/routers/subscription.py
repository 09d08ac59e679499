"""API router for the caller's subscription."""

from fastapi import APIRouter, Depends

from ....application.services.subscription_service import SubscriptionService
from ....core.dependencies import get_subscription_service
from ....domain.models import Identity
from ...api.dependencies import require_identity
from ...api.schemas.subscription import (
    CancelSubscriptionResponse,
    SubscriptionDetailResponse,
    SubscriptionStatusResponse,
)

router = APIRouter(prefix="/api/subscription", tags=["subscription"])


@router.get("/status", response_model=SubscriptionStatusResponse)
async def get_subscription_status(
    identity: Identity = Depends(require_identity),
    subscription_service: SubscriptionService = Depends(get_subscription_service),
) -> SubscriptionStatusResponse:
    """Get stored billing status plus live Stripe detail."""
    result = subscription_service.get_status(identity)

    detail = None
    if result.subscription is not None:
        detail = SubscriptionDetailResponse(
            status=result.subscription.status,
            current_period_end=result.subscription.current_period_end,
            cancel_at_period_end=result.subscription.cancel_at_period_end,
            trial_end=result.subscription.trial_end,
        )

    return SubscriptionStatusResponse(
        client_id=result.client_id,
        tier=result.tier,
        status=result.status,
        subscription=detail,
    )


@router.post("/cancel", response_model=CancelSubscriptionResponse)
async def cancel_subscription(
    identity: Identity = Depends(require_identity),
    subscription_service: SubscriptionService = Depends(get_subscription_service),
) -> CancelSubscriptionResponse:
    """Cancel current subscription at period end."""
    cancel_at = subscription_service.cancel(identity)
    return CancelSubscriptionResponse(
        message="Subscription will be cancelled at the end of the billing period",
        cancel_at=cancel_at,
    )
