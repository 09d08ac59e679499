"""API router for starting subscription checkout."""

from fastapi import APIRouter, Depends

from ....application.services.checkout_service import CheckoutService
from ....core.dependencies import get_checkout_service
from ....domain.models import Identity
from ...api.dependencies import require_identity
from ...api.schemas.checkout import CreateCheckoutSessionRequest, CreateCheckoutSessionResponse

router = APIRouter(prefix="/api", tags=["checkout"])


@router.post("/create-checkout-session", response_model=CreateCheckoutSessionResponse)
async def create_checkout_session(
    payload: CreateCheckoutSessionRequest,
    identity: Identity = Depends(require_identity),
    checkout_service: CheckoutService = Depends(get_checkout_service),
) -> CreateCheckoutSessionResponse:
    """Create a Stripe checkout session for a service tier."""
    session = checkout_service.create_session(
        identity,
        payload.tier,
        success_url=payload.success_url,
        cancel_url=payload.cancel_url,
    )
    return CreateCheckoutSessionResponse(session_id=session.session_id, url=session.url)
