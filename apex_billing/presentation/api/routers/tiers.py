from typing import List

from fastapi import APIRouter

from ....domain.models import list_tiers
from ...api.schemas.tier import TierResponse

router = APIRouter(prefix="/api/tiers", tags=["tiers"])


@router.get("", response_model=List[TierResponse])
async def get_tiers() -> List[TierResponse]:
    """List the service tiers available for checkout."""
    return [
        TierResponse(
            key=tier.key,
            name=tier.name,
            description=tier.description,
            price=tier.price,
            currency=tier.currency,
            interval=tier.interval,
        )
        for tier in list_tiers()
    ]
