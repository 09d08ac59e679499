from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, List, Optional


@dataclass(frozen=True, slots=True)
class Tier:
    key: str
    name: str
    description: str
    price: int  # monthly, in cents
    currency: str = "usd"
    interval: str = "month"


TIER_CATALOG: Dict[str, Tier] = {
    tier.key: tier
    for tier in (
        Tier(
            key="wingman",
            name="The Wingman",
            description="Weekly compliance audits and essential support",
            price=15000,
        ),
        Tier(
            key="guardian",
            name="The Guardian",
            description="Comprehensive compliance management with priority support",
            price=27500,
        ),
        Tier(
            key="apex_command",
            name="Apex Command",
            description="Full-service compliance with dedicated account manager",
            price=45000,
        ),
    )
}


def get_tier(key: Optional[str]) -> Optional[Tier]:
    if not key:
        return None
    return TIER_CATALOG.get(key)


def list_tiers() -> List[Tier]:
    return list(TIER_CATALOG.values())
