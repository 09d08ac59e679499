"""Read-only projections of provider-owned billing objects."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Optional


@dataclass(frozen=True, slots=True)
class SubscriptionSnapshot:
    """
    Live view of a Stripe subscription, fetched on demand and never persisted.

    Attributes:
        id: Stripe subscription id
        status: Provider status (active, trialing, past_due, canceled, ...)
        current_period_end: End of the paid or trial period
        cancel_at_period_end: Whether cancellation is scheduled for period end
        cancel_at: Explicit cancellation instant, when the provider set one
        trial_end: End of the trial period, if any
    """

    id: str
    status: str
    current_period_end: Optional[datetime] = None
    cancel_at_period_end: bool = False
    cancel_at: Optional[datetime] = None
    trial_end: Optional[datetime] = None

    def cancellation_effective_at(self) -> Optional[datetime]:
        return self.current_period_end or self.cancel_at


@dataclass(frozen=True, slots=True)
class CheckoutSession:
    session_id: str
    url: Optional[str]


@dataclass(frozen=True, slots=True)
class SubscriptionStatus:
    client_id: str
    tier: Optional[str]
    status: str
    subscription: Optional[SubscriptionSnapshot] = None
