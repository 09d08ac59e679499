"""Client domain model holding the billing state of one paying customer."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Optional


class ClientStatus(str, Enum):
    ACTIVE = "active"
    INACTIVE = "inactive"


@dataclass(slots=True)
class Client:
    """
    Client entity as stored in the ``clients`` table.

    Attributes:
        id: Stable client identifier
        user_id: Identity reference of the account owning this client
        company_name: Display name attached to checkout metadata
        tier: Current service tier key, if one was ever purchased
        status: Billing status, written only by webhook processing
        provider_customer_id: Stripe customer id, set once checkout completes
        provider_subscription_id: Stripe subscription id, cleared on deletion
    """

    id: str
    user_id: str
    status: ClientStatus = ClientStatus.INACTIVE
    company_name: Optional[str] = None
    tier: Optional[str] = None
    provider_customer_id: Optional[str] = None
    provider_subscription_id: Optional[str] = None

    def has_subscription(self) -> bool:
        return bool(self.provider_subscription_id)


@dataclass(frozen=True, slots=True)
class BillingTransition:
    """Field values one webhook event assigns to a client row.

    Every value is derived from the event payload alone, so applying the same
    transition twice leaves the row unchanged.
    """

    status: ClientStatus
    tier: Optional[str] = None
    provider_customer_id: Optional[str] = None
    provider_subscription_id: Optional[str] = None
    clear_subscription: bool = False

    def to_columns(self) -> Dict[str, Any]:
        columns: Dict[str, Any] = {"status": self.status.value}
        if self.tier is not None:
            columns["tier"] = self.tier
        if self.provider_customer_id is not None:
            columns["stripe_customer_id"] = self.provider_customer_id
        if self.clear_subscription:
            columns["stripe_subscription_id"] = None
        elif self.provider_subscription_id is not None:
            columns["stripe_subscription_id"] = self.provider_subscription_id
        return columns
