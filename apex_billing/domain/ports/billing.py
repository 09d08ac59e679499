from __future__ import annotations

from typing import Any, Dict, Mapping, Protocol

from ..models import CheckoutSession, SubscriptionSnapshot


class BillingProvider(Protocol):
    """Hosted payment and subscription API."""

    def create_checkout_session(self, params: Dict[str, Any]) -> CheckoutSession:
        ...

    def retrieve_subscription(self, subscription_id: str) -> SubscriptionSnapshot:
        ...

    def schedule_cancellation(self, subscription_id: str) -> SubscriptionSnapshot:
        ...

    def construct_event(self, payload: bytes, signature: str) -> Mapping[str, Any]:
        """Verify ``signature`` over the raw ``payload`` and return the event.

        Raises ``SignatureInvalid`` when verification fails.
        """
        ...
