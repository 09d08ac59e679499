"""Service for reading and cancelling client subscriptions."""

from __future__ import annotations

import logging
from datetime import datetime
from typing import Optional

from ...domain.errors import ClientNotFound, NoActiveSubscription, ProviderError
from ...domain.models import Identity, SubscriptionSnapshot, SubscriptionStatus
from ...domain.ports.billing import BillingProvider
from ...domain.ports.persistence import ClientRepository

logger = logging.getLogger(__name__)


class SubscriptionService:
    """Reconciles stored client billing state with live Stripe data.

    Neither operation writes the client record.
    """

    def __init__(
        self,
        client_repository: ClientRepository,
        billing_provider: BillingProvider,
    ) -> None:
        self._clients = client_repository
        self._billing = billing_provider

    def get_status(self, identity: Identity) -> SubscriptionStatus:
        """
        Get the caller's stored billing status with live subscription detail.

        Args:
            identity: Authenticated caller

        Returns:
            Stored tier and status, plus the Stripe subscription snapshot when
            one is linked and reachable

        Raises:
            ClientNotFound: If the caller has no client record
        """
        client = self._clients.get_client_by_user_id(identity.user_id)
        if client is None:
            raise ClientNotFound()

        snapshot: Optional[SubscriptionSnapshot] = None
        if client.has_subscription():
            try:
                snapshot = self._billing.retrieve_subscription(client.provider_subscription_id)
            except ProviderError as exc:
                logger.warning(
                    "Live subscription lookup failed for client %s: %s", client.id, exc.message
                )

        return SubscriptionStatus(
            client_id=client.id,
            tier=client.tier,
            status=client.status.value,
            subscription=snapshot,
        )

    def cancel(self, identity: Identity) -> Optional[datetime]:
        """
        Schedule cancellation of the caller's subscription at period end.

        The client keeps access until then; its status flips when Stripe
        delivers the deletion event.

        Returns:
            When the cancellation takes effect

        Raises:
            NoActiveSubscription: If no subscription is linked to the caller
            ProviderError: If Stripe rejects the update
        """
        client = self._clients.get_client_by_user_id(identity.user_id)
        if client is None or not client.has_subscription():
            raise NoActiveSubscription()

        snapshot = self._billing.schedule_cancellation(client.provider_subscription_id)
        effective_at = snapshot.cancellation_effective_at()
        logger.info(
            "Subscription %s of client %s scheduled to cancel at %s",
            snapshot.id,
            client.id,
            effective_at.isoformat() if effective_at else "period end",
        )
        return effective_at
