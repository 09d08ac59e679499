"""Service starting Stripe Checkout sessions for a service tier."""

from __future__ import annotations

import logging
from typing import Any, Dict, Optional

from ...domain.errors import ClientNotFound, InvalidTier
from ...domain.models import CheckoutSession, Client, Identity, Tier, get_tier
from ...domain.ports.billing import BillingProvider
from ...domain.ports.persistence import ClientRepository

logger = logging.getLogger(__name__)

TRIAL_PERIOD_DAYS = 30


class CheckoutService:
    """Creates checkout sessions bound to the caller's client record.

    The client record is not written here: billing status changes only when
    the resulting webhook events are processed.
    """

    def __init__(
        self,
        client_repository: ClientRepository,
        billing_provider: BillingProvider,
        frontend_url: str,
        trial_period_days: int = TRIAL_PERIOD_DAYS,
    ) -> None:
        self._clients = client_repository
        self._billing = billing_provider
        self._frontend_url = frontend_url.rstrip("/")
        self._trial_period_days = trial_period_days

    def create_session(
        self,
        identity: Identity,
        tier_key: Optional[str],
        success_url: Optional[str] = None,
        cancel_url: Optional[str] = None,
    ) -> CheckoutSession:
        """
        Create a subscription-mode checkout session for a tier.

        Args:
            identity: Authenticated caller
            tier_key: Requested tier key
            success_url: Redirect after payment, defaults to the portal success page
            cancel_url: Redirect on abandon, defaults to the portal checkout page

        Returns:
            Session id and hosted checkout URL

        Raises:
            InvalidTier: If the tier is not in the catalogue
            ClientNotFound: If the caller has no client record
            ProviderError: If Stripe rejects the request
        """
        tier = get_tier(tier_key)
        if tier is None:
            raise InvalidTier()

        client = self._clients.get_client_by_user_id(identity.user_id)
        if client is None:
            raise ClientNotFound()

        params = self.build_session_params(identity, client, tier, success_url, cancel_url)
        session = self._billing.create_checkout_session(params)
        logger.info(
            "Checkout session %s created for client %s (tier %s)",
            session.session_id,
            client.id,
            tier.key,
        )
        return session

    def build_session_params(
        self,
        identity: Identity,
        client: Client,
        tier: Tier,
        success_url: Optional[str] = None,
        cancel_url: Optional[str] = None,
    ) -> Dict[str, Any]:
        # Subscription events only carry the subscription's own metadata, so
        # the client binding is attached to both objects.
        metadata = {
            "client_id": client.id,
            "user_id": identity.user_id,
            "tier": tier.key,
        }
        if client.company_name:
            metadata["company_name"] = client.company_name

        params: Dict[str, Any] = {
            "mode": "subscription",
            "payment_method_types": ["card"],
            "line_items": [
                {
                    "price_data": {
                        "currency": tier.currency,
                        "product_data": {
                            "name": tier.name,
                            "description": tier.description,
                        },
                        "unit_amount": tier.price,
                        "recurring": {"interval": tier.interval},
                    },
                    "quantity": 1,
                }
            ],
            "client_reference_id": client.id,
            "metadata": dict(metadata),
            "subscription_data": {
                "metadata": dict(metadata),
                "trial_period_days": self._trial_period_days,
            },
            "success_url": success_url
            or f"{self._frontend_url}/portal/checkout/success?session_id={{CHECKOUT_SESSION_ID}}",
            "cancel_url": cancel_url or f"{self._frontend_url}/portal/checkout?tier={tier.key}",
        }
        if identity.email:
            params["customer_email"] = identity.email
        return params
