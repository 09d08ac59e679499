"""Stripe payment integration."""

from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import Any, Dict, Mapping, Optional

import stripe

from ...domain.errors import ProviderError, SignatureInvalid
from ...domain.models import CheckoutSession, SubscriptionSnapshot
from ...domain.ports.billing import BillingProvider

logger = logging.getLogger(__name__)

# Raised while projecting a response whose shape differs from what we read.
_PROJECTION_ERRORS = (AttributeError, KeyError, TypeError, ValueError, OverflowError)


class StripeGateway(BillingProvider):
    """Wraps an explicitly constructed ``stripe.StripeClient``.

    SDK objects never leave this class: events are handed out as plain dicts
    and subscriptions as :class:`SubscriptionSnapshot`.
    """

    def __init__(
        self,
        secret_key: str,
        webhook_secret: str,
        api_version: Optional[str] = None,
        client: Optional[stripe.StripeClient] = None,
    ) -> None:
        if not secret_key:
            raise RuntimeError("Stripe secret key is required.")
        if not webhook_secret:
            raise RuntimeError("Stripe webhook secret is required.")
        if client is None:
            options: Dict[str, Any] = {}
            if api_version:
                options["stripe_version"] = api_version
            client = stripe.StripeClient(secret_key, **options)
        # Newer SDK releases group these services under ``client.v1``.
        self._client = getattr(client, "v1", client)
        self._webhook_secret = webhook_secret

    def create_checkout_session(self, params: Dict[str, Any]) -> CheckoutSession:
        try:
            session = self._client.checkout.sessions.create(params=params)
        except stripe.StripeError as exc:
            logger.error("Failed to create checkout session: %s", exc)
            raise ProviderError(_error_message(exc, "Failed to create checkout session")) from exc
        return CheckoutSession(session_id=session.id, url=session.url)

    def retrieve_subscription(self, subscription_id: str) -> SubscriptionSnapshot:
        try:
            subscription = self._client.subscriptions.retrieve(subscription_id)
        except stripe.StripeError as exc:
            logger.error("Failed to retrieve subscription %s: %s", subscription_id, exc)
            raise ProviderError(_error_message(exc, "Failed to retrieve subscription")) from exc
        return _project(subscription_id, subscription)

    def schedule_cancellation(self, subscription_id: str) -> SubscriptionSnapshot:
        try:
            subscription = self._client.subscriptions.update(
                subscription_id,
                params={"cancel_at_period_end": True},
            )
        except stripe.StripeError as exc:
            logger.error("Failed to cancel subscription %s: %s", subscription_id, exc)
            raise ProviderError(_error_message(exc, "Failed to cancel subscription")) from exc
        return _project(subscription_id, subscription)

    def construct_event(self, payload: bytes, signature: str) -> Mapping[str, Any]:
        try:
            event = stripe.Webhook.construct_event(payload, signature, self._webhook_secret)
        except stripe.SignatureVerificationError as exc:
            raise SignatureInvalid() from exc
        except ValueError as exc:
            raise SignatureInvalid("Invalid webhook payload") from exc
        return event.to_dict()


def snapshot_from_subscription(subscription: Mapping[str, Any]) -> SubscriptionSnapshot:
    """Project a plain subscription mapping onto :class:`SubscriptionSnapshot`."""
    period_end = subscription.get("current_period_end")
    if period_end is None:
        # Newer API versions only carry the period on subscription items.
        items = (subscription.get("items") or {}).get("data") or []
        if items:
            period_end = items[0].get("current_period_end")

    return SubscriptionSnapshot(
        id=subscription.get("id"),
        status=subscription.get("status"),
        current_period_end=_from_timestamp(period_end),
        cancel_at_period_end=bool(subscription.get("cancel_at_period_end")),
        cancel_at=_from_timestamp(subscription.get("cancel_at")),
        trial_end=_from_timestamp(subscription.get("trial_end")),
    )


def _project(subscription_id: str, subscription: stripe.Subscription) -> SubscriptionSnapshot:
    try:
        return snapshot_from_subscription(subscription.to_dict())
    except _PROJECTION_ERRORS as exc:
        logger.error("Unexpected subscription payload for %s: %s", subscription_id, exc)
        raise ProviderError("Unexpected subscription payload from Stripe") from exc


def _from_timestamp(value: Optional[int]) -> Optional[datetime]:
    if value is None:
        return None
    return datetime.fromtimestamp(value, tz=timezone.utc)


def _error_message(exc: stripe.StripeError, fallback: str) -> str:
    return exc.user_message or str(exc) or fallback
