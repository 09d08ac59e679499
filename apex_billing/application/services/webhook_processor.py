"""Applies verified Stripe webhook events to client billing state."""

from __future__ import annotations

import logging
from typing import Optional

from ...domain.errors import SignatureInvalid, StoreError, WebhookProcessingError
from ...domain.models import (
    BillingEvent,
    BillingTransition,
    CheckoutCompleted,
    ClientStatus,
    EventKind,
    InvoicePaymentFailed,
    InvoicePaymentSucceeded,
    SubscriptionDeleted,
    SubscriptionUpdated,
    UnhandledEvent,
    get_tier,
    parse_event,
)
from ...domain.ports.billing import BillingProvider
from ...domain.ports.persistence import ClientRepository

logger = logging.getLogger(__name__)


class WebhookProcessor:
    """The only writer of client ``status`` and subscription id.

    Each event maps to at most one :class:`BillingTransition`, written as a
    single update of the row named by the event's ``client_id`` metadata.
    Events are not ordered or versioned: a redelivered older event applied
    after a newer one overwrites it.
    """

    def __init__(
        self,
        client_repository: ClientRepository,
        billing_provider: BillingProvider,
    ) -> None:
        self._clients = client_repository
        self._billing = billing_provider

    def process(self, payload: bytes, signature: Optional[str]) -> BillingEvent:
        """
        Verify and apply one webhook delivery.

        Args:
            payload: Raw request body, exactly as received
            signature: Value of the ``Stripe-Signature`` header

        Returns:
            The parsed event

        Raises:
            SignatureInvalid: If the signature is missing or does not verify
            WebhookProcessingError: If a state-changing write failed and the
                delivery must be retried
        """
        if not signature:
            raise SignatureInvalid("Missing webhook signature")
        event = parse_event(self._billing.construct_event(payload, signature))
        self.apply(event)
        return event

    def apply(self, event: BillingEvent) -> None:
        if isinstance(event, CheckoutCompleted):
            transition = self._checkout_transition(event)
            self._write(event.event_id, EventKind.CHECKOUT_COMPLETED, event.client_id, transition)
        elif isinstance(event, SubscriptionUpdated):
            status = ClientStatus.ACTIVE if event.provider_status == "active" else ClientStatus.INACTIVE
            transition = BillingTransition(
                status=status,
                provider_subscription_id=event.subscription_id,
            )
            self._write(event.event_id, EventKind.SUBSCRIPTION_UPDATED, event.client_id, transition)
        elif isinstance(event, SubscriptionDeleted):
            transition = BillingTransition(status=ClientStatus.INACTIVE, clear_subscription=True)
            self._write(event.event_id, EventKind.SUBSCRIPTION_DELETED, event.client_id, transition)
        elif isinstance(event, InvoicePaymentSucceeded):
            logger.info("Payment succeeded for invoice %s (customer %s)", event.invoice_id, event.customer_id)
        elif isinstance(event, InvoicePaymentFailed):
            logger.warning("Payment failed for invoice %s (customer %s)", event.invoice_id, event.customer_id)
        elif isinstance(event, UnhandledEvent):
            logger.info("Unhandled event type %s (%s)", event.event_type, event.event_id)
        else:  # pragma: no cover - closed union
            raise TypeError(f"Unknown billing event {event!r}")

    @staticmethod
    def _checkout_transition(event: CheckoutCompleted) -> BillingTransition:
        tier = event.tier
        if get_tier(tier) is None:
            logger.warning("Checkout %s carries unknown tier %r; tier left unchanged", event.event_id, tier)
            tier = None
        return BillingTransition(
            status=ClientStatus.ACTIVE,
            tier=tier,
            provider_customer_id=event.customer_id,
            provider_subscription_id=event.subscription_id,
        )

    def _write(
        self,
        event_id: str,
        kind: EventKind,
        client_id: Optional[str],
        transition: BillingTransition,
    ) -> None:
        if not client_id:
            logger.warning("Untracked %s event %s: metadata has no client_id", kind.value, event_id)
            return

        try:
            client = self._clients.apply_billing_transition(client_id, transition)
        except StoreError as exc:
            logger.exception("Failed to apply %s event %s to client %s", kind.value, event_id, client_id)
            raise WebhookProcessingError(f"Failed to apply {kind.value} for client {client_id}") from exc

        if client is None:
            logger.warning("Untracked %s event %s: client %s does not exist", kind.value, event_id, client_id)
            return
        logger.info(
            "Applied %s event %s to client %s: status=%s",
            kind.value,
            event_id,
            client_id,
            transition.status.value,
        )
