"""Billing events received from the Stripe webhook.

Only the event kinds below change or report billing state. Every other type
parses to :class:`UnhandledEvent`, which is observed and acknowledged.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Mapping, Optional, Union


class EventKind(str, Enum):
    CHECKOUT_COMPLETED = "checkout.session.completed"
    SUBSCRIPTION_UPDATED = "customer.subscription.updated"
    SUBSCRIPTION_DELETED = "customer.subscription.deleted"
    INVOICE_PAYMENT_SUCCEEDED = "invoice.payment_succeeded"
    INVOICE_PAYMENT_FAILED = "invoice.payment_failed"


@dataclass(frozen=True, slots=True)
class CheckoutCompleted:
    event_id: str
    client_id: Optional[str]
    tier: Optional[str]
    customer_id: Optional[str]
    subscription_id: Optional[str]


@dataclass(frozen=True, slots=True)
class SubscriptionUpdated:
    event_id: str
    client_id: Optional[str]
    subscription_id: str
    provider_status: Optional[str]


@dataclass(frozen=True, slots=True)
class SubscriptionDeleted:
    event_id: str
    client_id: Optional[str]
    subscription_id: str


@dataclass(frozen=True, slots=True)
class InvoicePaymentSucceeded:
    event_id: str
    invoice_id: Optional[str]
    customer_id: Optional[str]


@dataclass(frozen=True, slots=True)
class InvoicePaymentFailed:
    event_id: str
    invoice_id: Optional[str]
    customer_id: Optional[str]


@dataclass(frozen=True, slots=True)
class UnhandledEvent:
    event_id: str
    event_type: str


BillingEvent = Union[
    CheckoutCompleted,
    SubscriptionUpdated,
    SubscriptionDeleted,
    InvoicePaymentSucceeded,
    InvoicePaymentFailed,
    UnhandledEvent,
]


def parse_event(event: Mapping[str, Any]) -> BillingEvent:
    """Translate a verified Stripe event into a :data:`BillingEvent`."""
    event_id = str(event.get("id") or "")
    event_type = str(event.get("type") or "")
    data = event.get("data") or {}
    obj: Mapping[str, Any] = data.get("object") or {}

    try:
        kind = EventKind(event_type)
    except ValueError:
        return UnhandledEvent(event_id=event_id, event_type=event_type)

    if kind is EventKind.CHECKOUT_COMPLETED:
        metadata = _metadata(obj)
        return CheckoutCompleted(
            event_id=event_id,
            client_id=metadata.get("client_id"),
            tier=metadata.get("tier"),
            customer_id=obj.get("customer"),
            subscription_id=obj.get("subscription"),
        )
    if kind is EventKind.SUBSCRIPTION_UPDATED:
        return SubscriptionUpdated(
            event_id=event_id,
            client_id=_metadata(obj).get("client_id"),
            subscription_id=obj.get("id"),
            provider_status=obj.get("status"),
        )
    if kind is EventKind.SUBSCRIPTION_DELETED:
        return SubscriptionDeleted(
            event_id=event_id,
            client_id=_metadata(obj).get("client_id"),
            subscription_id=obj.get("id"),
        )
    if kind is EventKind.INVOICE_PAYMENT_SUCCEEDED:
        return InvoicePaymentSucceeded(
            event_id=event_id,
            invoice_id=obj.get("id"),
            customer_id=obj.get("customer"),
        )
    return InvoicePaymentFailed(
        event_id=event_id,
        invoice_id=obj.get("id"),
        customer_id=obj.get("customer"),
    )


def _metadata(obj: Mapping[str, Any]) -> Mapping[str, Any]:
    return obj.get("metadata") or {}
