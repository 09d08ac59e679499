"""Domain models for the Apex Operations billing service."""

from .client import BillingTransition, Client, ClientStatus
from .events import (
    BillingEvent,
    CheckoutCompleted,
    EventKind,
    InvoicePaymentFailed,
    InvoicePaymentSucceeded,
    SubscriptionDeleted,
    SubscriptionUpdated,
    UnhandledEvent,
    parse_event,
)
from .identity import Identity
from .subscription import CheckoutSession, SubscriptionSnapshot, SubscriptionStatus
from .tier import TIER_CATALOG, Tier, get_tier, list_tiers

__all__ = [
    "BillingEvent",
    "BillingTransition",
    "CheckoutCompleted",
    "CheckoutSession",
    "Client",
    "ClientStatus",
    "EventKind",
    "Identity",
    "InvoicePaymentFailed",
    "InvoicePaymentSucceeded",
    "SubscriptionDeleted",
    "SubscriptionSnapshot",
    "SubscriptionStatus",
    "SubscriptionUpdated",
    "TIER_CATALOG",
    "Tier",
    "UnhandledEvent",
    "get_tier",
    "list_tiers",
    "parse_event",
]
