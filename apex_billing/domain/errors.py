"""Error taxonomy shared by every billing operation.

HTTP status codes are assigned in the presentation layer only.
"""

from __future__ import annotations

from typing import Optional


class BillingError(Exception):
    code = "SERVER_ERROR"
    default_message = "Unexpected billing error"

    def __init__(self, message: Optional[str] = None) -> None:
        self.message = message or self.default_message
        super().__init__(self.message)


class Unauthenticated(BillingError):
    code = "UNAUTHORIZED"
    default_message = "Authentication required"


class ClientNotFound(BillingError):
    code = "CLIENT_NOT_FOUND"
    default_message = "Client record not found"


class InvalidTier(BillingError):
    code = "INVALID_TIER"
    default_message = "Invalid service tier specified"


class NoActiveSubscription(BillingError):
    code = "NO_SUBSCRIPTION"
    default_message = "No active subscription found"


class SignatureInvalid(BillingError):
    code = "SIGNATURE_INVALID"
    default_message = "Invalid webhook signature"


class WebhookProcessingError(BillingError):
    code = "WEBHOOK_ERROR"
    default_message = "Webhook processing failed"


class ProviderError(BillingError):
    code = "STRIPE_ERROR"
    default_message = "Billing provider request failed"


class StoreError(BillingError):
    code = "STORE_ERROR"
    default_message = "Client store request failed"
