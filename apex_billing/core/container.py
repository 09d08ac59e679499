from dataclasses import dataclass
from typing import Optional

from ..application.services.checkout_service import CheckoutService
from ..application.services.subscription_service import SubscriptionService
from ..application.services.webhook_processor import WebhookProcessor
from ..domain.ports.billing import BillingProvider
from ..domain.ports.identity import IdentityResolver
from ..domain.ports.persistence import ClientRepository
from .config import Settings


@dataclass(slots=True)
class ApplicationContainer:
    """Dependency registry shared across the FastAPI application lifecycle."""

    client_repository: ClientRepository
    billing_provider: BillingProvider
    identity_resolver: IdentityResolver
    checkout_service: CheckoutService
    webhook_processor: WebhookProcessor
    subscription_service: SubscriptionService
    settings: Optional[Settings] = None


def build_container(
    settings: Settings,
    client_repository: ClientRepository,
    billing_provider: BillingProvider,
    identity_resolver: IdentityResolver,
) -> ApplicationContainer:
    return ApplicationContainer(
        settings=settings,
        client_repository=client_repository,
        billing_provider=billing_provider,
        identity_resolver=identity_resolver,
        checkout_service=CheckoutService(
            client_repository,
            billing_provider,
            frontend_url=settings.frontend_base_url,
        ),
        webhook_processor=WebhookProcessor(client_repository, billing_provider),
        subscription_service=SubscriptionService(client_repository, billing_provider),
    )
