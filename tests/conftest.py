"""Shared fakes and fixtures for the billing service tests."""

from __future__ import annotations

import json
from dataclasses import replace
from typing import Any, Dict, List, Mapping, Optional, Tuple

import pytest
from fastapi.testclient import TestClient

from apex_billing.application.services.checkout_service import CheckoutService
from apex_billing.application.services.subscription_service import SubscriptionService
from apex_billing.application.services.webhook_processor import WebhookProcessor
from apex_billing.core.app_factory import create_application
from apex_billing.core.container import ApplicationContainer
from apex_billing.domain.errors import ProviderError, SignatureInvalid, StoreError, Unauthenticated
from apex_billing.domain.models import (
    BillingTransition,
    CheckoutSession,
    Client,
    ClientStatus,
    Identity,
    SubscriptionSnapshot,
)

VALID_SIGNATURE = "t=1,v1=valid"
FRONTEND_URL = "https://apex.example.com"


class InMemoryClientRepository:
    def __init__(self) -> None:
        self.clients: Dict[str, Client] = {}
        self.transitions: List[Tuple[str, BillingTransition]] = []
        self.fail_writes = False

    def add(self, client: Client) -> Client:
        self.clients[client.id] = client
        return client

    def get_client_by_user_id(self, user_id: str) -> Optional[Client]:
        for client in self.clients.values():
            if client.user_id == user_id:
                return client
        return None

    def get_client(self, client_id: str) -> Optional[Client]:
        return self.clients.get(client_id)

    def apply_billing_transition(
        self, client_id: str, transition: BillingTransition
    ) -> Optional[Client]:
        if self.fail_writes:
            raise StoreError("store unavailable")
        self.transitions.append((client_id, transition))
        client = self.clients.get(client_id)
        if client is None:
            return None
        columns = transition.to_columns()
        updated = replace(
            client,
            status=ClientStatus(columns["status"]),
            tier=columns.get("tier", client.tier),
            provider_customer_id=columns.get("stripe_customer_id", client.provider_customer_id),
            provider_subscription_id=columns.get(
                "stripe_subscription_id", client.provider_subscription_id
            ),
        )
        self.clients[client_id] = updated
        return updated


class FakeBillingProvider:
    def __init__(self) -> None:
        self.checkout_requests: List[Dict[str, Any]] = []
        self.subscriptions: Dict[str, SubscriptionSnapshot] = {}
        self.cancellations: List[str] = []
        self.retrieve_error: Optional[ProviderError] = None

    def create_checkout_session(self, params: Dict[str, Any]) -> CheckoutSession:
        self.checkout_requests.append(params)
        number = len(self.checkout_requests)
        return CheckoutSession(
            session_id=f"cs_test_{number}",
            url=f"https://checkout.stripe.com/c/pay/cs_test_{number}",
        )

    def retrieve_subscription(self, subscription_id: str) -> SubscriptionSnapshot:
        if self.retrieve_error is not None:
            raise self.retrieve_error
        return self.subscriptions[subscription_id]

    def schedule_cancellation(self, subscription_id: str) -> SubscriptionSnapshot:
        self.cancellations.append(subscription_id)
        snapshot = replace(self.subscriptions[subscription_id], cancel_at_period_end=True)
        self.subscriptions[subscription_id] = snapshot
        return snapshot

    def construct_event(self, payload: bytes, signature: str) -> Mapping[str, Any]:
        if signature != VALID_SIGNATURE:
            raise SignatureInvalid()
        return json.loads(payload)


class StaticIdentityResolver:
    def __init__(self) -> None:
        self.tokens: Dict[str, Identity] = {}

    def resolve(self, token: str) -> Identity:
        try:
            return self.tokens[token]
        except KeyError:
            raise Unauthenticated() from None


def make_event(event_type: str, obj: Dict[str, Any], event_id: str = "evt_1") -> Dict[str, Any]:
    return {"id": event_id, "object": "event", "type": event_type, "data": {"object": obj}}


def encode_event(event: Dict[str, Any]) -> bytes:
    return json.dumps(event).encode("utf-8")


@pytest.fixture
def repository() -> InMemoryClientRepository:
    repo = InMemoryClientRepository()
    repo.add(Client(id="c1", user_id="u1", company_name="Rolling Freight LLC"))
    return repo


@pytest.fixture
def provider() -> FakeBillingProvider:
    return FakeBillingProvider()


@pytest.fixture
def identity() -> Identity:
    return Identity(user_id="u1", email="dispatch@rollingfreight.example")


@pytest.fixture
def resolver(identity: Identity) -> StaticIdentityResolver:
    resolver = StaticIdentityResolver()
    resolver.tokens["token-u1"] = identity
    resolver.tokens["token-stranger"] = Identity(user_id="u-none", email="nobody@example.com")
    return resolver


@pytest.fixture
def container(repository, provider, resolver) -> ApplicationContainer:
    return ApplicationContainer(
        client_repository=repository,
        billing_provider=provider,
        identity_resolver=resolver,
        checkout_service=CheckoutService(repository, provider, frontend_url=FRONTEND_URL),
        webhook_processor=WebhookProcessor(repository, provider),
        subscription_service=SubscriptionService(repository, provider),
    )


@pytest.fixture
def client(container):
    app = create_application(container)
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def auth_headers():
    return {"Authorization": "Bearer token-u1"}
