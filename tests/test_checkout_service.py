from __future__ import annotations

import pytest

from apex_billing.application.services.checkout_service import CheckoutService
from apex_billing.domain.errors import ClientNotFound, InvalidTier
from apex_billing.domain.models import ClientStatus, Identity

from conftest import FRONTEND_URL


@pytest.fixture
def service(repository, provider) -> CheckoutService:
    return CheckoutService(repository, provider, frontend_url=FRONTEND_URL + "/")


@pytest.mark.parametrize("tier", [None, "", "platinum", "WINGMAN", "wingman ", "apex-command"])
def test_invalid_tier_is_rejected_without_provider_call(service, provider, identity, tier):
    with pytest.raises(InvalidTier):
        service.create_session(identity, tier)
    assert provider.checkout_requests == []


def test_unknown_caller_has_no_client(service, provider):
    with pytest.raises(ClientNotFound):
        service.create_session(Identity(user_id="u-none"), "guardian")
    assert provider.checkout_requests == []


def test_session_binds_client_metadata(service, provider, identity):
    session = service.create_session(identity, "wingman")

    assert session.session_id == "cs_test_1"
    params = provider.checkout_requests[0]
    expected_metadata = {
        "client_id": "c1",
        "user_id": "u1",
        "tier": "wingman",
        "company_name": "Rolling Freight LLC",
    }
    assert params["mode"] == "subscription"
    assert params["metadata"] == expected_metadata
    assert params["subscription_data"]["metadata"] == expected_metadata
    assert params["subscription_data"]["trial_period_days"] == 30
    assert params["client_reference_id"] == "c1"
    assert params["customer_email"] == "dispatch@rollingfreight.example"


def test_line_item_is_priced_from_tier(service, provider, identity):
    service.create_session(identity, "apex_command")

    (item,) = provider.checkout_requests[0]["line_items"]
    assert item["quantity"] == 1
    price_data = item["price_data"]
    assert price_data["unit_amount"] == 45000
    assert price_data["currency"] == "usd"
    assert price_data["recurring"] == {"interval": "month"}
    assert price_data["product_data"]["name"] == "Apex Command"


def test_default_redirects_use_frontend_url(service, provider, identity):
    service.create_session(identity, "guardian")

    params = provider.checkout_requests[0]
    assert params["success_url"] == (
        "https://apex.example.com/portal/checkout/success?session_id={CHECKOUT_SESSION_ID}"
    )
    assert params["cancel_url"] == "https://apex.example.com/portal/checkout?tier=guardian"


def test_caller_redirects_take_precedence(service, provider, identity):
    service.create_session(
        identity,
        "guardian",
        success_url="https://portal.example.com/done",
        cancel_url="https://portal.example.com/back",
    )

    params = provider.checkout_requests[0]
    assert params["success_url"] == "https://portal.example.com/done"
    assert params["cancel_url"] == "https://portal.example.com/back"


def test_checkout_does_not_write_client_record(service, repository, identity):
    service.create_session(identity, "wingman")

    assert repository.transitions == []
    assert repository.clients["c1"].status is ClientStatus.INACTIVE
    assert repository.clients["c1"].provider_subscription_id is None
