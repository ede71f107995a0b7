from __future__ import annotations

from fastapi.testclient import TestClient

from checkout.api.deps import get_list_plans_use_case, get_provision_catalog_use_case
from checkout.application.use_cases.list_plans import ListPlansUseCase
from checkout.application.use_cases.provision_catalog import ProvisionCatalogUseCase
from checkout.application.use_cases.resolve_price import PriceResolver
from checkout.domain.exceptions import ProviderError
from checkout.domain.services.plan_catalog import build_plan_catalog
from checkout.main import app

from conftest import FakeBillingPort, matching_price


def _provision_use_case(billing_port: FakeBillingPort) -> ProvisionCatalogUseCase:
    plan_catalog = build_plan_catalog()
    return ProvisionCatalogUseCase(
        plan_catalog=plan_catalog,
        price_resolver=PriceResolver(billing_port=billing_port, plan_catalog=plan_catalog),
    )


def test_list_plans_returns_catalog_and_publishable_key():
    app.dependency_overrides[get_list_plans_use_case] = lambda: ListPlansUseCase(
        plan_catalog=build_plan_catalog(),
        publishable_key="pk_test_123",
        currency="usd",
    )
    client = TestClient(app)

    response = client.get("/api/plans")

    assert response.status_code == 200
    payload = response.json()
    assert payload["publishable_key"] == "pk_test_123"
    assert payload["plans"][0] == {
        "plan_key": "price_basic",
        "name": "Early Access",
        "description": "First to know about new collections, exclusive previews, member-only events",
        "amount": 999,
        "currency": "usd",
        "interval": "month",
        "display_price": "$9.99/month",
    }
    app.dependency_overrides.clear()


def test_setup_products_reports_new_and_existing_prices():
    billing_port = FakeBillingPort(prices=[matching_price(price_id="price_live")])
    app.dependency_overrides[get_provision_catalog_use_case] = lambda: _provision_use_case(billing_port)
    client = TestClient(app)

    response = client.post("/api/setup-products")

    assert response.status_code == 200
    payload = response.json()
    assert payload["success"] is True
    assert [item["name"] for item in payload["new_products"]] == ["VIP Access", "Ultimate"]
    assert payload["all_products"]["Early Access"] == {
        "product_id": "prod_price_live",
        "price_id": "price_live",
        "amount": 9.99,
        "currency": "USD",
    }
    assert payload["instructions"]["price_ids"]["price_basic"] == "price_live"
    app.dependency_overrides.clear()


def test_setup_products_provider_failure_is_500():
    billing_port = FakeBillingPort(fail_on={"prices.list": ProviderError("Stripe is down")})
    app.dependency_overrides[get_provision_catalog_use_case] = lambda: _provision_use_case(billing_port)
    client = TestClient(app)

    response = client.post("/api/setup-products")

    assert response.status_code == 500
    assert response.json() == {"error": "Failed to setup Stripe products", "details": "Stripe is down"}
    app.dependency_overrides.clear()
