from __future__ import annotations

import pytest

from checkout.application.use_cases.provision_catalog import ProvisionCatalogUseCase
from checkout.application.use_cases.resolve_price import PriceResolver


def _use_case(billing_port, plan_catalog) -> ProvisionCatalogUseCase:
    return ProvisionCatalogUseCase(
        plan_catalog=plan_catalog,
        price_resolver=PriceResolver(billing_port=billing_port, plan_catalog=plan_catalog),
    )


@pytest.mark.asyncio
async def test_first_run_creates_every_plan(billing_port, plan_catalog):
    output = await _use_case(billing_port, plan_catalog).execute()

    assert [plan.plan_key for plan in output.new_plans] == [
        "price_basic",
        "price_premium",
        "price_ultimate",
    ]
    assert [plan.display_price for plan in output.plans] == [
        "$9.99/month",
        "$19.99/month",
        "$39.99/month",
    ]
    assert billing_port.count("products.create") == 3


@pytest.mark.asyncio
async def test_second_run_reuses_existing_prices(billing_port, plan_catalog):
    use_case = _use_case(billing_port, plan_catalog)
    first = await use_case.execute()

    second = await use_case.execute()

    assert second.new_plans == []
    assert [plan.price_id for plan in second.plans] == [plan.price_id for plan in first.plans]
    assert billing_port.count("prices.create") == 3
