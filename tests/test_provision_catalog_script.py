from __future__ import annotations

from dataclasses import replace

import pytest

from checkout.application.dto.billing import ProvisionCatalogOutput, ProvisionedPlan
from checkout.domain.exceptions import ConfigurationError
from checkout.infrastructure.scripts import provision_catalog
from checkout.shared.config import get_settings


def test_build_use_case_requires_secret_key():
    settings = replace(get_settings(), stripe_secret_key="")

    with pytest.raises(ConfigurationError, match="STRIPE_SECRET_KEY"):
        provision_catalog.build_provision_catalog_use_case(settings)


def test_main_returns_error_code_without_secret_key(monkeypatch: pytest.MonkeyPatch):
    monkeypatch.setattr(
        provision_catalog,
        "get_settings",
        lambda: replace(get_settings(), stripe_secret_key=""),
    )

    assert provision_catalog.main() == 1


def test_format_report_marks_created_and_existing_plans():
    output = ProvisionCatalogOutput(
        plans=[
            ProvisionedPlan(
                plan_key="price_basic",
                name="Early Access",
                product_id="prod_1",
                price_id="price_1",
                amount_minor_units=999,
                currency="usd",
                display_price="$9.99/month",
                created=True,
            ),
            ProvisionedPlan(
                plan_key="price_premium",
                name="VIP Access",
                product_id="prod_2",
                price_id="price_2",
                amount_minor_units=1999,
                currency="usd",
                display_price="$19.99/month",
                created=False,
            ),
        ]
    )

    lines = provision_catalog.format_report(output)

    assert lines[0] == "price_basic: Early Access $9.99/month price_id=price_1 product_id=prod_1 (created)"
    assert lines[1].endswith("(existing)")
