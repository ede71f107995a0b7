from __future__ import annotations

import asyncio
import logging
import sys

from checkout.application.dto.billing import ProvisionCatalogOutput
from checkout.application.use_cases.provision_catalog import ProvisionCatalogUseCase
from checkout.application.use_cases.resolve_price import PriceResolver
from checkout.domain.exceptions import ConfigurationError, ProviderError
from checkout.domain.services.plan_catalog import build_plan_catalog
from checkout.infrastructure.clients.stripe_client import StripeBillingClient
from checkout.shared.config import Settings, get_settings


logger = logging.getLogger(__name__)


def build_provision_catalog_use_case(settings: Settings) -> ProvisionCatalogUseCase:
    if not settings.stripe_secret_key:
        raise ConfigurationError("STRIPE_SECRET_KEY is required.")
    plan_catalog = build_plan_catalog(settings.plan_catalog)
    billing_client = StripeBillingClient(
        secret_key=settings.stripe_secret_key,
        api_version=settings.stripe_api_version,
        max_network_retries=settings.stripe_max_network_retries,
    )
    return ProvisionCatalogUseCase(
        plan_catalog=plan_catalog,
        price_resolver=PriceResolver(
            billing_port=billing_client,
            plan_catalog=plan_catalog,
            currency=settings.billing_currency,
            price_list_limit=settings.price_list_limit,
        ),
    )


def format_report(output: ProvisionCatalogOutput) -> list[str]:
    lines = []
    for plan in output.plans:
        marker = "created" if plan.created else "existing"
        lines.append(
            f"{plan.plan_key}: {plan.name} {plan.display_price} price_id={plan.price_id} "
            f"product_id={plan.product_id} ({marker})"
        )
    return lines


def main() -> int:
    settings = get_settings()
    logging.basicConfig(level=settings.log_level)
    try:
        use_case = build_provision_catalog_use_case(settings)
        output = asyncio.run(use_case.execute())
    except (ConfigurationError, ProviderError) as exc:
        logger.error("provision_catalog: failed detail=%s", exc)
        return 1

    for line in format_report(output):
        print(line)
    return 0


if __name__ == "__main__":
    sys.exit(main())
