from __future__ import annotations

import logging

from checkout.application.dto.billing import ProvisionCatalogOutput, ProvisionedPlan
from checkout.application.use_cases.resolve_price import PriceResolver
from checkout.domain.services.plan_catalog import PlanCatalog


logger = logging.getLogger(__name__)


class ProvisionCatalogUseCase:
    def __init__(self, *, plan_catalog: PlanCatalog, price_resolver: PriceResolver):
        self._plan_catalog = plan_catalog
        self._price_resolver = price_resolver

    async def execute(self) -> ProvisionCatalogOutput:
        provisioned: list[ProvisionedPlan] = []
        for plan in self._plan_catalog:
            resolution = await self._price_resolver.resolve_record(plan.plan_key)
            provisioned.append(
                ProvisionedPlan(
                    plan_key=plan.plan_key,
                    name=plan.display_name,
                    product_id=resolution.price.product_id,
                    price_id=resolution.price.price_id,
                    amount_minor_units=plan.amount_minor_units,
                    currency=resolution.price.currency,
                    display_price=plan.display_price,
                    created=resolution.created,
                )
            )

        output = ProvisionCatalogOutput(plans=provisioned)
        logger.info(
            "provision_catalog: done plans=%s created=%s",
            len(output.plans),
            len(output.new_plans),
        )
        return output
