from __future__ import annotations

import logging

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse

from checkout.api.deps import get_list_plans_use_case, get_provision_catalog_use_case
from checkout.api.schemas.catalog import (
    CurrentPriceResponse,
    PlanResponse,
    PlansResponse,
    ProvisionedPlanResponse,
    SetupInstructions,
    SetupProductsResponse,
)
from checkout.application.use_cases.list_plans import ListPlansUseCase
from checkout.application.use_cases.provision_catalog import ProvisionCatalogUseCase
from checkout.domain.exceptions import ConfigurationError, ProviderError


router = APIRouter()
logger = logging.getLogger(__name__)


@router.get("/api/plans", response_model=PlansResponse)
def list_plans(
    use_case: ListPlansUseCase = Depends(get_list_plans_use_case),
):
    output = use_case.execute()
    return PlansResponse(
        publishable_key=output.publishable_key,
        plans=[
            PlanResponse(
                plan_key=plan.plan_key,
                name=plan.display_name,
                description=plan.description,
                amount=plan.amount_minor_units,
                currency=output.currency,
                interval=plan.billing_interval,
                display_price=plan.display_price,
            )
            for plan in output.plans
        ],
    )


@router.post("/api/setup-products", response_model=SetupProductsResponse)
async def setup_products(
    use_case: ProvisionCatalogUseCase = Depends(get_provision_catalog_use_case),
):
    try:
        output = await use_case.execute()
    except (ConfigurationError, ProviderError) as exc:
        logger.warning("setup_products_router: failed detail=%s", exc)
        return JSONResponse(
            status_code=500,
            content={"error": "Failed to setup Stripe products", "details": str(exc)},
        )

    return SetupProductsResponse(
        success=True,
        message="Stripe products setup completed",
        new_products=[
            ProvisionedPlanResponse(
                name=plan.name,
                product_id=plan.product_id,
                price_id=plan.price_id,
                price=plan.display_price,
            )
            for plan in output.new_plans
        ],
        all_products={
            plan.name: CurrentPriceResponse(
                product_id=plan.product_id,
                price_id=plan.price_id,
                amount=plan.amount_minor_units / 100,
                currency=plan.currency.upper(),
            )
            for plan in output.plans
        },
        instructions=SetupInstructions(
            message="Update your frontend code with these Price IDs:",
            price_ids={plan.plan_key: plan.price_id for plan in output.plans},
        ),
    )
