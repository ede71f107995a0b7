from __future__ import annotations

from pydantic import BaseModel


class PlanResponse(BaseModel):
    plan_key: str
    name: str
    description: str
    amount: int
    currency: str
    interval: str
    display_price: str


class PlansResponse(BaseModel):
    publishable_key: str
    plans: list[PlanResponse]


class ProvisionedPlanResponse(BaseModel):
    name: str
    product_id: str
    price_id: str
    price: str


class CurrentPriceResponse(BaseModel):
    product_id: str
    price_id: str
    amount: float
    currency: str


class SetupInstructions(BaseModel):
    message: str
    price_ids: dict[str, str]


class SetupProductsResponse(BaseModel):
    success: bool
    message: str
    new_products: list[ProvisionedPlanResponse]
    all_products: dict[str, CurrentPriceResponse]
    instructions: SetupInstructions
