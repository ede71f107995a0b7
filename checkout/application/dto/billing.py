from __future__ import annotations

from dataclasses import dataclass

from checkout.domain.entities.plan import PlanDescriptor
from checkout.domain.entities.price import PriceRecord


@dataclass(frozen=True)
class CreateSubscriptionInput:
    payment_method_id: str | None
    plan_key: str | None
    email: str | None


@dataclass(frozen=True)
class PriceResolution:
    plan: PlanDescriptor
    price: PriceRecord
    created: bool


@dataclass(frozen=True)
class ProvisionedPlan:
    plan_key: str
    name: str
    product_id: str
    price_id: str
    amount_minor_units: int
    currency: str
    display_price: str
    created: bool


@dataclass(frozen=True)
class ProvisionCatalogOutput:
    plans: list[ProvisionedPlan]

    @property
    def new_plans(self) -> list[ProvisionedPlan]:
        return [plan for plan in self.plans if plan.created]


@dataclass(frozen=True)
class ListPlansOutput:
    publishable_key: str
    currency: str
    plans: list[PlanDescriptor]


@dataclass(frozen=True)
class StripeWebhookInput:
    signature: str | None
    payload: bytes


@dataclass(frozen=True)
class StripeWebhookEvent:
    event_id: str | None
    event_type: str
    object_id: str | None
    customer_id: str | None
    status: str | None


@dataclass(frozen=True)
class StripeWebhookOutput:
    event_type: str
    handled: bool
