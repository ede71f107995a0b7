from __future__ import annotations

from collections.abc import Iterable, Iterator, Mapping
from typing import Any

from checkout.domain.entities.plan import PlanDescriptor
from checkout.domain.exceptions import ConfigurationError


DEFAULT_PLANS: tuple[PlanDescriptor, ...] = (
    PlanDescriptor(
        plan_key="price_basic",
        display_name="Early Access",
        description="First to know about new collections, exclusive previews, member-only events",
        amount_minor_units=999,
        nickname="early-access-monthly",
    ),
    PlanDescriptor(
        plan_key="price_premium",
        display_name="VIP Access",
        description=(
            "Everything in Early Access + Personal styling sessions, free shipping & returns, "
            "limited edition items"
        ),
        amount_minor_units=1999,
        nickname="vip-access-monthly",
    ),
    PlanDescriptor(
        plan_key="price_ultimate",
        display_name="Ultimate",
        description=(
            "Everything in VIP Access + Quarterly style box, priority customer service, "
            "invitation-only fashion shows"
        ),
        amount_minor_units=3999,
        nickname="ultimate-monthly",
    ),
)


class PlanCatalog:
    def __init__(self, plans: Iterable[PlanDescriptor]):
        self._plans: dict[str, PlanDescriptor] = {}
        for plan in plans:
            if plan.plan_key in self._plans:
                raise ConfigurationError(f"Duplicate plan identifier: {plan.plan_key}")
            if plan.billing_interval != "month":
                raise ConfigurationError(
                    f"Unsupported billing interval for {plan.plan_key}: {plan.billing_interval}"
                )
            if plan.amount_minor_units <= 0:
                raise ConfigurationError(f"Plan amount must be positive: {plan.plan_key}")
            self._plans[plan.plan_key] = plan

    def get(self, plan_key: str) -> PlanDescriptor:
        plan = self._plans.get(plan_key)
        if plan is None:
            raise ConfigurationError(f"Invalid plan identifier: {plan_key}")
        return plan

    def __contains__(self, plan_key: object) -> bool:
        return plan_key in self._plans

    def __iter__(self) -> Iterator[PlanDescriptor]:
        return iter(self._plans.values())

    def __len__(self) -> int:
        return len(self._plans)


def plans_from_config(raw_plans: Iterable[Mapping[str, Any]]) -> list[PlanDescriptor]:
    plans = []
    for raw in raw_plans:
        try:
            plan_key = str(raw["plan_key"])
            display_name = str(raw["name"])
            amount = int(raw["amount"])
        except (KeyError, TypeError, ValueError) as exc:
            raise ConfigurationError(f"Invalid plan entry in PLAN_CATALOG: {raw!r}") from exc
        plans.append(
            PlanDescriptor(
                plan_key=plan_key,
                display_name=display_name,
                description=str(raw.get("description") or f"{display_name} subscription plan"),
                amount_minor_units=amount,
                billing_interval=raw.get("interval", "month"),
                nickname=raw.get("nickname"),
            )
        )
    return plans


def build_plan_catalog(raw_plans: Iterable[Mapping[str, Any]] | None = None) -> PlanCatalog:
    if not raw_plans:
        return PlanCatalog(DEFAULT_PLANS)
    return PlanCatalog(plans_from_config(raw_plans))
