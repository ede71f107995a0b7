from __future__ import annotations

from collections.abc import Iterable

from checkout.domain.entities.plan import PlanDescriptor
from checkout.domain.entities.price import PriceRecord


def price_matches_plan(price: PriceRecord, plan: PlanDescriptor, currency: str) -> bool:
    return (
        price.product_name == plan.display_name
        and price.amount_minor_units == plan.amount_minor_units
        and price.billing_interval == plan.billing_interval
        and price.currency.lower() == currency.lower()
    )


def find_matching_price(
    prices: Iterable[PriceRecord],
    plan: PlanDescriptor,
    currency: str,
) -> PriceRecord | None:
    # Primeira ocorrencia vence, na ordem retornada pelo provedor.
    for price in prices:
        if price_matches_plan(price, plan, currency):
            return price
    return None
