from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class PriceRecord:
    price_id: str
    product_id: str
    product_name: str | None
    amount_minor_units: int | None
    currency: str
    billing_interval: str | None
