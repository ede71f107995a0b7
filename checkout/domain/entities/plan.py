from __future__ import annotations

from dataclasses import dataclass
from typing import Literal


BillingInterval = Literal["month"]


@dataclass(frozen=True)
class PlanDescriptor:
    plan_key: str
    display_name: str
    description: str
    amount_minor_units: int
    billing_interval: BillingInterval = "month"
    nickname: str | None = None

    @property
    def display_price(self) -> str:
        return f"${self.amount_minor_units / 100:.2f}/{self.billing_interval}"
