from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class CustomerRecord:
    customer_id: str
    email: str | None
    default_payment_method_id: str | None
