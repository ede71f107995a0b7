from __future__ import annotations

from dataclasses import dataclass
from typing import Literal


SubscriptionOutcome = Literal["succeeded", "requires_action", "failed"]


@dataclass(frozen=True)
class PaymentIntentRecord:
    payment_intent_id: str
    status: str
    client_secret: str | None


@dataclass(frozen=True)
class SubscriptionRecord:
    subscription_id: str
    status: str
    payment_intent: PaymentIntentRecord | None


@dataclass(frozen=True)
class SubscriptionResult:
    status: SubscriptionOutcome
    subscription_id: str
    client_secret: str | None = None
    customer_id: str | None = None
    reason: str | None = None
