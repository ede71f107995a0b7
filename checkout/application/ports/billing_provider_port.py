from __future__ import annotations

from typing import Protocol

from checkout.application.dto.billing import StripeWebhookEvent
from checkout.domain.entities.customer import CustomerRecord
from checkout.domain.entities.price import PriceRecord
from checkout.domain.entities.subscription import PaymentIntentRecord, SubscriptionRecord


class BillingProviderPort(Protocol):
    async def find_customer_by_email(self, *, email: str) -> CustomerRecord | None:
        ...

    async def create_customer(self, *, email: str, payment_method_id: str) -> CustomerRecord:
        ...

    async def attach_payment_method(self, *, payment_method_id: str, customer_id: str) -> None:
        ...

    async def set_default_payment_method(self, *, customer_id: str, payment_method_id: str) -> None:
        ...

    async def list_prices(self, *, limit: int) -> list[PriceRecord]:
        ...

    async def create_product(self, *, name: str, description: str) -> str:
        ...

    async def create_price(
        self,
        *,
        product_id: str,
        amount_minor_units: int,
        currency: str,
        interval: str,
        nickname: str | None,
    ) -> PriceRecord:
        ...

    async def create_subscription(self, *, customer_id: str, price_id: str) -> SubscriptionRecord:
        ...

    async def confirm_payment_intent(self, *, payment_intent_id: str) -> PaymentIntentRecord:
        ...

    def verify_webhook(self, *, signature: str, payload: bytes) -> StripeWebhookEvent:
        ...

    def parse_webhook(self, *, payload: bytes) -> StripeWebhookEvent:
        ...
