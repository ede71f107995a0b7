from __future__ import annotations

import json

import pytest

from checkout.application.dto.billing import StripeWebhookEvent
from checkout.domain.entities.customer import CustomerRecord
from checkout.domain.entities.price import PriceRecord
from checkout.domain.entities.subscription import PaymentIntentRecord, SubscriptionRecord
from checkout.domain.exceptions import ProviderError, WebhookPayloadError, WebhookVerificationError
from checkout.domain.services.plan_catalog import build_plan_catalog


class FakeBillingPort:
    def __init__(
        self,
        *,
        customers: list[CustomerRecord] | None = None,
        prices: list[PriceRecord] | None = None,
        payment_intent_status: str | None = "succeeded",
        confirmed_status: str = "succeeded",
        client_secret: str = "pi_1_secret_abc",
        fail_on: dict[str, ProviderError] | None = None,
    ):
        self.customers = list(customers or [])
        self.prices = list(prices or [])
        self.products: dict[str, str] = {}
        self.payment_intent_status = payment_intent_status
        self.confirmed_status = confirmed_status
        self.client_secret = client_secret
        self.fail_on = dict(fail_on or {})
        self.calls: list[str] = []
        self.last_price_params: dict | None = None

    def count(self, operation: str) -> int:
        return self.calls.count(operation)

    def _record(self, operation: str) -> None:
        self.calls.append(operation)
        if operation in self.fail_on:
            raise self.fail_on[operation]

    async def find_customer_by_email(self, *, email: str) -> CustomerRecord | None:
        self._record("customers.list")
        for customer in self.customers:
            if customer.email == email:
                return customer
        return None

    async def create_customer(self, *, email: str, payment_method_id: str) -> CustomerRecord:
        self._record("customers.create")
        customer = CustomerRecord(
            customer_id=f"cus_{len(self.customers) + 1}",
            email=email,
            default_payment_method_id=payment_method_id,
        )
        self.customers.append(customer)
        return customer

    async def attach_payment_method(self, *, payment_method_id: str, customer_id: str) -> None:
        _ = (payment_method_id, customer_id)
        self._record("payment_methods.attach")

    async def set_default_payment_method(self, *, customer_id: str, payment_method_id: str) -> None:
        _ = (customer_id, payment_method_id)
        self._record("customers.update")

    async def list_prices(self, *, limit: int) -> list[PriceRecord]:
        self._record("prices.list")
        return list(self.prices[:limit])

    async def create_product(self, *, name: str, description: str) -> str:
        _ = description
        self._record("products.create")
        product_id = f"prod_{len(self.products) + 1}"
        self.products[product_id] = name
        return product_id

    async def create_price(
        self,
        *,
        product_id: str,
        amount_minor_units: int,
        currency: str,
        interval: str,
        nickname: str | None,
    ) -> PriceRecord:
        self._record("prices.create")
        self.last_price_params = {
            "product_id": product_id,
            "amount_minor_units": amount_minor_units,
            "currency": currency,
            "interval": interval,
            "nickname": nickname,
        }
        price = PriceRecord(
            price_id=f"price_{len(self.prices) + 1}",
            product_id=product_id,
            product_name=self.products.get(product_id),
            amount_minor_units=amount_minor_units,
            currency=currency,
            billing_interval=interval,
        )
        self.prices.append(price)
        return price

    async def create_subscription(self, *, customer_id: str, price_id: str) -> SubscriptionRecord:
        _ = (customer_id, price_id)
        self._record("subscriptions.create")
        payment_intent = None
        if self.payment_intent_status is not None:
            payment_intent = PaymentIntentRecord(
                payment_intent_id="pi_1",
                status=self.payment_intent_status,
                client_secret=self.client_secret,
            )
        return SubscriptionRecord(subscription_id="sub_1", status="incomplete", payment_intent=payment_intent)

    async def confirm_payment_intent(self, *, payment_intent_id: str) -> PaymentIntentRecord:
        self._record("payment_intents.confirm")
        return PaymentIntentRecord(
            payment_intent_id=payment_intent_id,
            status=self.confirmed_status,
            client_secret=self.client_secret,
        )

    def verify_webhook(self, *, signature: str, payload: bytes) -> StripeWebhookEvent:
        self.calls.append("webhooks.verify")
        if signature != "valid-signature":
            raise WebhookVerificationError("Invalid Stripe webhook signature.")
        return self.parse_webhook(payload=payload)

    def parse_webhook(self, *, payload: bytes) -> StripeWebhookEvent:
        self.calls.append("webhooks.parse")
        data = json.loads(payload)
        if not data.get("type"):
            raise WebhookPayloadError("Invalid webhook body")
        data_object = data.get("data", {}).get("object", {})
        return StripeWebhookEvent(
            event_id=data.get("id"),
            event_type=data["type"],
            object_id=data_object.get("id"),
            customer_id=data_object.get("customer"),
            status=data_object.get("status"),
        )


def matching_price(
    *,
    price_id: str = "price_existing",
    product_name: str = "Early Access",
    amount: int = 999,
    interval: str | None = "month",
) -> PriceRecord:
    return PriceRecord(
        price_id=price_id,
        product_id=f"prod_{price_id}",
        product_name=product_name,
        amount_minor_units=amount,
        currency="usd",
        billing_interval=interval,
    )


@pytest.fixture
def plan_catalog():
    return build_plan_catalog()


@pytest.fixture
def billing_port():
    return FakeBillingPort()
