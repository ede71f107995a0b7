from __future__ import annotations

import json
import logging
from collections.abc import Awaitable, Mapping
from typing import Any, TypeVar

import stripe

from checkout.application.dto.billing import StripeWebhookEvent
from checkout.application.ports.billing_provider_port import BillingProviderPort
from checkout.domain.entities.customer import CustomerRecord
from checkout.domain.entities.price import PriceRecord
from checkout.domain.entities.subscription import PaymentIntentRecord, SubscriptionRecord
from checkout.domain.exceptions import (
    ProviderError,
    WebhookPayloadError,
    WebhookVerificationError,
)


T = TypeVar("T")
logger = logging.getLogger(__name__)


class StripeBillingClient(BillingProviderPort):
    def __init__(
        self,
        *,
        secret_key: str,
        webhook_secret: str | None = None,
        api_version: str | None = None,
        max_network_retries: int = 0,
        client: stripe.StripeClient | None = None,
    ):
        self._webhook_secret = webhook_secret or None
        self._client = client or stripe.StripeClient(
            secret_key,
            stripe_version=api_version,
            max_network_retries=max_network_retries,
            http_client=stripe.HTTPXClient(),
        )

    async def find_customer_by_email(self, *, email: str) -> CustomerRecord | None:
        result = await self._call(
            "customers.list",
            self._client.v1.customers.list_async(params={"email": email, "limit": 1}),
        )
        customers = list(getattr(result, "data", None) or [])
        if not customers:
            return None
        return _to_customer_record(customers[0])

    async def create_customer(self, *, email: str, payment_method_id: str) -> CustomerRecord:
        customer = await self._call(
            "customers.create",
            self._client.v1.customers.create_async(
                params={
                    "email": email,
                    "payment_method": payment_method_id,
                    "invoice_settings": {"default_payment_method": payment_method_id},
                }
            ),
        )
        return _to_customer_record(customer)

    async def attach_payment_method(self, *, payment_method_id: str, customer_id: str) -> None:
        await self._call(
            "payment_methods.attach",
            self._client.v1.payment_methods.attach_async(
                payment_method_id,
                params={"customer": customer_id},
            ),
        )

    async def set_default_payment_method(self, *, customer_id: str, payment_method_id: str) -> None:
        await self._call(
            "customers.update",
            self._client.v1.customers.update_async(
                customer_id,
                params={"invoice_settings": {"default_payment_method": payment_method_id}},
            ),
        )

    async def list_prices(self, *, limit: int) -> list[PriceRecord]:
        result = await self._call(
            "prices.list",
            self._client.v1.prices.list_async(params={"limit": limit, "expand": ["data.product"]}),
        )
        return [_to_price_record(price) for price in getattr(result, "data", None) or []]

    async def create_product(self, *, name: str, description: str) -> str:
        product = await self._call(
            "products.create",
            self._client.v1.products.create_async(params={"name": name, "description": description}),
        )
        product_id = getattr(product, "id", None)
        if not product_id:
            raise ProviderError("Stripe product id is missing.")
        return str(product_id)

    async def create_price(
        self,
        *,
        product_id: str,
        amount_minor_units: int,
        currency: str,
        interval: str,
        nickname: str | None,
    ) -> PriceRecord:
        params: dict[str, Any] = {
            "product": product_id,
            "unit_amount": amount_minor_units,
            "currency": currency,
            "recurring": {"interval": interval},
        }
        if nickname:
            params["nickname"] = nickname
        price = await self._call("prices.create", self._client.v1.prices.create_async(params=params))
        return _to_price_record(price)

    async def create_subscription(self, *, customer_id: str, price_id: str) -> SubscriptionRecord:
        subscription = await self._call(
            "subscriptions.create",
            self._client.v1.subscriptions.create_async(
                params={
                    "customer": customer_id,
                    "items": [{"price": price_id}],
                    "expand": ["latest_invoice.payment_intent"],
                    "payment_behavior": "default_incomplete",
                    "payment_settings": {
                        "payment_method_options": {
                            "card": {"request_three_d_secure": "if_required"},
                        },
                        "payment_method_types": ["card"],
                        "save_default_payment_method": "on_subscription",
                    },
                }
            ),
        )
        return _to_subscription_record(subscription)

    async def confirm_payment_intent(self, *, payment_intent_id: str) -> PaymentIntentRecord:
        payment_intent = await self._call(
            "payment_intents.confirm",
            self._client.v1.payment_intents.confirm_async(payment_intent_id),
        )
        return _to_payment_intent_record(payment_intent)

    def verify_webhook(self, *, signature: str, payload: bytes) -> StripeWebhookEvent:
        if not self._webhook_secret:
            raise WebhookVerificationError("STRIPE_WEBHOOK_SECRET is not configured.")
        try:
            stripe.WebhookSignature.verify_header(
                payload.decode("utf-8"),
                signature,
                self._webhook_secret,
                stripe.Webhook.DEFAULT_TOLERANCE,
            )
        except stripe.SignatureVerificationError as exc:
            raise WebhookVerificationError(f"Invalid Stripe webhook signature: {exc}") from exc
        except UnicodeDecodeError as exc:
            raise WebhookPayloadError("Invalid webhook body") from exc
        return self.parse_webhook(payload=payload)

    def parse_webhook(self, *, payload: bytes) -> StripeWebhookEvent:
        try:
            data = json.loads(payload or b"")
        except ValueError as exc:
            raise WebhookPayloadError("Invalid webhook body") from exc
        if not isinstance(data, Mapping):
            raise WebhookPayloadError("Invalid webhook body")
        return _to_webhook_event(data)

    async def _call(self, operation: str, request: Awaitable[T]) -> T:
        try:
            return await request
        except stripe.StripeError as exc:
            error = ProviderError.from_exception(exc)
            logger.warning(
                "stripe_client: %s failed type=%s code=%s detail=%s",
                operation,
                error.error_type,
                error.code,
                error.message,
            )
            raise error from exc


def _to_customer_record(customer: Any) -> CustomerRecord:
    customer_id = getattr(customer, "id", None)
    if not customer_id:
        raise ProviderError("Stripe customer id is missing.")
    invoice_settings = getattr(customer, "invoice_settings", None)
    default_payment_method = getattr(invoice_settings, "default_payment_method", None)
    if default_payment_method is not None and not isinstance(default_payment_method, str):
        default_payment_method = getattr(default_payment_method, "id", None)
    return CustomerRecord(
        customer_id=str(customer_id),
        email=getattr(customer, "email", None),
        default_payment_method_id=default_payment_method,
    )


def _to_price_record(price: Any) -> PriceRecord:
    product = getattr(price, "product", None)
    if isinstance(product, str):
        product_id, product_name = product, None
    else:
        product_id = getattr(product, "id", None)
        product_name = getattr(product, "name", None)
    recurring = getattr(price, "recurring", None)
    return PriceRecord(
        price_id=str(getattr(price, "id", "")),
        product_id=str(product_id or ""),
        product_name=product_name,
        amount_minor_units=getattr(price, "unit_amount", None),
        currency=str(getattr(price, "currency", "") or ""),
        billing_interval=getattr(recurring, "interval", None) if recurring else None,
    )


def _to_payment_intent_record(payment_intent: Any) -> PaymentIntentRecord:
    return PaymentIntentRecord(
        payment_intent_id=str(getattr(payment_intent, "id", "")),
        status=str(getattr(payment_intent, "status", "")),
        client_secret=getattr(payment_intent, "client_secret", None),
    )


def _to_subscription_record(subscription: Any) -> SubscriptionRecord:
    subscription_id = getattr(subscription, "id", None)
    if not subscription_id:
        raise ProviderError("Stripe subscription id is missing.")

    payment_intent = None
    invoice = getattr(subscription, "latest_invoice", None)
    if invoice is not None and not isinstance(invoice, str):
        raw_intent = getattr(invoice, "payment_intent", None)
        if raw_intent is not None and not isinstance(raw_intent, str):
            payment_intent = _to_payment_intent_record(raw_intent)

    return SubscriptionRecord(
        subscription_id=str(subscription_id),
        status=str(getattr(subscription, "status", "")),
        payment_intent=payment_intent,
    )


def _to_webhook_event(event: Mapping[str, Any]) -> StripeWebhookEvent:
    event_type = event.get("type")
    if not event_type:
        raise WebhookPayloadError("Invalid webhook body")

    data = event.get("data") or {}
    if not isinstance(data, Mapping):
        raise WebhookPayloadError("Invalid webhook body")
    data_object = data.get("object") or {}
    if not isinstance(data_object, Mapping):
        raise WebhookPayloadError("Invalid webhook body")
    customer = data_object.get("customer")
    if isinstance(customer, Mapping):
        customer = customer.get("id")
    if customer is not None and not isinstance(customer, str):
        raise WebhookPayloadError("Invalid webhook body")
    return StripeWebhookEvent(
        event_id=event.get("id"),
        event_type=str(event_type),
        object_id=data_object.get("id"),
        customer_id=customer,
        status=data_object.get("status"),
    )
