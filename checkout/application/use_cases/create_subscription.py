from __future__ import annotations

import logging

from checkout.application.dto.billing import CreateSubscriptionInput
from checkout.application.ports.billing_provider_port import BillingProviderPort
from checkout.application.use_cases.resolve_price import PriceResolver
from checkout.domain.entities.customer import CustomerRecord
from checkout.domain.entities.subscription import PaymentIntentRecord, SubscriptionResult
from checkout.domain.exceptions import ProviderError, ValidationError
from checkout.domain.services.payment_state import classify_payment_status, failure_reason


REQUIRED_FIELDS = ("payment_method_id", "plan_key", "email")
logger = logging.getLogger(__name__)


class CreateSubscriptionUseCase:
    def __init__(self, *, billing_port: BillingProviderPort, price_resolver: PriceResolver):
        self._billing_port = billing_port
        self._price_resolver = price_resolver

    async def execute(self, command: CreateSubscriptionInput) -> SubscriptionResult:
        missing = [name for name in REQUIRED_FIELDS if not (getattr(command, name) or "").strip()]
        if missing:
            raise ValidationError(missing)

        payment_method_id = command.payment_method_id.strip()
        plan_key = command.plan_key.strip()
        email = command.email.strip()
        logger.info("create_subscription: start plan=%s", plan_key)

        try:
            customer = await self._resolve_customer(email=email, payment_method_id=payment_method_id)
            logger.info("create_subscription: customer_resolved customer_id=%s", customer.customer_id)

            price_id = await self._price_resolver.resolve(plan_key)
            logger.info("create_subscription: price_resolved plan=%s price_id=%s", plan_key, price_id)

            subscription = await self._billing_port.create_subscription(
                customer_id=customer.customer_id,
                price_id=price_id,
            )
            logger.info(
                "create_subscription: subscription_created subscription_id=%s status=%s",
                subscription.subscription_id,
                subscription.status,
            )

            return await self._settle_payment(
                subscription_id=subscription.subscription_id,
                customer_id=customer.customer_id,
                payment_intent=subscription.payment_intent,
            )
        except ProviderError as exc:
            logger.warning(
                "create_subscription: provider_error plan=%s type=%s code=%s detail=%s",
                plan_key,
                exc.error_type,
                exc.code,
                exc,
            )
            raise

    async def _resolve_customer(self, *, email: str, payment_method_id: str) -> CustomerRecord:
        existing = await self._billing_port.find_customer_by_email(email=email)
        if existing is None:
            return await self._billing_port.create_customer(
                email=email,
                payment_method_id=payment_method_id,
            )

        await self._billing_port.attach_payment_method(
            payment_method_id=payment_method_id,
            customer_id=existing.customer_id,
        )
        await self._billing_port.set_default_payment_method(
            customer_id=existing.customer_id,
            payment_method_id=payment_method_id,
        )
        return existing

    async def _settle_payment(
        self,
        *,
        subscription_id: str,
        customer_id: str,
        payment_intent: PaymentIntentRecord | None,
    ) -> SubscriptionResult:
        status = payment_intent.status if payment_intent is not None else None
        action = classify_payment_status(status)

        if action == "confirm":
            logger.info(
                "create_subscription: confirming subscription_id=%s payment_intent_id=%s",
                subscription_id,
                payment_intent.payment_intent_id,
            )
            payment_intent = await self._billing_port.confirm_payment_intent(
                payment_intent_id=payment_intent.payment_intent_id,
            )
            status = payment_intent.status
            action = classify_payment_status(status, allow_confirm=False)

        if action == "requires_action":
            logger.info(
                "create_subscription: requires_action subscription_id=%s status=%s",
                subscription_id,
                status,
            )
            return SubscriptionResult(
                status="requires_action",
                subscription_id=subscription_id,
                client_secret=payment_intent.client_secret,
            )

        if action == "succeeded":
            logger.info(
                "create_subscription: succeeded subscription_id=%s customer_id=%s",
                subscription_id,
                customer_id,
            )
            return SubscriptionResult(
                status="succeeded",
                subscription_id=subscription_id,
                customer_id=customer_id,
            )

        logger.warning(
            "create_subscription: payment_failed subscription_id=%s status=%s",
            subscription_id,
            status,
        )
        return SubscriptionResult(
            status="failed",
            subscription_id=subscription_id,
            customer_id=customer_id,
            reason=failure_reason(status),
        )
