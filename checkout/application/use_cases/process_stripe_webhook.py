from __future__ import annotations

import logging
from collections.abc import Callable

from checkout.application.dto.billing import (
    StripeWebhookEvent,
    StripeWebhookInput,
    StripeWebhookOutput,
)
from checkout.application.ports.billing_provider_port import BillingProviderPort
from checkout.domain.exceptions import WebhookVerificationError


logger = logging.getLogger(__name__)


def _on_subscription_created(event: StripeWebhookEvent) -> None:
    logger.info(
        "stripe_webhook: subscription_created subscription_id=%s customer_id=%s status=%s",
        event.object_id,
        event.customer_id,
        event.status,
    )


def _on_subscription_updated(event: StripeWebhookEvent) -> None:
    logger.info(
        "stripe_webhook: subscription_updated subscription_id=%s customer_id=%s status=%s",
        event.object_id,
        event.customer_id,
        event.status,
    )


def _on_subscription_deleted(event: StripeWebhookEvent) -> None:
    logger.info(
        "stripe_webhook: subscription_cancelled subscription_id=%s customer_id=%s",
        event.object_id,
        event.customer_id,
    )


def _on_payment_succeeded(event: StripeWebhookEvent) -> None:
    logger.info(
        "stripe_webhook: payment_succeeded invoice_id=%s customer_id=%s",
        event.object_id,
        event.customer_id,
    )


def _on_payment_failed(event: StripeWebhookEvent) -> None:
    logger.warning(
        "stripe_webhook: payment_failed invoice_id=%s customer_id=%s",
        event.object_id,
        event.customer_id,
    )


EVENT_HANDLERS: dict[str, Callable[[StripeWebhookEvent], None]] = {
    "customer.subscription.created": _on_subscription_created,
    "customer.subscription.updated": _on_subscription_updated,
    "customer.subscription.deleted": _on_subscription_deleted,
    "invoice.payment_succeeded": _on_payment_succeeded,
    "invoice.payment_failed": _on_payment_failed,
}


class ProcessStripeWebhookUseCase:
    def __init__(self, *, billing_port: BillingProviderPort, verify_signatures: bool):
        self._billing_port = billing_port
        self._verify_signatures = verify_signatures

    def execute(self, command: StripeWebhookInput) -> StripeWebhookOutput:
        event = self._read_event(command)
        handler = EVENT_HANDLERS.get(event.event_type)
        if handler is None:
            logger.info(
                "stripe_webhook: unhandled event_type=%s event_id=%s",
                event.event_type,
                event.event_id,
            )
            return StripeWebhookOutput(event_type=event.event_type, handled=False)

        handler(event)
        return StripeWebhookOutput(event_type=event.event_type, handled=True)

    def _read_event(self, command: StripeWebhookInput) -> StripeWebhookEvent:
        if not self._verify_signatures:
            logger.warning("stripe_webhook: signature_verification_disabled")
            return self._billing_port.parse_webhook(payload=command.payload)

        if not command.signature:
            raise WebhookVerificationError("Missing Stripe-Signature header.")
        return self._billing_port.verify_webhook(signature=command.signature, payload=command.payload)
