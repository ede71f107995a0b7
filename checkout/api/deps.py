from __future__ import annotations

from functools import lru_cache

from fastapi import HTTPException

from checkout.application.ports.billing_provider_port import BillingProviderPort
from checkout.application.use_cases.create_subscription import CreateSubscriptionUseCase
from checkout.application.use_cases.list_plans import ListPlansUseCase
from checkout.application.use_cases.process_stripe_webhook import ProcessStripeWebhookUseCase
from checkout.application.use_cases.provision_catalog import ProvisionCatalogUseCase
from checkout.application.use_cases.resolve_price import PriceResolver
from checkout.domain.exceptions import ConfigurationError
from checkout.domain.services.plan_catalog import PlanCatalog, build_plan_catalog
from checkout.infrastructure.clients.stripe_client import StripeBillingClient
from checkout.shared.config import get_settings


@lru_cache(maxsize=1)
def _get_plan_catalog() -> PlanCatalog:
    settings = get_settings()
    try:
        return build_plan_catalog(settings.plan_catalog)
    except ConfigurationError as exc:
        raise HTTPException(status_code=500, detail=str(exc)) from exc


@lru_cache(maxsize=1)
def _get_stripe_client() -> StripeBillingClient:
    settings = get_settings()
    if not settings.stripe_secret_key:
        raise HTTPException(status_code=500, detail="STRIPE_SECRET_KEY is required.")
    return StripeBillingClient(
        secret_key=settings.stripe_secret_key,
        webhook_secret=settings.stripe_webhook_secret,
        api_version=settings.stripe_api_version,
        max_network_retries=settings.stripe_max_network_retries,
    )


def _get_price_resolver(billing_port: BillingProviderPort) -> PriceResolver:
    settings = get_settings()
    return PriceResolver(
        billing_port=billing_port,
        plan_catalog=_get_plan_catalog(),
        currency=settings.billing_currency,
        price_list_limit=settings.price_list_limit,
    )


def get_create_subscription_use_case() -> CreateSubscriptionUseCase:
    billing_port = _get_stripe_client()
    return CreateSubscriptionUseCase(
        billing_port=billing_port,
        price_resolver=_get_price_resolver(billing_port),
    )


def get_provision_catalog_use_case() -> ProvisionCatalogUseCase:
    return ProvisionCatalogUseCase(
        plan_catalog=_get_plan_catalog(),
        price_resolver=_get_price_resolver(_get_stripe_client()),
    )


def get_list_plans_use_case() -> ListPlansUseCase:
    settings = get_settings()
    return ListPlansUseCase(
        plan_catalog=_get_plan_catalog(),
        publishable_key=settings.stripe_publishable_key,
        currency=settings.billing_currency,
    )


def get_process_stripe_webhook_use_case() -> ProcessStripeWebhookUseCase:
    settings = get_settings()
    return ProcessStripeWebhookUseCase(
        billing_port=_get_stripe_client(),
        verify_signatures=bool(settings.stripe_webhook_secret),
    )
