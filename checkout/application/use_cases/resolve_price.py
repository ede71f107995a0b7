from __future__ import annotations

import logging

from checkout.application.dto.billing import PriceResolution
from checkout.application.ports.billing_provider_port import BillingProviderPort
from checkout.domain.exceptions import ProviderError
from checkout.domain.services.plan_catalog import PlanCatalog
from checkout.domain.services.price_matching import find_matching_price


DEFAULT_PRICE_LIST_LIMIT = 100
MAX_PRICE_LIST_LIMIT = 100
DEFAULT_CURRENCY = "usd"
logger = logging.getLogger(__name__)


class PriceResolver:
    def __init__(
        self,
        *,
        billing_port: BillingProviderPort,
        plan_catalog: PlanCatalog,
        currency: str = DEFAULT_CURRENCY,
        price_list_limit: int = DEFAULT_PRICE_LIST_LIMIT,
    ):
        self._billing_port = billing_port
        self._plan_catalog = plan_catalog
        self._currency = currency
        # A API da Stripe aceita limit entre 1 e 100.
        self._price_list_limit = min(MAX_PRICE_LIST_LIMIT, max(1, price_list_limit))

    async def resolve(self, plan_key: str) -> str:
        resolution = await self.resolve_record(plan_key)
        return resolution.price.price_id

    async def resolve_record(self, plan_key: str) -> PriceResolution:
        plan = self._plan_catalog.get(plan_key)

        try:
            # Varre apenas a primeira pagina; precos alem do limite nao sao vistos.
            prices = await self._billing_port.list_prices(limit=self._price_list_limit)
            existing = find_matching_price(prices, plan, self._currency)
            if existing is not None:
                logger.info(
                    "price_resolver: reuse plan=%s price_id=%s product_id=%s",
                    plan.plan_key,
                    existing.price_id,
                    existing.product_id,
                )
                return PriceResolution(plan=plan, price=existing, created=False)

            product_id = await self._billing_port.create_product(
                name=plan.display_name,
                description=plan.description,
            )
            price = await self._billing_port.create_price(
                product_id=product_id,
                amount_minor_units=plan.amount_minor_units,
                currency=self._currency,
                interval=plan.billing_interval,
                nickname=plan.nickname,
            )
        except ProviderError as exc:
            logger.warning(
                "price_resolver: provider_error plan=%s type=%s code=%s detail=%s",
                plan.plan_key,
                exc.error_type,
                exc.code,
                exc,
            )
            raise

        logger.info(
            "price_resolver: created plan=%s price_id=%s product_id=%s scanned=%s",
            plan.plan_key,
            price.price_id,
            product_id,
            len(prices),
        )
        return PriceResolution(plan=plan, price=price, created=True)
