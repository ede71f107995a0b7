from __future__ import annotations

from checkout.application.dto.billing import ListPlansOutput
from checkout.domain.services.plan_catalog import PlanCatalog


class ListPlansUseCase:
    def __init__(self, *, plan_catalog: PlanCatalog, publishable_key: str, currency: str):
        self._plan_catalog = plan_catalog
        self._publishable_key = publishable_key
        self._currency = currency

    def execute(self) -> ListPlansOutput:
        return ListPlansOutput(
            publishable_key=self._publishable_key,
            currency=self._currency,
            plans=list(self._plan_catalog),
        )
