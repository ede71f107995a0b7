from __future__ import annotations

import logging

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse

from checkout.api.deps import get_create_subscription_use_case
from checkout.api.schemas.subscriptions import (
    CreateSubscriptionRequest,
    SubscriptionRequiresActionResponse,
    SubscriptionSucceededResponse,
)
from checkout.application.dto.billing import CreateSubscriptionInput
from checkout.application.use_cases.create_subscription import CreateSubscriptionUseCase
from checkout.domain.exceptions import ConfigurationError, ProviderError, ValidationError


PAYMENT_FAILED_MESSAGE = "Payment failed. Please try again."
FIELD_LABELS = {
    "payment_method_id": "paymentMethodId",
    "plan_key": "priceId",
    "email": "email",
}

router = APIRouter()
logger = logging.getLogger(__name__)


@router.post("/api/create-subscription", response_model=None)
async def create_subscription(
    req: CreateSubscriptionRequest,
    use_case: CreateSubscriptionUseCase = Depends(get_create_subscription_use_case),
):
    try:
        result = await use_case.execute(
            CreateSubscriptionInput(
                payment_method_id=req.payment_method_id,
                plan_key=req.plan_key,
                email=req.email,
            )
        )
    except ValidationError as exc:
        missing = [FIELD_LABELS.get(name, name) for name in exc.missing_fields]
        logger.info("create_subscription_router: missing_fields fields=%s", missing)
        return JSONResponse(
            status_code=400,
            content={
                "error": f"Missing required fields: {', '.join(missing)}",
                "missing_fields": missing,
                "received": {
                    label: label not in missing for label in FIELD_LABELS.values()
                },
            },
        )
    except ConfigurationError as exc:
        return JSONResponse(status_code=400, content={"error": str(exc)})
    except ProviderError as exc:
        return JSONResponse(
            status_code=500,
            content={"error": exc.message, "details": exc.to_details()},
        )
    except Exception as exc:  # noqa: BLE001
        logger.exception("create_subscription_router: unexpected_error detail=%s", exc)
        error = ProviderError.from_exception(exc)
        return JSONResponse(
            status_code=500,
            content={"error": error.message, "details": error.to_details()},
        )

    if result.status == "succeeded":
        return SubscriptionSucceededResponse(
            subscription_id=result.subscription_id,
            customer_id=result.customer_id,
        )
    if result.status == "requires_action":
        return SubscriptionRequiresActionResponse(
            client_secret=result.client_secret,
            subscription_id=result.subscription_id,
        )
    return JSONResponse(
        status_code=400,
        content={
            "status": "failed",
            "error": PAYMENT_FAILED_MESSAGE,
            "details": result.reason,
            "subscription_id": result.subscription_id,
        },
    )
