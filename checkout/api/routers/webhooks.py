from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, Header, Request
from fastapi.responses import JSONResponse

from checkout.api.deps import get_process_stripe_webhook_use_case
from checkout.api.schemas.webhooks import StripeWebhookResponse
from checkout.application.dto.billing import StripeWebhookInput
from checkout.application.use_cases.process_stripe_webhook import ProcessStripeWebhookUseCase
from checkout.domain.exceptions import WebhookPayloadError, WebhookVerificationError


router = APIRouter()
logger = logging.getLogger(__name__)


@router.post("/api/webhook", response_model=StripeWebhookResponse)
async def stripe_webhook(
    request: Request,
    stripe_signature: str | None = Header(default=None, alias="Stripe-Signature"),
    use_case: ProcessStripeWebhookUseCase = Depends(get_process_stripe_webhook_use_case),
):
    payload = await request.body()
    try:
        output = use_case.execute(
            StripeWebhookInput(
                signature=stripe_signature,
                payload=payload,
            )
        )
    except WebhookPayloadError as exc:
        logger.warning("stripe_webhook_router: invalid_body detail=%s", exc)
        return JSONResponse(status_code=400, content={"error": str(exc)})
    except WebhookVerificationError as exc:
        logger.warning("stripe_webhook_router: verification_failed detail=%s", exc)
        return JSONResponse(status_code=400, content={"error": f"Webhook Error: {exc}"})

    return StripeWebhookResponse(event_type=output.event_type, handled=output.handled)
