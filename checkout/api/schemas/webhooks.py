from __future__ import annotations

from pydantic import BaseModel


class StripeWebhookResponse(BaseModel):
    received: bool = True
    event_type: str
    handled: bool
