from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


class CreateSubscriptionRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    payment_method_id: str | None = Field(default=None, alias="paymentMethodId")
    plan_key: str | None = Field(default=None, alias="priceId")
    email: str | None = None


class SubscriptionSucceededResponse(BaseModel):
    status: str = "succeeded"
    subscription_id: str
    customer_id: str


class SubscriptionRequiresActionResponse(BaseModel):
    status: str = "requires_action"
    client_secret: str | None
    subscription_id: str
