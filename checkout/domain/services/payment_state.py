from __future__ import annotations

from typing import Literal


PaymentAction = Literal["confirm", "requires_action", "succeeded", "failed"]

REQUIRES_CONFIRMATION = "requires_confirmation"
REQUIRES_ACTION_STATUSES = frozenset({"requires_action", "requires_source_action"})
SUCCEEDED = "succeeded"


def classify_payment_status(status: str | None, *, allow_confirm: bool = True) -> PaymentAction:
    """Mapeia o status do payment intent para o proximo passo da assinatura.

    ``requires_confirmation`` so pode ser confirmado uma vez; depois da
    confirmacao no servidor o mesmo status e terminal.
    """
    if status == REQUIRES_CONFIRMATION and allow_confirm:
        return "confirm"
    if status in REQUIRES_ACTION_STATUSES:
        return "requires_action"
    if status == SUCCEEDED:
        return "succeeded"
    return "failed"


def failure_reason(status: str | None) -> str:
    return f"Payment status: {status or 'missing'}"
