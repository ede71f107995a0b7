from __future__ import annotations


class DomainError(Exception):
    """Base para erros de dominio."""


class ValidationError(DomainError):
    """Campos obrigatorios ausentes na requisicao."""

    def __init__(self, missing_fields: list[str]):
        self.missing_fields = list(missing_fields)
        super().__init__(f"Missing required fields: {', '.join(self.missing_fields)}")


class ConfigurationError(DomainError):
    """Plano desconhecido ou catalogo invalido."""


class ProviderError(DomainError):
    """Falha retornada pelo provedor de pagamento."""

    DEFAULT_MESSAGE = "An error occurred while creating the subscription."
    DEFAULT_TYPE = "unknown_error"
    DEFAULT_CODE = "unknown_code"

    def __init__(
        self,
        message: str | None = None,
        *,
        error_type: str | None = None,
        code: str | None = None,
    ):
        self.message = message or self.DEFAULT_MESSAGE
        self.error_type = error_type or self.DEFAULT_TYPE
        self.code = code or self.DEFAULT_CODE
        super().__init__(self.message)

    @classmethod
    def from_exception(cls, exc: BaseException) -> ProviderError:
        if isinstance(exc, ProviderError):
            return exc
        error_body = (getattr(exc, "json_body", None) or {}).get("error") or {}
        message = getattr(exc, "user_message", None) or error_body.get("message") or str(exc)
        return cls(
            message,
            error_type=error_body.get("type"),
            code=getattr(exc, "code", None) or error_body.get("code"),
        )

    def to_details(self) -> dict[str, str]:
        return {"message": self.message, "type": self.error_type, "code": self.code}


class WebhookVerificationError(DomainError):
    """Assinatura do webhook ausente ou invalida."""


class WebhookPayloadError(DomainError):
    """Corpo do webhook invalido."""
