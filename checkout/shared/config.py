from __future__ import annotations

import json
import os
from dataclasses import dataclass

from dotenv import load_dotenv


load_dotenv()


def _env(name: str, default: str | None = None) -> str | None:
    return os.getenv(name, default)


def _json_list(name: str) -> list:
    value = _env(name)
    if not value:
        return []
    parsed = json.loads(value)
    if not isinstance(parsed, list):
        raise ValueError(f"{name} must be a JSON list.")
    return parsed


def _csv(name: str, default: str) -> list[str]:
    value = _env(name, default) or ""
    return [item.strip() for item in value.split(",") if item.strip()]


@dataclass(frozen=True)
class Settings:
    stripe_secret_key: str
    stripe_publishable_key: str
    stripe_webhook_secret: str
    stripe_api_version: str
    stripe_max_network_retries: int
    price_list_limit: int
    billing_currency: str
    plan_catalog: list
    cors_allow_origins: list[str]
    log_level: str


def get_settings() -> Settings:
    return Settings(
        stripe_secret_key=_env("STRIPE_SECRET_KEY", ""),
        stripe_publishable_key=_env("STRIPE_PUBLISHABLE_KEY", ""),
        stripe_webhook_secret=_env("STRIPE_WEBHOOK_SECRET", ""),
        stripe_api_version=_env("STRIPE_API_VERSION", "2024-06-20"),
        stripe_max_network_retries=int(_env("STRIPE_MAX_NETWORK_RETRIES", "0")),
        price_list_limit=int(_env("PRICE_LIST_LIMIT", "100")),
        billing_currency=_env("BILLING_CURRENCY", "usd").lower(),
        plan_catalog=_json_list("PLAN_CATALOG"),
        cors_allow_origins=_csv("CORS_ALLOW_ORIGINS", "*"),
        log_level=_env("LOG_LEVEL", "INFO").upper(),
    )
