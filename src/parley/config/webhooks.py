"""Webhook delivery configuration."""

from __future__ import annotations

import os
from dataclasses import dataclass

from .http_resilience import RateLimit, ResilienceConfig

WEBHOOK_TIMEOUT_SECONDS = 5.0


@dataclass(frozen=True, slots=True)
class WebhookConfig:
    """Target for domain event webhooks."""

    url: str
    resilience: ResilienceConfig
    signature_header: str = "X-Parley-Event"


def get_webhook_config(*, resilience: ResilienceConfig | None = None) -> WebhookConfig | None:
    """Return the webhook config, or ``None`` when no webhook URL is configured."""

    url = os.getenv("PARLEY_WEBHOOK_URL", "").strip()
    if not url:
        return None
    return WebhookConfig(
        url=url,
        resilience=resilience
        or ResilienceConfig(
            name="webhooks",
            timeout_seconds=WEBHOOK_TIMEOUT_SECONDS,
            ratelimit=RateLimit(max_calls=10, per_seconds=1.0),
            default_headers={"User-Agent": "parley-webhooks"},
        ),
    )
