"""Deliver domain events to an HTTP webhook."""

from __future__ import annotations

import asyncio
from collections.abc import Callable
from dataclasses import dataclass, field
from logging import getLogger
from typing import TYPE_CHECKING, Protocol

import httpx

from parley.adapters.http_resilience import ResilientClient
from parley.domain.errors import DeliveryError

if TYPE_CHECKING:
    from parley.config.http_resilience import ResilienceConfig
    from parley.config.webhooks import WebhookConfig

log = getLogger(__name__)


class WebhookEvent(Protocol):
    name: str

    def to_payload(self) -> dict[str, object]: ...


def _default_client_factory(config: ResilienceConfig) -> ResilientClient:
    return ResilientClient(config)


@dataclass(slots=True)
class WebhookListener:
    """Event listener that posts ``event.to_payload()`` as JSON."""

    config: WebhookConfig
    client_factory: Callable[[ResilienceConfig], ResilientClient] = field(
        default=_default_client_factory
    )

    def __call__(self, event: WebhookEvent) -> None:
        asyncio.run(self._deliver(event))

    async def _deliver(self, event: WebhookEvent) -> None:
        headers = {self.config.signature_header: event.name}
        async with self.client_factory(self.config.resilience) as client:
            try:
                response = await client.post(
                    self.config.url, json=event.to_payload(), headers=headers
                )
                response.raise_for_status()
            except httpx.HTTPError as exc:
                raise DeliveryError(
                    f"Webhook delivery of {event.name} failed: {exc}", channel=self.config.url
                ) from exc
        log.debug("Delivered %s to %s", event.name, self.config.url)
