"""Broadcast driver without a realtime transport."""

from __future__ import annotations

import json
from logging import getLogger
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Mapping

log = getLogger(__name__)


class LoggingBroadcastDriver:
    """Logs broadcasts instead of delivering them; used by the CLI."""

    def send_to_present(self, channel: str, payload: Mapping[str, object], event: str) -> None:
        log.info("Broadcast %s on %s: %s", event, channel, json.dumps(payload, default=str))
