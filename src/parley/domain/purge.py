"""Permanent removal of archived text messages."""

from __future__ import annotations

from datetime import timedelta
from logging import getLogger
from typing import TYPE_CHECKING

from parley.domain.model import utcnow

if TYPE_CHECKING:
    from collections.abc import Callable
    from datetime import datetime

    from parley.domain.ports import MessengerUnitOfWork

log = getLogger(__name__)

DEFAULT_RETENTION_DAYS = 30


def purge_messages(
    unit_of_work_factory: Callable[[], MessengerUnitOfWork],
    *,
    days: int = DEFAULT_RETENTION_DAYS,
    now: datetime | None = None,
) -> int:
    """Delete text messages trashed at least ``days`` ago; return how many went."""

    if days < 0:
        raise ValueError("days must not be negative")
    cutoff = (now or utcnow()) - timedelta(days=days)
    with unit_of_work_factory() as uow:
        purged = uow.repositories.messages.purge_trashed_text(cutoff)
        uow.commit()
    log.info("Purged %d archived messages deleted on or before %s", purged, cutoff.isoformat())
    return purged
