"""Error reporter that writes best-effort failures to the log."""

from __future__ import annotations

from logging import getLogger

log = getLogger(__name__)


class LoggingErrorReporter:
    def report(self, error: BaseException) -> None:
        log.error("%s: %s", type(error).__name__, error, exc_info=error)
