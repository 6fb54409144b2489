# ruff: noqa: T201

from __future__ import annotations

import argparse
import logging
import sys
from signal import SIGINT, signal
from typing import TYPE_CHECKING, cast
from uuid import UUID

from dotenv import load_dotenv

from parley.app import list_calls, list_private_threads, purge_archived_messages
from parley.config import configure_logging

if TYPE_CHECKING:
    from collections.abc import Sequence
    from types import FrameType

log = logging.getLogger(__name__)


class _ArgumentParser(argparse.ArgumentParser):
    def error(self, message: str) -> None:  # type: ignore[override]
        raise ValueError(message)


def _parse_args(argv: Sequence[str]) -> argparse.Namespace:
    parser = _ArgumentParser(description="Messenger maintenance and inspection commands")
    subparsers = parser.add_subparsers(dest="command", required=True)

    purge = subparsers.add_parser(
        "purge-messages", help="Permanently delete archived text messages"
    )
    purge.add_argument(
        "--days",
        type=int,
        default=None,
        help="Delete messages archived at least this many days ago (defaults to config)",
    )

    privates = subparsers.add_parser("privates", help="Print a page of private threads")
    privates.add_argument("--provider-id", type=str, required=True, help="Viewing provider id")
    privates.add_argument("--page-id", type=str, help="Cursor returned as next_page_id")

    calls = subparsers.add_parser("calls", help="Print a page of a thread's calls")
    calls.add_argument("--thread-id", type=str, required=True, help="Thread id")
    calls.add_argument("--page-id", type=str, help="Cursor returned as next_page_id")

    return parser.parse_args(list(argv))


def _parse_uuid(value: str) -> UUID:
    try:
        return UUID(value)
    except ValueError as exc:
        raise ValueError(f"Invalid UUID: {value}") from exc


def _optional_uuid(value: str | None) -> UUID | None:
    return _parse_uuid(value) if value else None


def main(argv: Sequence[str] | None = None) -> None:
    """Main application entry point."""
    configure_logging()
    args_list = list(argv) if argv is not None else list(sys.argv[1:])
    target_id: UUID | None = None
    page_id: UUID | None = None
    try:
        parsed_args = _parse_args(args_list)
        if parsed_args.command == "purge-messages":
            if parsed_args.days is not None and parsed_args.days < 0:
                raise ValueError("--days must be non-negative")  # noqa: TRY301
        elif parsed_args.command == "privates":
            target_id = _parse_uuid(parsed_args.provider_id)
            page_id = _optional_uuid(parsed_args.page_id)
        elif parsed_args.command == "calls":
            target_id = _parse_uuid(parsed_args.thread_id)
            page_id = _optional_uuid(parsed_args.page_id)
    except ValueError:
        log.exception("CLI validation error")
        sys.exit(2)

    try:
        if parsed_args.command == "purge-messages":
            purged = purge_archived_messages(days=parsed_args.days)
            print(f"We purged {purged} archived messages!")
        elif parsed_args.command == "privates":
            page = list_private_threads(cast("UUID", target_id), page_id=page_id)
            print(page.model_dump_json(indent=2))
        elif parsed_args.command == "calls":
            page = list_calls(cast("UUID", target_id), page_id=page_id)
            print(page.model_dump_json(indent=2))
        else:
            raise ValueError(f"Unsupported command: {parsed_args.command}")  # noqa: TRY301

    except Exception:
        log.exception("Fatal error")
        sys.exit(1)


def sigint_handler(_signal_received: int, _frame: FrameType | None) -> None:
    """Handle SIGINT (Ctrl+C) gracefully."""
    log.info("Closed by user (Ctrl+C)")
    sys.exit(0)


def run() -> None:
    load_dotenv()
    signal(SIGINT, sigint_handler)
    main()


if __name__ == "__main__":
    run()
