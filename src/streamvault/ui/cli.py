from __future__ import annotations

import argparse
import logging
import signal
import sys
import threading
from contextlib import contextmanager
from pathlib import Path
from typing import TYPE_CHECKING
from uuid import UUID

from dotenv import load_dotenv

from streamvault.app import (
    erase_history,
    history_status,
    import_history_uploads,
    uploads_from_paths,
)
from streamvault.config import ConfigurationError, configure_logging, get_import_config

if TYPE_CHECKING:
    from collections.abc import Iterator, Sequence
    from types import FrameType

    from streamvault.domain.model import FileOutcome

log = logging.getLogger(__name__)

DEFAULT_HOST = "127.0.0.1"
DEFAULT_PORT = 8000


def _parse_args(argv: Sequence[str]) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Import and inspect Spotify listening history")
    parser.add_argument(
        "--user-id",
        type=str,
        help="User id owning the records (defaults to STREAMVAULT_USER_ID)",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    import_cmd = subparsers.add_parser("import", help="Import history files or export archives")
    import_cmd.add_argument(
        "paths",
        nargs="+",
        type=Path,
        help="JSON data files or .zip archives, processed in the given order",
    )

    subparsers.add_parser("status", help="Show what has been imported so far")

    delete = subparsers.add_parser("delete", help="Delete all imported records (irreversible)")
    delete.add_argument(
        "--yes",
        action="store_true",
        help="Skip the interactive confirmation",
    )

    serve = subparsers.add_parser("serve", help="Run the HTTP API")
    serve.add_argument("--host", type=str, default=DEFAULT_HOST, help="Bind address")
    serve.add_argument("--port", type=int, default=DEFAULT_PORT, help="Bind port")

    return parser.parse_args(list(argv))


def _parse_uuid(value: str) -> UUID:
    try:
        return UUID(value)
    except ValueError as exc:
        raise ValueError(f"Invalid UUID: {value}") from exc


def _resolve_user_id(args: argparse.Namespace) -> UUID:
    if args.user_id is not None:
        return _parse_uuid(args.user_id)
    default = get_import_config().default_user_id
    if default is None:
        raise ValueError("Missing --user-id (or set STREAMVAULT_USER_ID)")
    return default


def _check_paths(paths: Sequence[Path]) -> None:
    missing = [str(path) for path in paths if not path.is_file()]
    if missing:
        raise ValueError(f"No such file(s): {', '.join(missing)}")


def _report_progress(outcome: FileOutcome) -> None:
    if outcome.result is not None:
        result = outcome.result
        log.info(
            "%s: imported=%s, skipped=%s, duplicates=%s (of %s)",
            outcome.file_name,
            result.imported,
            result.skipped,
            result.duplicates,
            result.total,
        )
    else:
        log.warning("%s: failed: %s", outcome.file_name, outcome.error)


@contextmanager
def _cancel_on_interrupt() -> Iterator[threading.Event]:
    """Turn the first Ctrl+C into a cancellation honoured between files."""
    cancel = threading.Event()

    def handler(_signal_received: int, _frame: FrameType | None) -> None:
        if cancel.is_set():
            raise KeyboardInterrupt
        log.info("Cancelling after the current file (Ctrl+C again to abort)")
        cancel.set()

    if threading.current_thread() is not threading.main_thread():
        yield cancel
        return
    previous = signal.signal(signal.SIGINT, handler)
    try:
        yield cancel
    finally:
        signal.signal(signal.SIGINT, previous)


def _run_import(user_id: UUID, paths: Sequence[Path]) -> int:
    with _cancel_on_interrupt() as cancel:
        aggregate = import_history_uploads(
            user_id=user_id,
            uploads=uploads_from_paths(paths),
            on_progress=_report_progress,
            cancel=cancel,
        )
    totals = aggregate.totals
    log.info(
        "Import finished: files=%s, failed=%s, total=%s, imported=%s, skipped=%s, duplicates=%s",
        len(aggregate.outcomes),
        len(aggregate.errors),
        totals.total,
        totals.imported,
        totals.skipped,
        totals.duplicates,
    )
    if aggregate.cancelled:
        log.info("Import was cancelled; remaining files were not processed")
    return 1 if aggregate.errors else 0


def _run_status(user_id: UUID) -> None:
    status = history_status(user_id=user_id)
    if not status.has_data:
        log.info("No listening history imported yet")
        return
    date_range = status.date_range
    log.info(
        "Imported history: distinct tracks=%s, from=%s, to=%s",
        status.total_tracks,
        date_range.earliest.isoformat() if date_range else None,
        date_range.latest.isoformat() if date_range else None,
    )


def _confirm_delete(user_id: UUID) -> bool:
    prompt = f"Delete ALL imported listening history for {user_id}? This cannot be undone. [y/N] "
    return input(prompt).strip().lower() in {"y", "yes"}


def _run_delete(user_id: UUID, *, assume_yes: bool) -> None:
    if not assume_yes and not _confirm_delete(user_id):
        log.info("Deletion aborted")
        return
    deleted = erase_history(user_id=user_id)
    log.info("Deleted %s play records", deleted)


def _run_serve(host: str, port: int) -> None:
    import uvicorn  # noqa: PLC0415

    uvicorn.run("streamvault.api.main:app", host=host, port=port, reload=False)


def main(argv: Sequence[str] | None = None) -> None:
    """Main application entry point."""
    configure_logging()
    parsed_args: argparse.Namespace
    args_list = list(argv) if argv is not None else list(sys.argv[1:])
    user_id: UUID | None = None
    try:
        parsed_args = _parse_args(args_list)
        if parsed_args.command != "serve":
            user_id = _resolve_user_id(parsed_args)
        if parsed_args.command == "import":
            _check_paths(parsed_args.paths)
    except (ValueError, ConfigurationError):
        log.exception("CLI validation error")
        sys.exit(2)

    exit_code = 0
    try:
        if parsed_args.command == "serve":
            _run_serve(parsed_args.host, parsed_args.port)
        elif user_id is None:
            raise ValueError("Missing user id")  # noqa: TRY301
        elif parsed_args.command == "import":
            exit_code = _run_import(user_id, parsed_args.paths)
        elif parsed_args.command == "status":
            _run_status(user_id)
        elif parsed_args.command == "delete":
            _run_delete(user_id, assume_yes=parsed_args.yes)
        else:
            raise ValueError(f"Unsupported command: {parsed_args.command}")  # noqa: TRY301
    except Exception:
        log.exception("Fatal error")
        sys.exit(1)

    if exit_code:
        sys.exit(exit_code)


def entrypoint() -> None:
    """Console script entry point: load ``.env`` before running ``main``."""
    load_dotenv()
    main()


if __name__ == "__main__":
    entrypoint()
