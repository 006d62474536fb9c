"""Minimal CLI for cuber using argparse."""

from __future__ import annotations

import argparse
import asyncio
import logging
import sys
import time
from datetime import datetime, timezone
from typing import Optional, Sequence, TextIO

from cuber.commands import (
    Command,
    CreateSolve,
    DeleteSolve,
    LatestSolvesChanged,
    RequestLatest,
)
from cuber.config import settings
from cuber.controller import SyncController
from cuber.exceptions import InvalidCommandError, StorageFailure
from cuber.logging_config import setup_logging
from cuber.messages import encode_notification, parse_command
from cuber.store.base import Store
from cuber.store.sqlite import SqliteStore
from cuber.types import SolveDraft

logger = logging.getLogger(__name__)


def _open_store(db: Optional[str] = None) -> SqliteStore:
    return SqliteStore(db or settings.db_path)


def _format_start(start: float) -> str:
    try:
        moment = datetime.fromtimestamp(start / 1000, tz=timezone.utc)
    except (ValueError, OverflowError, OSError):
        # Outside the platform's datetime range; show the raw epoch ms.
        return str(start)
    return moment.strftime("%Y-%m-%d %H:%M:%S")


def _print_solves(notification: LatestSolvesChanged, as_json: bool) -> None:
    if as_json:
        print(encode_notification(notification, indent=2))
        return
    if not notification.records:
        print("No solves.")
        return
    print(f"{'ID':<8} {'Started (UTC)':<20} {'Time':>10}")
    print("-" * 40)
    for s in notification.records:
        print(f"{s.id:<8} {_format_start(s.start):<20} {s.solve_time:>10}")


def _run_once(args: argparse.Namespace, command: Command) -> None:
    with _open_store(args.db) as store:
        controller = SyncController(store, notify=lambda _: None, limit=args.limit)
        notification = asyncio.run(controller.handle(command))
    _print_solves(notification, args.json)


def cmd_latest(args: argparse.Namespace) -> None:
    _run_once(args, RequestLatest())


def cmd_add(args: argparse.Namespace) -> None:
    start = args.start if args.start is not None else int(time.time() * 1000)
    _run_once(args, CreateSolve(draft=SolveDraft(start=start, solve_time=args.time)))


def cmd_delete(args: argparse.Namespace) -> None:
    _run_once(args, DeleteSolve(solve_id=args.id))


async def serve_lines(
    store: Store,
    instream: TextIO,
    outstream: TextIO,
    limit: int = settings.latest_limit,
) -> None:
    """Bridge JSON-lines port messages on ``instream`` to the controller.

    Each notification is written to ``outstream`` as one ``setLatestSolves``
    line. Undecodable lines are logged and skipped.
    """

    def emit(notification: LatestSolvesChanged) -> None:
        outstream.write(encode_notification(notification) + "\n")
        outstream.flush()

    controller = SyncController(store, notify=emit, limit=limit)
    queue: asyncio.Queue = asyncio.Queue()
    worker = asyncio.create_task(controller.run(queue))

    while True:
        line = await asyncio.to_thread(instream.readline)
        if not line:
            break
        line = line.strip()
        if not line:
            continue
        try:
            command = parse_command(line)
        except InvalidCommandError as e:
            logger.warning("Skipping invalid message: %s", e)
            continue
        await queue.put(command)

    await queue.put(None)
    await worker


def cmd_serve(args: argparse.Namespace) -> None:
    with _open_store(args.db) as store:
        asyncio.run(serve_lines(store, sys.stdin, sys.stdout, limit=args.limit))


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="cuber",
        description="cuber: local solve record store",
    )
    parser.add_argument("--db", default=None, help="Path to SQLite database (or CUBER_DB_PATH)")
    parser.add_argument(
        "--limit", type=int, default=settings.latest_limit,
        help="Number of latest solves to show (or CUBER_LATEST_LIMIT)",
    )
    parser.add_argument("--json", action="store_true", help="Print setLatestSolves JSON")

    sub = parser.add_subparsers(dest="command")

    # latest
    sub.add_parser("latest", help="Show the latest solves")

    # add
    p = sub.add_parser("add", help="Record a new solve")
    p.add_argument("--time", type=float, required=True, help="Solve duration")
    p.add_argument("--start", type=int, default=None, help="Start in epoch ms (default: now)")

    # delete
    p = sub.add_parser("delete", help="Delete a solve")
    p.add_argument("id", type=int, help="Solve ID")

    # serve
    sub.add_parser("serve", help="Exchange port messages as JSON lines on stdin/stdout")

    return parser


def main(argv: Optional[Sequence[str]] = None) -> None:
    parser = build_parser()
    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        sys.exit(1)
    if args.limit < 0:
        parser.error("--limit must be non-negative")

    setup_logging()

    handlers = {
        "latest": cmd_latest,
        "add": cmd_add,
        "delete": cmd_delete,
        "serve": cmd_serve,
    }
    try:
        handlers[args.command](args)
    except StorageFailure as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)


if __name__ == "__main__":
    main()
