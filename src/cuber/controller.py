"""Sync controller: applies commands to the store and broadcasts the view."""

from __future__ import annotations

import asyncio
import inspect
import logging
from typing import Awaitable, Callable, Optional, Union

from cuber.commands import (
    Command,
    CreateSolve,
    DeleteSolve,
    LatestSolvesChanged,
    RequestLatest,
)
from cuber.config import LATEST_SOLVES_LIMIT
from cuber.exceptions import StorageFailure
from cuber.store.base import Store, check_limit

logger = logging.getLogger(__name__)

_COMMAND_TYPES = (RequestLatest, CreateSolve, DeleteSolve)

Notify = Callable[[LatestSolvesChanged], Union[None, Awaitable[None]]]


class SyncController:
    """Keeps the presentation layer's view consistent with the store.

    Every command ends with a fresh bounded query whose full result is sent
    through ``notify``; no incremental diffs are ever produced. A command
    whose storage step fails emits nothing and re-raises ``StorageFailure``.

    Usage::

        controller = SyncController(SqliteStore(path), notify=render)
        await controller.handle(CreateSolve(SolveDraft(start=..., solve_time=...)))
    """

    def __init__(
        self,
        store: Store,
        notify: Notify,
        limit: int = LATEST_SOLVES_LIMIT,
    ) -> None:
        self._store = store
        self._notify = notify
        self.limit = check_limit(limit)

    async def handle(self, command: Command) -> LatestSolvesChanged:
        """Run one command chain to completion and return what was emitted."""
        if not isinstance(command, _COMMAND_TYPES):
            raise TypeError(f"Unsupported command: {command!r}")
        name = type(command).__name__
        logger.debug("Handling %s", name, extra={"command": name})

        if isinstance(command, CreateSolve):
            solve_id = await asyncio.to_thread(self._store.insert, command.draft)
            logger.debug("Inserted solve %d", solve_id, extra={"solve_id": solve_id})
        elif isinstance(command, DeleteSolve):
            await asyncio.to_thread(self._store.delete, command.solve_id)
            logger.debug(
                "Deleted solve %d", command.solve_id,
                extra={"solve_id": command.solve_id},
            )

        return await self._refresh()

    async def _refresh(self) -> LatestSolvesChanged:
        records = await asyncio.to_thread(self._store.query_latest, self.limit)
        notification = LatestSolvesChanged(records=tuple(records))
        result = self._notify(notification)
        if inspect.isawaitable(result):
            await result
        logger.debug(
            "Sent %d solves", len(records), extra={"count": len(records)},
        )
        return notification

    async def run(self, commands: "asyncio.Queue[Optional[Command]]") -> None:
        """Consume commands one at a time until a ``None`` sentinel arrives.

        Failed commands, including ones whose notify callback raises, are
        logged and dropped; the view simply does not refresh until a later
        command succeeds.
        """
        while True:
            command = await commands.get()
            try:
                if command is None:
                    return
                if not isinstance(command, _COMMAND_TYPES):
                    logger.warning("Dropping unsupported command %r", command)
                    continue
                await self.handle(command)
            except StorageFailure:
                logger.warning(
                    "Storage failure while handling %s", type(command).__name__,
                    exc_info=True, extra={"command": type(command).__name__},
                )
            except Exception:
                logger.exception(
                    "Dropping %s after unexpected error", type(command).__name__,
                    extra={"command": type(command).__name__},
                )
            finally:
                commands.task_done()
