"""cuber: local persistence for cube solve records."""

from cuber.commands import (
    CreateSolve,
    DeleteSolve,
    LatestSolvesChanged,
    RequestLatest,
)
from cuber.controller import SyncController
from cuber.exceptions import InvalidCommandError, StorageFailure
from cuber.store import MemoryStore, SqliteStore, Store
from cuber.types import SolveDraft, SolveRecord

__all__ = [
    "CreateSolve",
    "DeleteSolve",
    "InvalidCommandError",
    "LatestSolvesChanged",
    "MemoryStore",
    "RequestLatest",
    "SolveDraft",
    "SolveRecord",
    "SqliteStore",
    "StorageFailure",
    "Store",
    "SyncController",
]
