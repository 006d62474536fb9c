"""Commands accepted by the sync controller and the notification it emits."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Tuple, Union

from cuber.types import SolveDraft, SolveRecord


@dataclass(frozen=True)
class RequestLatest:
    """Ask for the current view without changing anything."""


@dataclass(frozen=True)
class CreateSolve:
    draft: SolveDraft


@dataclass(frozen=True)
class DeleteSolve:
    solve_id: int


Command = Union[RequestLatest, CreateSolve, DeleteSolve]


@dataclass(frozen=True)
class LatestSolvesChanged:
    """The full bounded view, most recent first."""

    records: Tuple[SolveRecord, ...]
