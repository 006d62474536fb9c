"""Abstract store interface."""

from __future__ import annotations

from abc import ABC, abstractmethod
import math
from typing import List

from cuber.types import SolveDraft, SolveRecord


class Store(ABC):
    """Abstract base class for solve storage backends."""

    @abstractmethod
    def insert(self, draft: SolveDraft) -> int:
        """Persist a new solve and return its freshly assigned id."""

    @abstractmethod
    def delete(self, solve_id: int) -> None:
        """Delete a solve by id. Deleting an unknown id is a no-op."""

    @abstractmethod
    def query_latest(self, limit: int) -> List[SolveRecord]:
        """Return up to ``limit`` solves ordered by start, most recent first."""

    @abstractmethod
    def count(self) -> int:
        """Number of stored solves."""

    def close(self) -> None:
        """Release backend resources."""

    def __enter__(self) -> "Store":
        return self

    def __exit__(self, *args: object) -> None:
        self.close()


def check_draft(draft: SolveDraft) -> SolveDraft:
    if not math.isfinite(draft.start):
        raise ValueError(f"start must be a finite number, got {draft.start!r}")
    return draft


def check_limit(limit: int) -> int:
    if isinstance(limit, bool) or not isinstance(limit, int):
        raise ValueError(f"limit must be an integer, got {limit!r}")
    if limit < 0:
        raise ValueError(f"limit must be non-negative, got {limit}")
    return limit
