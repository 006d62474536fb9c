"""In-memory store implementation for testing."""

from __future__ import annotations

import bisect
import itertools
from typing import Dict, List, Tuple

from cuber.store.base import Store, check_draft, check_limit
from cuber.types import Number, SolveDraft, SolveRecord


class MemoryStore(Store):
    """In-memory store backed by a dict plus a sorted ``(start, id)`` index.

    Bounded queries slice the tail of the index, so they only touch the
    records they return.
    """

    def __init__(self) -> None:
        self._solves: Dict[int, SolveRecord] = {}
        self._index: List[Tuple[Number, int]] = []
        self._ids = itertools.count(1)

    def insert(self, draft: SolveDraft) -> int:
        check_draft(draft)
        solve_id = next(self._ids)
        self._solves[solve_id] = SolveRecord(
            id=solve_id, start=draft.start, solve_time=draft.solve_time,
        )
        bisect.insort(self._index, (draft.start, solve_id))
        return solve_id

    def delete(self, solve_id: int) -> None:
        record = self._solves.pop(solve_id, None)
        if record is None:
            return
        key = (record.start, record.id)
        pos = bisect.bisect_left(self._index, key)
        if pos < len(self._index) and self._index[pos] == key:
            del self._index[pos]

    def query_latest(self, limit: int) -> List[SolveRecord]:
        if check_limit(limit) == 0:
            return []
        tail = self._index[-limit:]
        return [self._solves[solve_id] for _, solve_id in reversed(tail)]

    def count(self) -> int:
        return len(self._solves)
