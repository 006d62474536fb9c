"""Core data types for cuber."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Union

Number = Union[int, float]


@dataclass(frozen=True)
class SolveDraft:
    """A solve as submitted by the presentation layer, before it has an id."""

    start: Number
    solve_time: Number


@dataclass(frozen=True)
class SolveRecord:
    """A single stored solve.

    ``start`` is the epoch-millisecond timestamp the solve began at and is the
    only ordering key. ``solve_time`` is carried along untouched.
    """

    id: int
    start: Number
    solve_time: Number
