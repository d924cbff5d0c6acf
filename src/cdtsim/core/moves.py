"""
Ergodic (Pachner) moves and per-move bookkeeping.

A 3D triangulation with a preferred foliation has five ergodic moves.
Each one has a FIXED effect on the three counts that enter the bulk action:

    Move        ΔN1_TL   ΔN3_31   ΔN3_22
    (2,3)        +1        0        +1
    (3,2)        -1        0        -1
    (2,6)        +2       +4         0
    (6,2)        -2       -4         0
    (4,4)         0        0         0

Complementary moves are exact inverses of each other. The same table is used
to project the action for a proposed move and to commit an accepted one.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from enum import Enum
from typing import NamedTuple

import numpy as np


class MoveType(Enum):
    """The five ergodic moves, indexed into the statistics arrays by value."""

    TWO_THREE = 0
    THREE_TWO = 1
    TWO_SIX = 2
    SIX_TWO = 3
    FOUR_FOUR = 4

    @property
    def label(self) -> str:
        """Conventional name, e.g. "(2,3)"."""
        return _LABELS[self]


_LABELS = {
    MoveType.TWO_THREE: "(2,3)",
    MoveType.THREE_TWO: "(3,2)",
    MoveType.TWO_SIX: "(2,6)",
    MoveType.SIX_TWO: "(6,2)",
    MoveType.FOUR_FOUR: "(4,4)",
}


class MoveEffect(NamedTuple):
    """Change in (timelike edges, (3,1)+(1,3) simplices, (2,2) simplices)."""

    timelike_edges: int
    three_one_simplices: int
    two_two_simplices: int


MOVE_EFFECTS: dict[MoveType, MoveEffect] = {
    MoveType.TWO_THREE: MoveEffect(+1, 0, +1),
    MoveType.THREE_TWO: MoveEffect(-1, 0, -1),
    MoveType.TWO_SIX: MoveEffect(+2, +4, 0),
    MoveType.SIX_TWO: MoveEffect(-2, -4, 0),
    MoveType.FOUR_FOUR: MoveEffect(0, 0, 0),
}

ALL_MOVES: tuple[MoveType, ...] = tuple(MoveType)

# The subset wired into random selection by the first 3D implementation
REFERENCE_MOVES: tuple[MoveType, ...] = (
    MoveType.TWO_THREE,
    MoveType.THREE_TWO,
    MoveType.TWO_SIX,
)


def _zero_counts() -> np.ndarray:
    return np.zeros(len(MoveType), dtype=np.int64)


@dataclass
class MoveStatistics:
    """
    Attempted and successful move counters.

    Both arrays are indexed by MoveType.value and only ever grow.
    There is no reset: the a1 weights depend on the
    full history of the chain.
    """

    attempted: np.ndarray = field(default_factory=_zero_counts)
    successful: np.ndarray = field(default_factory=_zero_counts)

    def __post_init__(self):
        self.attempted = np.asarray(self.attempted, dtype=np.int64).copy()
        self.successful = np.asarray(self.successful, dtype=np.int64).copy()
        for name, counts in (("attempted", self.attempted), ("successful", self.successful)):
            if counts.shape != (len(MoveType),):
                raise ValueError(f"{name} must hold one counter per move type")
            if np.any(counts < 0):
                raise ValueError(f"{name} counters must be non-negative")

    def record_attempt(self, move: MoveType) -> None:
        self.attempted[move.value] += 1

    def record_success(self, move: MoveType) -> None:
        self.successful[move.value] += 1

    def attempted_count(self, move: MoveType) -> int:
        return int(self.attempted[move.value])

    def successful_count(self, move: MoveType) -> int:
        return int(self.successful[move.value])

    @property
    def total_attempted(self) -> int:
        """Sum of attempted counters across all five move types."""
        return int(self.attempted.sum())

    @property
    def total_successful(self) -> int:
        return int(self.successful.sum())

    def acceptance_rate(self, move: MoveType) -> float:
        """Successful / attempted for one move type (0.0 if never attempted)."""
        attempted = self.attempted_count(move)
        if attempted == 0:
            return 0.0
        return self.successful_count(move) / attempted

    def copy(self) -> MoveStatistics:
        return MoveStatistics(self.attempted, self.successful)

    def as_dict(self) -> dict[str, dict[str, int]]:
        """Counters keyed by move label, for logging and reports."""
        return {
            move.label: {
                "attempted": self.attempted_count(move),
                "successful": self.successful_count(move),
            }
            for move in MoveType
        }
