"""
StateCounts: the integer counts that the bulk action depends on.

The engine never touches the counts directly. Every change goes through
apply_move_effect(), keyed by the MOVE_EFFECTS table, so the projection used
for a2 and the committed update can never drift apart.
"""

from __future__ import annotations
from dataclasses import dataclass

from cdtsim.core.errors import BookkeepingError
from cdtsim.core.moves import MOVE_EFFECTS, MoveType


@dataclass
class StateCounts:
    """Current combinatorial state of the triangulation."""

    timelike_edges: int = 0  # N1_TL
    three_one_simplices: int = 0  # N3_31: (3,1) and (1,3) simplices together
    two_two_simplices: int = 0  # N3_22

    def __post_init__(self):
        if min(self.timelike_edges, self.three_one_simplices, self.two_two_simplices) < 0:
            raise ValueError("state counts must be non-negative")

    @property
    def total_simplices(self) -> int:
        """Total number of top-dimensional simplices."""
        return self.three_one_simplices + self.two_two_simplices

    def as_tuple(self) -> tuple[int, int, int]:
        return self.timelike_edges, self.three_one_simplices, self.two_two_simplices

    def projected(self, move: MoveType) -> tuple[int, int, int]:
        """
        Counts after a hypothetical move, without mutating self.

        Returned as a plain tuple: a projection may be negative when the
        move is impossible, and only the action needs to see it.
        """
        effect = MOVE_EFFECTS[move]
        return (
            self.timelike_edges + effect.timelike_edges,
            self.three_one_simplices + effect.three_one_simplices,
            self.two_two_simplices + effect.two_two_simplices,
        )

    def can_apply(self, move: MoveType) -> bool:
        """True if the move's effect keeps every count non-negative."""
        return min(self.projected(move)) >= 0

    def apply_move_effect(self, move: MoveType) -> None:
        """
        Commit the effect of a successful move.

        Atomic: either all three counts change or none does.

        Raises:
            BookkeepingError: if any count would become negative
        """
        timelike, three_one, two_two = self.projected(move)
        if min(timelike, three_one, two_two) < 0:
            raise BookkeepingError(
                f"{move.label} move would leave negative counts "
                f"(N1_TL={timelike}, N3_31={three_one}, N3_22={two_two})"
            )
        self.timelike_edges = timelike
        self.three_one_simplices = three_one
        self.two_two_simplices = two_two

    def copy(self) -> StateCounts:
        return StateCounts(*self.as_tuple())
