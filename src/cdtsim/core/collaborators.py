"""
Interfaces of the collaborators the engine drives but does not implement.

The engine knows NOTHING about how a triangulation is stored. It only
needs:
- Classifiers that list the movable simplices, edges and vertices
- One executor per move type that rewrites the triangulation
- An action evaluator over the integer counts
- A uniform random source

Any object with the right methods works (structural typing). The
cdtsim.geometry package ships reference implementations.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from typing import Any, Protocol, Sequence

from mpmath import mpf

from cdtsim.core.moves import MoveType


@dataclass
class MovableElementSets:
    """
    Classification of a triangulation into movable categories.

    Element references are opaque to the engine. Within a pass, executors
    keep the lists exact: every element a move destroys is removed, every
    element it creates is appended. can_perform() relies on this.
    """

    three_one: list[Any] = field(default_factory=list)  # (3,1) simplices
    two_two: list[Any] = field(default_factory=list)  # (2,2) simplices
    one_three: list[Any] = field(default_factory=list)  # (1,3) simplices
    timelike_edges: list[Any] = field(default_factory=list)
    spacelike_edge_count: int = 0
    six_two_vertices: list[Any] = field(default_factory=list)  # Candidates for (6,2)

    @property
    def total_simplices(self) -> int:
        return len(self.three_one) + len(self.two_two) + len(self.one_three)

    def can_perform(self, move: MoveType) -> bool:
        """True if every category the move consumes has enough candidates."""
        if move is MoveType.TWO_THREE:
            return bool(self.two_two)
        if move is MoveType.THREE_TWO:
            return bool(self.timelike_edges) and bool(self.two_two)
        if move is MoveType.TWO_SIX:
            return bool(self.one_three) and bool(self.three_one)
        if move is MoveType.SIX_TWO:
            return bool(self.six_two_vertices)
        # (4,4): two (3,1), two (1,3) and the spacelike edge they share
        return (
            len(self.three_one) >= 2
            and len(self.one_three) >= 2
            and self.spacelike_edge_count >= 1
        )

    def copy(self) -> MovableElementSets:
        """Independent copy; the element references themselves are shared."""
        return MovableElementSets(
            three_one=list(self.three_one),
            two_two=list(self.two_two),
            one_three=list(self.one_three),
            timelike_edges=list(self.timelike_edges),
            spacelike_edge_count=self.spacelike_edge_count,
            six_two_vertices=list(self.six_two_vertices),
        )

    def summary(self) -> dict[str, int]:
        """Sizes of each category."""
        return {
            "three_one": len(self.three_one),
            "two_two": len(self.two_two),
            "one_three": len(self.one_three),
            "timelike_edges": len(self.timelike_edges),
            "spacelike_edges": self.spacelike_edge_count,
            "six_two_vertices": len(self.six_two_vertices),
        }


class Classifier(Protocol):
    """Scans a triangulation and partitions its elements."""

    def classify_simplices(self, triangulation: Any) -> tuple[Sequence, Sequence, Sequence]:
        """Return ((3,1) simplices, (2,2) simplices, (1,3) simplices)."""
        ...

    def classify_edges(self, triangulation: Any) -> tuple[Sequence, int]:
        """Return (timelike edges, number of spacelike edges)."""
        ...

    def classify_vertices(self, triangulation: Any) -> Sequence:
        """Return vertices that a (6,2) move can remove."""
        ...


class MoveExecutor(Protocol):
    """
    Performs one ergodic move on the triangulation.

    Must raise if the move cannot be performed. Executors never touch
    move statistics: attempted/successful counts belong to the engine.
    """

    def __call__(self, triangulation: Any, movable: MovableElementSets) -> Any:
        ...


class ActionEvaluator(Protocol):
    """Bulk action as a function of the counts and couplings."""

    def __call__(
        self,
        timelike_edges: int,
        three_one: int,
        two_two: int,
        alpha: float,
        k: float,
        lambda_: float,
    ) -> mpf:
        ...


class UniformSource(Protocol):
    """Random source; numpy.random.Generator satisfies this."""

    def random(self) -> float:
        """Uniform float in [0, 1)."""
        ...

    def integers(self, high: int) -> int:
        """Uniform integer in [0, high)."""
        ...


def classify(classifier: Classifier, triangulation: Any) -> MovableElementSets:
    """Run all classifiers and collect the results."""
    three_one, two_two, one_three = classifier.classify_simplices(triangulation)
    timelike_edges, spacelike_count = classifier.classify_edges(triangulation)
    six_two_vertices = classifier.classify_vertices(triangulation)
    return MovableElementSets(
        three_one=list(three_one),
        two_two=list(two_two),
        one_three=list(one_three),
        timelike_edges=list(timelike_edges),
        spacelike_edge_count=int(spacelike_count),
        six_two_vertices=list(six_two_vertices),
    )
