"""
SimplexLedger: a combinatorial triangulation the engine can run on.

The ledger does not store geometry. It keeps an inventory of cell ids per
causal category, timelike edge ids, the number of spacelike edges, and the
stars of vertices inserted by (2,6) moves. Each reference executor rewrites
this inventory exactly as the corresponding Pachner move rewrites a real
triangulation:

    (2,3): a (2,2) cell and its neighbour become three cells
           -> +1 (2,2), +1 timelike edge
    (3,2): a timelike edge of degree 3 is removed
           -> -1 (2,2), -1 timelike edge
    (2,6): a vertex is inserted on the spacelike face shared by a
           (1,3) and a (3,1) -> each splits into three,
           +2 timelike and +3 spacelike edges
    (6,2): the inverse of (2,6), only for vertices whose star is intact
    (4,4): two (3,1) and two (1,3) around a spacelike edge are re-glued
           -> no count changes

Executors take the most recently registered candidates from the pass's
MovableElementSets and keep those lists in step with the ledger.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from cdtsim.core.collaborators import MovableElementSets
from cdtsim.core.errors import PreconditionError
from cdtsim.core.moves import MoveType
from cdtsim.geometry.foliation import FoliationError

if TYPE_CHECKING:
    from cdtsim.geometry.foliation import FoliatedTriangulation


@dataclass(frozen=True)
class VertexStar:
    """Elements around a vertex inserted by a (2,6) move."""

    three_one: tuple[int, ...]
    one_three: tuple[int, ...]
    timelike_edges: tuple[int, ...]

    def elements(self) -> tuple[int, ...]:
        return self.three_one + self.one_three + self.timelike_edges


@dataclass
class SimplexLedger:
    """Inventory of a foliated 3D triangulation."""

    three_one: set[int] = field(default_factory=set)
    two_two: set[int] = field(default_factory=set)
    one_three: set[int] = field(default_factory=set)
    timelike_edges: set[int] = field(default_factory=set)
    spacelike_edges: int = 0

    # Removable (2,6) vertices, and which vertex each star element belongs to
    _stars: dict[int, VertexStar] = field(default_factory=dict, init=False)
    _star_of: dict[int, int] = field(default_factory=dict, init=False)
    _next_id: int = field(default=0, init=False)

    def __post_init__(self):
        if self.spacelike_edges < 0:
            raise ValueError("spacelike_edges must be >= 0")
        used = [*self.three_one, *self.two_two, *self.one_three, *self.timelike_edges]
        if len(set(used)) != len(used):
            raise ValueError("element ids must be unique across categories")
        self._next_id = max(used, default=-1) + 1

    @classmethod
    def seeded(
        cls,
        three_one: int,
        two_two: int,
        one_three: int,
        timelike_edges: int,
        spacelike_edges: int = 0,
    ) -> SimplexLedger:
        """Ledger with the given number of elements in each category."""
        sizes = (three_one, two_two, one_three, timelike_edges)
        if min(sizes) < 0:
            raise ValueError("category sizes must be >= 0")
        ids = iter(range(sum(sizes)))
        return cls(
            three_one={next(ids) for _ in range(three_one)},
            two_two={next(ids) for _ in range(two_two)},
            one_three={next(ids) for _ in range(one_three)},
            timelike_edges={next(ids) for _ in range(timelike_edges)},
            spacelike_edges=spacelike_edges,
        )

    @classmethod
    def from_triangulation(cls, triangulation: "FoliatedTriangulation") -> SimplexLedger:
        """
        Take the inventory of a Delaunay triangulation.

        Cells keep their Delaunay index; timelike edges are numbered after them.

        Raises:
            FoliationError: if the triangulation has acausal cells
        """
        if not triangulation.is_foliated:
            raise FoliationError(
                f"{len(triangulation.acausal_simplices)} of "
                f"{triangulation.number_of_cells} cells violate the foliation"
            )
        three_one, two_two, one_three = triangulation.classify_simplices()
        timelike, spacelike = triangulation.classify_edges()
        first_edge = triangulation.number_of_cells
        return cls(
            three_one=set(three_one),
            two_two=set(two_two),
            one_three=set(one_three),
            timelike_edges=set(range(first_edge, first_edge + len(timelike))),
            spacelike_edges=spacelike,
        )

    @property
    def number_of_cells(self) -> int:
        """True number of top-dimensional simplices."""
        return len(self.three_one) + len(self.two_two) + len(self.one_three)

    @property
    def removable_vertices(self) -> list[int]:
        """Vertices a (6,2) move can remove."""
        return sorted(self._stars)

    def new_ids(self, n: int) -> list[int]:
        start = self._next_id
        self._next_id += n
        return list(range(start, start + n))

    def discard(self, category: set[int], element: int, movable: MovableElementSets):
        """Remove an element. A (2,6) star it belonged to is no longer removable."""
        category.remove(element)
        vertex = self._star_of.get(element)
        if vertex is not None:
            self.pop_star(vertex)
            if vertex in movable.six_two_vertices:
                movable.six_two_vertices.remove(vertex)

    def add_star(self, vertex: int, star: VertexStar):
        self._stars[vertex] = star
        for element in star.elements():
            self._star_of[element] = vertex

    def pop_star(self, vertex: int) -> VertexStar:
        star = self._stars.pop(vertex)
        for element in star.elements():
            self._star_of.pop(element, None)
        return star


class LedgerClassifier:
    """Classifier over a SimplexLedger, in deterministic (sorted) order."""

    def classify_simplices(self, ledger: SimplexLedger) -> tuple[list[int], list[int], list[int]]:
        return sorted(ledger.three_one), sorted(ledger.two_two), sorted(ledger.one_three)

    def classify_edges(self, ledger: SimplexLedger) -> tuple[list[int], int]:
        return sorted(ledger.timelike_edges), ledger.spacelike_edges

    def classify_vertices(self, ledger: SimplexLedger) -> list[int]:
        return ledger.removable_vertices


def _require(movable: MovableElementSets, move: MoveType):
    if not movable.can_perform(move):
        raise PreconditionError(f"no movable elements for a {move.label} move")


def make_23_move(ledger: SimplexLedger, movable: MovableElementSets) -> SimplexLedger:
    """(2,3) move: +1 (2,2) simplex, +1 timelike edge."""
    _require(movable, MoveType.TWO_THREE)
    ledger.discard(ledger.two_two, movable.two_two.pop(), movable)

    new_cells = ledger.new_ids(2)
    (new_edge,) = ledger.new_ids(1)
    ledger.two_two.update(new_cells)
    ledger.timelike_edges.add(new_edge)

    movable.two_two.extend(new_cells)
    movable.timelike_edges.append(new_edge)
    return ledger


def make_32_move(ledger: SimplexLedger, movable: MovableElementSets) -> SimplexLedger:
    """(3,2) move: -1 (2,2) simplex, -1 timelike edge."""
    _require(movable, MoveType.THREE_TWO)
    ledger.discard(ledger.timelike_edges, movable.timelike_edges.pop(), movable)
    ledger.discard(ledger.two_two, movable.two_two.pop(), movable)
    return ledger


def make_26_move(ledger: SimplexLedger, movable: MovableElementSets) -> SimplexLedger:
    """(2,6) move: +2 (3,1), +2 (1,3), +2 timelike, +3 spacelike edges."""
    _require(movable, MoveType.TWO_SIX)
    ledger.discard(ledger.one_three, movable.one_three.pop(), movable)
    ledger.discard(ledger.three_one, movable.three_one.pop(), movable)

    (vertex,) = ledger.new_ids(1)
    star = VertexStar(
        three_one=tuple(ledger.new_ids(3)),
        one_three=tuple(ledger.new_ids(3)),
        timelike_edges=tuple(ledger.new_ids(2)),
    )
    ledger.three_one.update(star.three_one)
    ledger.one_three.update(star.one_three)
    ledger.timelike_edges.update(star.timelike_edges)
    ledger.spacelike_edges += 3
    ledger.add_star(vertex, star)

    # New vertex first, so its star is not the next thing other moves consume
    movable.three_one[:0] = star.three_one
    movable.one_three[:0] = star.one_three
    movable.timelike_edges[:0] = star.timelike_edges
    movable.spacelike_edge_count += 3
    movable.six_two_vertices.append(vertex)
    return ledger


def make_62_move(ledger: SimplexLedger, movable: MovableElementSets) -> SimplexLedger:
    """(6,2) move: -2 (3,1), -2 (1,3), -2 timelike, -3 spacelike edges."""
    _require(movable, MoveType.SIX_TWO)
    star = ledger.pop_star(movable.six_two_vertices.pop())

    for candidates, category, elements in (
        (movable.three_one, ledger.three_one, star.three_one),
        (movable.one_three, ledger.one_three, star.one_three),
        (movable.timelike_edges, ledger.timelike_edges, star.timelike_edges),
    ):
        category.difference_update(elements)
        for element in elements:
            candidates.remove(element)
    ledger.spacelike_edges -= 3

    upper, lower = ledger.new_ids(2)
    ledger.three_one.add(upper)
    ledger.one_three.add(lower)

    movable.three_one.append(upper)
    movable.one_three.append(lower)
    movable.spacelike_edge_count -= 3
    return ledger


def make_44_move(ledger: SimplexLedger, movable: MovableElementSets) -> SimplexLedger:
    """(4,4) move: re-glue two (3,1) and two (1,3) around a spacelike edge."""
    _require(movable, MoveType.FOUR_FOUR)
    for _ in range(2):
        ledger.discard(ledger.three_one, movable.three_one.pop(), movable)
        ledger.discard(ledger.one_three, movable.one_three.pop(), movable)

    new_upper = ledger.new_ids(2)
    new_lower = ledger.new_ids(2)
    ledger.three_one.update(new_upper)
    ledger.one_three.update(new_lower)
    movable.three_one.extend(new_upper)
    movable.one_three.extend(new_lower)
    return ledger


LEDGER_EXECUTORS = {
    MoveType.TWO_THREE: make_23_move,
    MoveType.THREE_TWO: make_32_move,
    MoveType.TWO_SIX: make_26_move,
    MoveType.SIX_TWO: make_62_move,
    MoveType.FOUR_FOUR: make_44_move,
}
