"""
Foliated Delaunay triangulations.

Points are placed on concentric spheres, one sphere per time slice, and
triangulated with scipy's Delaunay (Qhull). The time label of each vertex
then splits the complex into causal categories:

- A tetrahedron spanning two adjacent slices t, t+1 is
    (3,1): three vertices on t, one on t+1
    (2,2): two on each
    (1,3): one on t, three on t+1
- Any other tetrahedron (inside one slice, or spanning non-adjacent slices)
  is acausal: the triangulation has no valid foliation
- An edge is timelike if its endpoints lie on different slices,
  spacelike otherwise
"""

from __future__ import annotations
from itertools import combinations

import numpy as np
from scipy.spatial import Delaunay

from cdtsim.core.errors import PreconditionError


class FoliationError(PreconditionError):
    """The triangulation does not respect its time foliation."""


_EDGE_PAIRS = np.array(list(combinations(range(4), 2)))


def make_foliated_points(
    slices: int,
    points_per_slice: int,
    rng: np.random.Generator,
    radius_step: float = 1.0,
) -> tuple[np.ndarray, np.ndarray]:
    """
    Scatter points uniformly on concentric spheres.

    Args:
        slices: Number of time slices (slice t has radius t * radius_step)
        points_per_slice: Points on each sphere
        rng: Random generator
        radius_step: Radial spacing between slices

    Returns:
        (points [n, 3], timevalues [n]) with time slices numbered from 1
    """
    if slices < 1:
        raise ValueError("slices must be >= 1")
    if points_per_slice < 1:
        raise ValueError("points_per_slice must be >= 1")
    if radius_step <= 0:
        raise ValueError("radius_step must be > 0")

    points = []
    timevalues = []
    for t in range(1, slices + 1):
        directions = rng.normal(size=(points_per_slice, 3))
        directions /= np.linalg.norm(directions, axis=1, keepdims=True)
        points.append(directions * t * radius_step)
        timevalues.append(np.full(points_per_slice, t, dtype=np.int64))

    return np.vstack(points), np.concatenate(timevalues)


class FoliatedTriangulation:
    """
    A 3D Delaunay triangulation whose vertices carry time labels.

    Classification happens once at construction; the triangulation itself
    is immutable.
    """

    def __init__(self, points: np.ndarray, timevalues: np.ndarray):
        points = np.asarray(points, dtype=np.float64)
        timevalues = np.asarray(timevalues, dtype=np.int64)
        if points.ndim != 2 or points.shape[1] != 3:
            raise ValueError("points must have shape (n, 3)")
        if timevalues.shape != (points.shape[0],):
            raise ValueError("need exactly one time value per point")
        if points.shape[0] < 4:
            raise ValueError("need at least 4 points for a 3D triangulation")

        self.points = points
        self.timevalues = timevalues
        self.delaunay = Delaunay(points)

        self._three_one: list[int] = []
        self._two_two: list[int] = []
        self._one_three: list[int] = []
        self.acausal_simplices: list[int] = []
        self._classify_cells()

    @classmethod
    def from_slices(
        cls,
        slices: int,
        points_per_slice: int,
        rng: np.random.Generator,
        radius_step: float = 1.0,
    ) -> FoliatedTriangulation:
        """Triangulate points on concentric spheres."""
        points, timevalues = make_foliated_points(slices, points_per_slice, rng, radius_step)
        return cls(points, timevalues)

    @property
    def simplices(self) -> np.ndarray:
        """Vertex indices of each tetrahedron, shape [n_cells, 4]."""
        return self.delaunay.simplices

    @property
    def number_of_cells(self) -> int:
        return int(self.delaunay.simplices.shape[0])

    @property
    def number_of_vertices(self) -> int:
        return int(self.points.shape[0])

    @property
    def is_foliated(self) -> bool:
        """True if every cell spans exactly two adjacent slices."""
        return not self.acausal_simplices

    def _classify_cells(self):
        times = self.timevalues[self.delaunay.simplices]
        lowest = times.min(axis=1)
        span = times.max(axis=1) - lowest
        on_lower = (times == lowest[:, None]).sum(axis=1)

        for cell in range(self.number_of_cells):
            if span[cell] != 1:
                self.acausal_simplices.append(cell)
            elif on_lower[cell] == 3:
                self._three_one.append(cell)
            elif on_lower[cell] == 2:
                self._two_two.append(cell)
            else:
                self._one_three.append(cell)

    def classify_simplices(self) -> tuple[list[int], list[int], list[int]]:
        """Cell indices of ((3,1), (2,2), (1,3)) simplices."""
        return list(self._three_one), list(self._two_two), list(self._one_three)

    def edges(self) -> np.ndarray:
        """Unique edges as sorted vertex index pairs, shape [n_edges, 2]."""
        pairs = self.delaunay.simplices[:, _EDGE_PAIRS].reshape(-1, 2)
        return np.unique(np.sort(pairs, axis=1), axis=0)

    def classify_edges(self) -> tuple[list[tuple[int, int]], int]:
        """Return (timelike edges as vertex pairs, number of spacelike edges)."""
        edges = self.edges()
        timelike = self.timevalues[edges[:, 0]] != self.timevalues[edges[:, 1]]
        timelike_edges = [(int(u), int(v)) for u, v in edges[timelike]]
        return timelike_edges, int((~timelike).sum())
