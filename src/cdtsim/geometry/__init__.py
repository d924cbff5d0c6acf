"""
Reference triangulations for the Metropolis engine.

- FoliatedTriangulation: scipy Delaunay over points on time-sliced spheres,
  classified into (3,1), (2,2), (1,3) cells and timelike/spacelike edges
- SimplexLedger: combinatorial inventory the ergodic moves can rewrite
- LEDGER_EXECUTORS: one executor per move type for a SimplexLedger
"""

from cdtsim.geometry.foliation import (
    FoliatedTriangulation,
    FoliationError,
    make_foliated_points,
)
from cdtsim.geometry.ledger import (
    LEDGER_EXECUTORS,
    LedgerClassifier,
    SimplexLedger,
    VertexStar,
    make_23_move,
    make_26_move,
    make_32_move,
    make_44_move,
    make_62_move,
)

__all__ = [
    "FoliatedTriangulation",
    "FoliationError",
    "make_foliated_points",
    "LEDGER_EXECUTORS",
    "LedgerClassifier",
    "SimplexLedger",
    "VertexStar",
    "make_23_move",
    "make_26_move",
    "make_32_move",
    "make_44_move",
    "make_62_move",
]
