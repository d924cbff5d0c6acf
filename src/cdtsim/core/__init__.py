"""
Core Monte Carlo primitives.

This layer knows NOTHING about how a triangulation is stored. It only knows:
- The five ergodic moves and their effect on N1_TL, N3_31, N3_22
- Attempted / successful move counters
- The acceptance probability a1·a2 at high precision
- The Metropolis-Hastings loop that drives external move executors

Triangulations, classifiers and executors are supplied by the caller
(see cdtsim.geometry for reference implementations).
"""

from cdtsim.core.moves import (
    ALL_MOVES,
    MOVE_EFFECTS,
    REFERENCE_MOVES,
    MoveEffect,
    MoveStatistics,
    MoveType,
)
from cdtsim.core.state import StateCounts
from cdtsim.core.parameters import (
    DEFAULT_PRECISION_BITS,
    MetropolisConfig,
    SimulationParameters,
)
from cdtsim.core.errors import (
    BookkeepingError,
    ConsumedHandleError,
    MetropolisError,
    PrecisionError,
    PreconditionError,
)
from cdtsim.core.action import s3_bulk_action
from cdtsim.core.acceptance import calculate_a1, calculate_a2, precision
from cdtsim.core.collaborators import (
    ActionEvaluator,
    Classifier,
    MovableElementSets,
    MoveExecutor,
    UniformSource,
    classify,
)
from cdtsim.core.ownership import TriangulationHandle
from cdtsim.core.metropolis import AttemptRecord, Metropolis, PassSummary

__all__ = [
    "ALL_MOVES",
    "MOVE_EFFECTS",
    "REFERENCE_MOVES",
    "MoveEffect",
    "MoveStatistics",
    "MoveType",
    "StateCounts",
    "DEFAULT_PRECISION_BITS",
    "MetropolisConfig",
    "SimulationParameters",
    "BookkeepingError",
    "ConsumedHandleError",
    "MetropolisError",
    "PrecisionError",
    "PreconditionError",
    "s3_bulk_action",
    "calculate_a1",
    "calculate_a2",
    "precision",
    "ActionEvaluator",
    "Classifier",
    "MovableElementSets",
    "MoveExecutor",
    "UniformSource",
    "classify",
    "TriangulationHandle",
    "AttemptRecord",
    "Metropolis",
    "PassSummary",
]
