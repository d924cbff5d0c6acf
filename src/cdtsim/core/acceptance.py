"""
Acceptance probability for a proposed ergodic move.

The Metropolis-Hastings probability of making a move is

    P = a1 · a2

    a1 = attempted[move] / Σ_i attempted[i]      (proposal-frequency ratio)
    a2 = min(1, exp(-ΔS)),  ΔS = S_new - S_current

Action differences can be tiny compared to the action itself, so both
factors are computed with mpmath at a fixed working precision rather than
with native floats. The precision is acquired in a scoped block and restored
on every exit path.

Both functions are pure: they read the statistics and counts, never modify them.
"""

from __future__ import annotations
from contextlib import contextmanager
from typing import Iterator, TYPE_CHECKING

from mpmath import exp, isfinite, mp, mpf

from cdtsim.core.errors import PreconditionError, PrecisionError
from cdtsim.core.moves import MoveType
from cdtsim.core.parameters import DEFAULT_PRECISION_BITS

if TYPE_CHECKING:
    from cdtsim.core.collaborators import ActionEvaluator
    from cdtsim.core.moves import MoveStatistics
    from cdtsim.core.parameters import SimulationParameters
    from cdtsim.core.state import StateCounts


@contextmanager
def precision(bits: int = DEFAULT_PRECISION_BITS) -> Iterator[None]:
    """
    Scoped mpmath working precision.

    Raises:
        PrecisionError: if bits is too small to represent anything useful
    """
    if bits < 2:
        raise PrecisionError(f"precision must be at least 2 bits, got {bits}")
    with mp.workprec(bits):
        yield


def calculate_a1(
    move: MoveType,
    statistics: "MoveStatistics",
    precision_bits: int = DEFAULT_PRECISION_BITS,
) -> mpf:
    """
    Probability of proposing this move relative to all attempted moves.

    Args:
        move: Proposed move type
        statistics: Current move statistics
        precision_bits: Working precision

    Returns:
        a1 = attempted[move] / total_attempted, in [0, 1]

    Raises:
        PreconditionError: if no move has been attempted yet
    """
    total = statistics.total_attempted
    if total == 0:
        raise PreconditionError(
            f"a1 for {move.label} is undefined before any move has been attempted"
        )
    with precision(precision_bits):
        return mpf(statistics.attempted_count(move)) / mpf(total)


def calculate_a2(
    move: MoveType,
    state: "StateCounts",
    parameters: "SimulationParameters",
    action: "ActionEvaluator",
    precision_bits: int = DEFAULT_PRECISION_BITS,
) -> mpf:
    """
    Boltzmann weight of the action change, capped at 1.

    Args:
        move: Proposed move type
        state: Current counts (the move's effect is projected, not applied)
        parameters: Couplings α, K, λ
        action: Bulk action evaluator
        precision_bits: Working precision

    Returns:
        1 if the move does not increase the action, else exp(S_current - S_new)

    Raises:
        PrecisionError: if the action difference is not finite
    """
    with precision(precision_bits):
        # (4,4) leaves every count unchanged, and e^0 == 1
        if move is MoveType.FOUR_FOUR:
            return mpf(1)

        couplings = (parameters.alpha, parameters.k, parameters.lambda_)
        current_action = mpf(action(*state.as_tuple(), *couplings))
        new_action = mpf(action(*state.projected(move), *couplings))

        exponent = current_action - new_action
        if not isfinite(exponent):
            raise PrecisionError(
                f"non-finite action difference for {move.label}: "
                f"S_current={current_action}, S_new={new_action}"
            )

        if exponent >= 0:
            return mpf(1)
        return exp(exponent)


def acceptance_probability(a1: mpf, a2: mpf, precision_bits: int = DEFAULT_PRECISION_BITS) -> mpf:
    """a1·a2 at working precision."""
    with precision(precision_bits):
        return a1 * a2


def is_accepted(trial: float, probability: mpf, precision_bits: int = DEFAULT_PRECISION_BITS) -> bool:
    """Metropolis decision: accept iff trial <= a1·a2."""
    with precision(precision_bits):
        return bool(mpf(trial) <= probability)
