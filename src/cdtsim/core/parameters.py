"""
Run parameters and engine configuration.

SimulationParameters holds the physics (couplings, run length).
MetropolisConfig holds the algorithmic knobs of the engine itself.
Both are frozen: they are fixed for the lifetime of a run.
"""

from __future__ import annotations
from dataclasses import dataclass

from cdtsim.core.moves import ALL_MOVES, MoveType

# Working precision (bits) for a1, a2 and the bulk action
DEFAULT_PRECISION_BITS = 256


@dataclass(frozen=True)
class SimulationParameters:
    """Physical couplings and run length."""

    alpha: float  # Timelike edge length α (squared length ratio)
    k: float  # K = 1/(8πG_N)
    lambda_: float  # λ = K·Λ, Λ the cosmological constant
    passes: int = 1  # Passes of ergodic moves
    output_every_n_passes: int = 0  # Report cadence in passes; 0 = never

    def __post_init__(self) -> None:
        if not self.alpha > 0:
            raise ValueError("alpha must be > 0")
        if self.passes < 1:
            raise ValueError("passes must be >= 1")
        if self.output_every_n_passes < 0:
            raise ValueError("output_every_n_passes must be >= 0")


@dataclass(frozen=True)
class MetropolisConfig:
    """Engine knobs."""

    # None: attempts per pass = current total simplex count
    attempts_per_pass: int | None = None
    enabled_moves: tuple[MoveType, ...] = ALL_MOVES
    warmup_moves: tuple[MoveType, ...] = (
        MoveType.TWO_THREE,
        MoveType.THREE_TWO,
        MoveType.TWO_SIX,
    )
    # Warm-up applications also count as attempts, so a1 is defined afterwards
    count_warmup_attempts: bool = True
    precision_bits: int = DEFAULT_PRECISION_BITS
    seed: int | None = None
    verify_counts: bool = True  # Audit counts against classifiers each pass
    record_attempts: bool = True  # Keep the per-attempt trace

    def __post_init__(self) -> None:
        if self.attempts_per_pass is not None and self.attempts_per_pass < 0:
            raise ValueError("attempts_per_pass must be >= 0")
        if not self.enabled_moves:
            raise ValueError("enabled_moves must not be empty")
        if len(set(self.enabled_moves)) != len(self.enabled_moves):
            raise ValueError("enabled_moves must not contain duplicates")
        for move in (*self.enabled_moves, *self.warmup_moves):
            if not isinstance(move, MoveType):
                raise ValueError(f"not a move type: {move!r}")
        if self.precision_bits < 2:
            raise ValueError("precision_bits must be >= 2")

    @property
    def required_moves(self) -> frozenset[MoveType]:
        """Moves that need an executor."""
        return frozenset(self.enabled_moves) | frozenset(self.warmup_moves)
