"""
Metropolis: the Metropolis-Hastings move engine.

The Metropolis-Hastings algorithm is a Markov Chain Monte Carlo method.
The probability of making an ergodic (Pachner) move is

    P = a1 · a2,   a1 = move[i] / Σ_i move[i],   a2 = min(1, e^{-ΔS})

A run:
1. Takes ownership of the triangulation
2. Classifies it and initializes the counts N1_TL, N3_31, N3_22
3. Warm-up: applies each warm-up move once, unconditionally, so every
   move type has been observed before a1 is needed
4. For each pass: reclassify, audit the counts, then attempt moves
5. Reclassifies and audits once more after the last pass
6. Hands ownership of the triangulation back

Effects of an attempt are applied only after its executor returns, so a
failure never leaves a half-committed move behind. See:
M. Creutz and B. Freedman, "A Statistical Approach to Quantum Mechanics",
Annals of Physics 132 (1981) 427-462.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from typing import Any, Mapping
import logging

import numpy as np
from mpmath import mpf

from cdtsim.core.acceptance import (
    acceptance_probability,
    calculate_a1,
    calculate_a2,
    is_accepted,
)
from cdtsim.core.action import s3_bulk_action
from cdtsim.core.collaborators import (
    ActionEvaluator,
    Classifier,
    MovableElementSets,
    MoveExecutor,
    UniformSource,
    classify,
)
from cdtsim.core.errors import BookkeepingError, PreconditionError
from cdtsim.core.moves import MoveStatistics, MoveType
from cdtsim.core.ownership import TriangulationHandle
from cdtsim.core.parameters import MetropolisConfig, SimulationParameters
from cdtsim.core.state import StateCounts

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class AttemptRecord:
    """One accept/reject decision of the chain."""

    index: int  # 0-based attempt number within the run
    pass_number: int
    move: MoveType
    trial: float
    probability: float  # a1·a2, rounded to float for reporting
    accepted: bool


@dataclass(frozen=True)
class PassSummary:
    """Snapshot taken on the output cadence."""

    pass_number: int
    state: StateCounts
    attempted: np.ndarray
    successful: np.ndarray


@dataclass
class Metropolis:
    """
    Metropolis-Hastings functor over a foliated triangulation.

    Construction only stores the run parameters and collaborators.
    All the real work happens in run().
    """

    parameters: SimulationParameters
    classifier: Classifier
    executors: Mapping[MoveType, MoveExecutor]
    action: ActionEvaluator = s3_bulk_action
    config: MetropolisConfig = field(default_factory=MetropolisConfig)
    rng: UniformSource | None = None

    # Run state
    _state: StateCounts = field(default_factory=StateCounts, init=False)
    _statistics: MoveStatistics = field(default_factory=MoveStatistics, init=False)
    _movable: MovableElementSets = field(default_factory=MovableElementSets, init=False)
    _triangulation: Any = field(default=None, init=False, repr=False)
    _attempts: list[AttemptRecord] = field(default_factory=list, init=False, repr=False)
    _history: list[PassSummary] = field(default_factory=list, init=False, repr=False)
    _attempt_index: int = field(default=0, init=False)
    _current_pass: int = field(default=0, init=False)
    _current_move: MoveType | None = field(default=None, init=False)
    _has_run: bool = field(default=False, init=False)

    def __post_init__(self):
        missing = self.config.required_moves - set(self.executors)
        if missing:
            labels = ", ".join(sorted(move.label for move in missing))
            raise ValueError(f"no executor for move(s): {labels}")
        self.executors = dict(self.executors)
        if self.rng is None:
            self.rng = np.random.default_rng(self.config.seed)

    # ═══════════════════════════════════════════════════════════════
    # Entry point
    # ═══════════════════════════════════════════════════════════════

    def run(self, handle: TriangulationHandle) -> TriangulationHandle:
        """
        Run the Metropolis-Hastings algorithm.

        Args:
            handle: Owns a triangulation with a well-defined foliation.
                    It is invalidated by this call.

        Returns:
            A new handle owning the (possibly mutated) triangulation
        """
        if not isinstance(handle, TriangulationHandle):
            raise TypeError("run() takes ownership through a TriangulationHandle")
        if self._has_run:
            raise PreconditionError("this Metropolis engine has already run")
        self._has_run = True

        self._triangulation = handle.release()
        logger.info("Starting Metropolis-Hastings algorithm ...")

        try:
            self._initialize()
            self._warm_up()
            for pass_number in range(1, self.parameters.passes + 1):
                self._run_pass(pass_number)
            self._movable = classify(self.classifier, self._triangulation)
            if self.config.verify_counts:
                self.verify_counts(boundary="at the end of the run")
        except Exception:
            logger.error(
                "Run aborted in pass %d at attempt %d (%s move); last committed state %s",
                self._current_pass,
                self._attempt_index,
                self._current_move.label if self._current_move else "no",
                self._state.as_tuple(),
            )
            raise

        logger.info(
            "Finished %d passes: N1_TL=%d N3_31=%d N3_22=%d, %d moves attempted",
            self.parameters.passes,
            *self._state.as_tuple(),
            self._statistics.total_attempted,
        )

        triangulation, self._triangulation = self._triangulation, None
        return TriangulationHandle(triangulation)

    # ═══════════════════════════════════════════════════════════════
    # Run phases
    # ═══════════════════════════════════════════════════════════════

    def _initialize(self):
        """Classify the starting triangulation and set the counts from it."""
        self._movable = classify(self.classifier, self._triangulation)
        self._state = StateCounts(
            timelike_edges=len(self._movable.timelike_edges),
            three_one_simplices=len(self._movable.three_one) + len(self._movable.one_three),
            two_two_simplices=len(self._movable.two_two),
        )
        logger.info(
            "Initial counts: N1_TL=%d N3_31=%d N3_22=%d",
            *self._state.as_tuple(),
        )

    def _warm_up(self):
        """
        Apply each warm-up move once, without a Metropolis test.

        Seeds the statistics so that a1 is defined. Not part of the chain.
        """
        for move in self.config.warmup_moves:
            self._commit(move, count_attempt=self.config.count_warmup_attempts)
        logger.info(
            "Warm-up applied %s",
            ", ".join(move.label for move in self.config.warmup_moves) or "nothing",
        )

    def _run_pass(self, pass_number: int):
        """One pass: reclassify, audit, then attempt moves."""
        self._current_pass = pass_number
        self._movable = classify(self.classifier, self._triangulation)
        if self.config.verify_counts:
            self.verify_counts()

        n_attempts = self.attempts_this_pass()
        enabled = self.config.enabled_moves
        logger.debug(
            "Pass %d: %d attempted moves, movable %s",
            pass_number,
            n_attempts,
            self._movable.summary(),
        )

        for _ in range(n_attempts):
            move = enabled[int(self.rng.integers(len(enabled)))]
            self.attempt_move(move)

        cadence = self.parameters.output_every_n_passes
        if cadence and pass_number % cadence == 0:
            self._history.append(
                PassSummary(
                    pass_number=pass_number,
                    state=self._state.copy(),
                    attempted=self._statistics.attempted.copy(),
                    successful=self._statistics.successful.copy(),
                )
            )
            logger.info(
                "Pass %d/%d: N1_TL=%d N3_31=%d N3_22=%d, accepted %d of %d",
                pass_number,
                self.parameters.passes,
                *self._state.as_tuple(),
                self._statistics.total_successful,
                self._statistics.total_attempted,
            )

    def attempts_this_pass(self) -> int:
        """Configured attempts per pass, or the current total simplex count."""
        if self.config.attempts_per_pass is not None:
            return self.config.attempts_per_pass
        return self._state.total_simplices

    # ═══════════════════════════════════════════════════════════════
    # Single move
    # ═══════════════════════════════════════════════════════════════

    def attempt_move(self, move: MoveType) -> AttemptRecord:
        """
        Make one Metropolis-tested move attempt.

        Accepts iff trial <= a1·a2. On acceptance the executor runs, then
        the counts and both counters are committed. On rejection only the
        attempted counter changes.

        A move with no movable elements, or one that would drive a count
        negative, has zero weight: it is drawn and rejected like any other.
        """
        if self._triangulation is None:
            raise PreconditionError("attempt_move() needs a triangulation; call run()")

        self._current_move = move
        bits = self.config.precision_bits
        a1 = calculate_a1(move, self._statistics, bits)
        feasible = self._state.can_apply(move) and self._movable.can_perform(move)
        if feasible:
            a2 = calculate_a2(move, self._state, self.parameters, self.action, bits)
        else:
            a2 = mpf(0)
        probability = acceptance_probability(a1, a2, bits)
        trial = float(self.rng.random())
        accepted = feasible and is_accepted(trial, probability, bits)

        logger.debug(
            "Attempt %d %s: a1=%s a2=%s trial=%.6f -> %s",
            self._attempt_index,
            move.label,
            _fmt(a1),
            _fmt(a2),
            trial,
            "accepted" if accepted else "rejected",
        )

        if accepted:
            self._commit(move, count_attempt=True)
        else:
            self._statistics.record_attempt(move)

        record = AttemptRecord(
            index=self._attempt_index,
            pass_number=self._current_pass,
            move=move,
            trial=trial,
            probability=float(probability),
            accepted=accepted,
        )
        if self.config.record_attempts:
            self._attempts.append(record)
        self._attempt_index += 1
        return record

    def _commit(self, move: MoveType, count_attempt: bool):
        """Execute a move and apply its effects, all or nothing."""
        self._current_move = move
        if not self._state.can_apply(move):
            raise PreconditionError(
                f"{move.label} move is impossible with counts {self._state.as_tuple()}"
            )
        self._triangulation = self.executors[move](self._triangulation, self._movable)
        self._state.apply_move_effect(move)
        if count_attempt:
            self._statistics.record_attempt(move)
        self._statistics.record_success(move)

    def verify_counts(self, boundary: str | None = None):
        """
        Check the counts against the current classification.

        Args:
            boundary: Where the check happens, for the error message

        Raises:
            BookkeepingError: if any count has drifted from the triangulation
        """
        movable = self._movable
        expected = (
            len(movable.timelike_edges),
            len(movable.three_one) + len(movable.one_three),
            len(movable.two_two),
        )
        if expected != self._state.as_tuple():
            if boundary is None:
                boundary = f"at the start of pass {self._current_pass}"
            raise BookkeepingError(
                f"counts {self._state.as_tuple()} disagree with triangulation {expected} {boundary}"
            )

    # ═══════════════════════════════════════════════════════════════
    # Accessors
    # ═══════════════════════════════════════════════════════════════

    @property
    def state(self) -> StateCounts:
        """Copy of the current counts."""
        return self._state.copy()

    @property
    def statistics(self) -> MoveStatistics:
        """Copy of the move statistics."""
        return self._statistics.copy()

    @property
    def movable(self) -> MovableElementSets:
        """Copy of the movable sets as they stand after the last attempt."""
        return self._movable.copy()

    @property
    def attempts(self) -> list[AttemptRecord]:
        """Trace of Metropolis-tested attempts, in order."""
        return list(self._attempts)

    @property
    def history(self) -> list[PassSummary]:
        """Pass summaries recorded on the output cadence."""
        return list(self._history)

    def attempted(self, move: MoveType) -> int:
        return self._statistics.attempted_count(move)

    def successful(self, move: MoveType) -> int:
        return self._statistics.successful_count(move)

    @property
    def total_attempted_moves(self) -> int:
        return self._statistics.total_attempted

    @property
    def timelike_edges(self) -> int:
        return self._state.timelike_edges

    @property
    def three_one_simplices(self) -> int:
        return self._state.three_one_simplices

    @property
    def two_two_simplices(self) -> int:
        return self._state.two_two_simplices

    @property
    def total_simplices(self) -> int:
        return self._state.total_simplices

    @property
    def running(self) -> bool:
        """True while the engine owns a triangulation."""
        return self._triangulation is not None


def _fmt(value: mpf) -> str:
    return f"{float(value):.6g}"


__all__ = [
    "AttemptRecord",
    "Metropolis",
    "PassSummary",
]
