"""
Pytest configuration and shared fixtures.
"""

import matplotlib

matplotlib.use("Agg")

import pytest
import numpy as np
from mpmath import mpf


@pytest.fixture
def rng():
    """Reproducible random number generator."""
    return np.random.default_rng(seed=42)


@pytest.fixture
def parameters():
    """Typical couplings for a short run."""
    from cdtsim.core import SimulationParameters
    return SimulationParameters(alpha=0.6, k=1.1, lambda_=0.1, passes=1)


@pytest.fixture
def flat_action():
    """Action that is the same for every state, so a2 is always 1."""
    def action(timelike_edges, three_one, two_two, alpha, k, lambda_):
        return mpf(0)
    return action


class ScriptedSource:
    """Uniform source that replays fixed draws."""

    def __init__(self, randoms=(), integers=()):
        self._randoms = list(randoms)
        self._integers = list(integers)

    def random(self):
        return self._randoms.pop(0)

    def integers(self, high):
        value = self._integers.pop(0) if self._integers else 0
        assert 0 <= value < high
        return value


class CountingUniverse:
    """
    Triangulation stand-in that only knows how many elements it has.

    Its executors change the counts by exactly the move effect and record
    the order in which they were called.
    """

    def __init__(self, timelike=0, three_one=0, two_two=0, one_three=0,
                 spacelike=0, six_two=0):
        self.timelike = timelike
        self.three_one = three_one
        self.two_two = two_two
        self.one_three = one_three
        self.spacelike = spacelike
        self.six_two = six_two
        self.calls = []


class CountingClassifier:
    def classify_simplices(self, universe):
        return (
            list(range(universe.three_one)),
            list(range(universe.two_two)),
            list(range(universe.one_three)),
        )

    def classify_edges(self, universe):
        return list(range(universe.timelike)), universe.spacelike

    def classify_vertices(self, universe):
        return list(range(universe.six_two))


def _counting_executor(move):
    from cdtsim.core import MOVE_EFFECTS

    def execute(universe, movable):
        effect = MOVE_EFFECTS[move]
        universe.timelike += effect.timelike_edges
        universe.three_one += effect.three_one_simplices // 2
        universe.one_three += effect.three_one_simplices // 2
        universe.two_two += effect.two_two_simplices
        universe.calls.append(move)
        return universe

    return execute


@pytest.fixture
def scripted_source():
    """Factory for ScriptedSource."""
    return ScriptedSource


@pytest.fixture
def counting_universe():
    """Factory for CountingUniverse."""
    return CountingUniverse


@pytest.fixture
def counting_classifier():
    return CountingClassifier()


@pytest.fixture
def counting_executors():
    """One counting executor per move type."""
    from cdtsim.core import MoveType
    return {move: _counting_executor(move) for move in MoveType}
