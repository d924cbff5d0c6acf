"""Unit tests for StateCounts."""

import pytest

from cdtsim.core.errors import BookkeepingError
from cdtsim.core.moves import MoveType
from cdtsim.core.state import StateCounts


class TestStateCounts:
    """Tests for creation and derived values."""

    def test_defaults(self):
        state = StateCounts()
        assert state.as_tuple() == (0, 0, 0)
        assert state.total_simplices == 0

    def test_total_simplices(self):
        state = StateCounts(timelike_edges=10, three_one_simplices=7, two_two_simplices=5)
        assert state.total_simplices == 12

    def test_rejects_negative(self):
        with pytest.raises(ValueError):
            StateCounts(timelike_edges=-1)

    def test_copy_is_independent(self):
        state = StateCounts(1, 2, 3)
        copy = state.copy()
        state.apply_move_effect(MoveType.TWO_THREE)
        assert copy.as_tuple() == (1, 2, 3)


class TestProjection:
    """Tests for projected()."""

    def test_projection_does_not_mutate(self):
        state = StateCounts(5, 5, 5)
        assert state.projected(MoveType.TWO_SIX) == (7, 9, 5)
        assert state.as_tuple() == (5, 5, 5)

    def test_projection_may_go_negative(self):
        state = StateCounts(0, 0, 0)
        assert state.projected(MoveType.THREE_TWO) == (-1, 0, -1)
        assert not state.can_apply(MoveType.THREE_TWO)


class TestApplyMoveEffect:
    """Tests for committing a move."""

    def test_two_three(self):
        state = StateCounts(3, 4, 5)
        state.apply_move_effect(MoveType.TWO_THREE)
        assert state.as_tuple() == (4, 4, 6)

    def test_three_two(self):
        state = StateCounts(3, 4, 5)
        state.apply_move_effect(MoveType.THREE_TWO)
        assert state.as_tuple() == (2, 4, 4)

    def test_two_six(self):
        state = StateCounts(3, 4, 5)
        state.apply_move_effect(MoveType.TWO_SIX)
        assert state.as_tuple() == (5, 8, 5)

    def test_six_two(self):
        state = StateCounts(3, 4, 5)
        state.apply_move_effect(MoveType.SIX_TWO)
        assert state.as_tuple() == (1, 0, 5)

    def test_four_four(self):
        state = StateCounts(3, 4, 5)
        state.apply_move_effect(MoveType.FOUR_FOUR)
        assert state.as_tuple() == (3, 4, 5)

    def test_negative_result_is_rejected_atomically(self):
        state = StateCounts(timelike_edges=5, three_one_simplices=2, two_two_simplices=0)
        with pytest.raises(BookkeepingError):
            state.apply_move_effect(MoveType.SIX_TWO)
        assert state.as_tuple() == (5, 2, 0)

    def test_warm_up_sequence_from_empty(self):
        state = StateCounts()
        for move in (MoveType.TWO_THREE, MoveType.THREE_TWO, MoveType.TWO_SIX):
            state.apply_move_effect(move)
        assert state.as_tuple() == (2, 4, 0)
