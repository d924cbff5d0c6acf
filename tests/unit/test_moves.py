"""Unit tests for MoveType, move effects and MoveStatistics."""

import numpy as np
import pytest

from cdtsim.core.moves import (
    ALL_MOVES,
    MOVE_EFFECTS,
    REFERENCE_MOVES,
    MoveEffect,
    MoveStatistics,
    MoveType,
)


class TestMoveType:
    """Tests for the move enumeration."""

    def test_five_moves_indexed_from_zero(self):
        assert [move.value for move in MoveType] == [0, 1, 2, 3, 4]
        assert ALL_MOVES == tuple(MoveType)

    def test_labels(self):
        assert MoveType.TWO_THREE.label == "(2,3)"
        assert MoveType.SIX_TWO.label == "(6,2)"
        assert MoveType.FOUR_FOUR.label == "(4,4)"

    def test_reference_subset(self):
        assert REFERENCE_MOVES == (MoveType.TWO_THREE, MoveType.THREE_TWO, MoveType.TWO_SIX)


class TestMoveEffects:
    """Tests for the move effect table."""

    def test_every_move_has_an_effect(self):
        assert set(MOVE_EFFECTS) == set(MoveType)

    def test_two_three(self):
        assert MOVE_EFFECTS[MoveType.TWO_THREE] == MoveEffect(1, 0, 1)

    def test_two_six(self):
        assert MOVE_EFFECTS[MoveType.TWO_SIX] == MoveEffect(2, 4, 0)

    def test_four_four_is_neutral(self):
        assert MOVE_EFFECTS[MoveType.FOUR_FOUR] == MoveEffect(0, 0, 0)

    @pytest.mark.parametrize("move, inverse", [
        (MoveType.TWO_THREE, MoveType.THREE_TWO),
        (MoveType.TWO_SIX, MoveType.SIX_TWO),
    ])
    def test_complementary_moves_cancel(self, move, inverse):
        forward = np.array(MOVE_EFFECTS[move])
        backward = np.array(MOVE_EFFECTS[inverse])
        assert np.all(forward + backward == 0)


class TestMoveStatistics:
    """Tests for attempted/successful counters."""

    def test_starts_at_zero(self):
        stats = MoveStatistics()
        assert stats.total_attempted == 0
        assert stats.total_successful == 0
        assert stats.attempted.shape == (5,)

    def test_record_attempt_and_success(self):
        stats = MoveStatistics()
        stats.record_attempt(MoveType.TWO_SIX)
        stats.record_attempt(MoveType.TWO_SIX)
        stats.record_success(MoveType.TWO_SIX)

        assert stats.attempted_count(MoveType.TWO_SIX) == 2
        assert stats.successful_count(MoveType.TWO_SIX) == 1
        assert stats.attempted_count(MoveType.TWO_THREE) == 0

    def test_total_attempted_sums_all_five(self):
        stats = MoveStatistics(attempted=[1, 2, 3, 4, 5])
        assert stats.total_attempted == 15

    def test_acceptance_rate(self):
        stats = MoveStatistics(attempted=[4, 0, 0, 0, 0], successful=[1, 0, 0, 0, 0])
        assert stats.acceptance_rate(MoveType.TWO_THREE) == 0.25
        assert stats.acceptance_rate(MoveType.THREE_TWO) == 0.0

    def test_copy_is_independent(self):
        stats = MoveStatistics()
        snapshot = stats.copy()
        stats.record_attempt(MoveType.FOUR_FOUR)
        assert snapshot.total_attempted == 0
        assert stats.total_attempted == 1

    def test_constructor_copies_arrays(self):
        attempted = np.array([1, 1, 1, 1, 1])
        stats = MoveStatistics(attempted=attempted)
        stats.record_attempt(MoveType.TWO_THREE)
        assert attempted[0] == 1

    def test_rejects_negative_counters(self):
        with pytest.raises(ValueError):
            MoveStatistics(attempted=[0, -1, 0, 0, 0])

    def test_rejects_wrong_shape(self):
        with pytest.raises(ValueError):
            MoveStatistics(successful=[0, 0, 0])

    def test_as_dict_keyed_by_label(self):
        stats = MoveStatistics(attempted=[3, 0, 0, 0, 0], successful=[2, 0, 0, 0, 0])
        assert stats.as_dict()["(2,3)"] == {"attempted": 3, "successful": 2}
