"""Unit tests for the S3 bulk action."""

import math

import pytest
from mpmath import mpf

from cdtsim.core.acceptance import precision
from cdtsim.core.action import s3_bulk_action


def float_action(n1_tl, n3_31, n3_22, alpha, k, lam):
    """Reference in native floats."""
    timelike = 2 * math.pi * k * math.sqrt(alpha)
    three_one = (
        -3 * k * math.asinh(1 / (math.sqrt(3) * math.sqrt(4 * alpha + 1)))
        - 3 * k * math.sqrt(alpha) * math.acos((2 * alpha + 1) / (4 * alpha + 1))
        - lam / 12 * math.sqrt(3 * alpha + 1)
    )
    two_two = (
        2 * k * math.asinh(2 * math.sqrt(2) * math.sqrt(2 * alpha + 1) / (4 * alpha + 1))
        - 4 * k * math.sqrt(alpha) * math.acos(-1 / (4 * alpha + 1))
        - lam / 12 * math.sqrt(4 * alpha + 2)
    )
    return n1_tl * timelike + n3_31 * three_one + n3_22 * two_two


class TestBulkAction:
    """Tests for s3_bulk_action."""

    @pytest.mark.parametrize("counts, couplings", [
        ((10, 20, 30), (0.6, 1.1, 0.1)),
        ((1234, 5678, 910), (1.0, 1.0, 0.0)),
        ((0, 4, 0), (0.3, 2.5, 1.7)),
    ])
    def test_matches_float_formula(self, counts, couplings):
        with precision(256):
            value = s3_bulk_action(*counts, *couplings)
        assert float(value) == pytest.approx(float_action(*counts, *couplings), rel=1e-12)

    def test_empty_triangulation(self):
        assert s3_bulk_action(0, 0, 0, 0.6, 1.1, 0.1) == 0

    def test_linear_in_counts(self):
        with precision(256):
            single = s3_bulk_action(1, 1, 1, 0.6, 1.1, 0.1)
            triple = s3_bulk_action(3, 3, 3, 0.6, 1.1, 0.1)
            assert abs(triple - 3 * single) < mpf(2) ** -240

    def test_returns_mpf(self):
        assert isinstance(s3_bulk_action(1, 2, 3, 0.6, 1.1, 0.1), mpf)

    @pytest.mark.parametrize("alpha", [0.0, -1.0])
    def test_alpha_must_be_positive(self, alpha):
        with pytest.raises(ValueError):
            s3_bulk_action(1, 1, 1, alpha, 1.0, 0.0)

    def test_accepts_numpy_integers(self):
        import numpy as np
        with precision(256):
            assert s3_bulk_action(np.int64(5), np.int64(6), np.int64(7), 0.6, 1.1, 0.1) == \
                s3_bulk_action(5, 6, 7, 0.6, 1.1, 0.1)
