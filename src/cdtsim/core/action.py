"""
Bulk action of 3D causal dynamical triangulations.

The discretized Einstein-Hilbert action for a foliated triangulation depends
only on three counts and the couplings:

    S(α) = 2πk√α · N1_TL
         + N3_31 · [ -3k·asinh(1/(√3·√(4α+1)))
                     -3k√α·acos((2α+1)/(4α+1))
                     -(λ/12)·√(3α+1) ]
         + N3_22 · [  2k·asinh(2√2·√(2α+1)/(4α+1))
                     -4k√α·acos(-1/(4α+1))
                     -(λ/12)·√(4α+2) ]

where N3_31 counts (3,1) and (1,3) simplices together.

Evaluated with mpmath at the caller's working precision, so set it with
cdtsim.core.acceptance.precision() before calling.
"""

from __future__ import annotations

from mpmath import acos, asinh, mpf, pi, sqrt


def s3_bulk_action(
    timelike_edges: int,
    three_one: int,
    two_two: int,
    alpha: float,
    k: float,
    lambda_: float,
) -> mpf:
    """
    Compute the S3 bulk action.

    Args:
        timelike_edges: N1_TL
        three_one: N3_31, (3,1) plus (1,3) simplices
        two_two: N3_22
        alpha: Timelike edge length α (> 0)
        k: Gravitational coupling K
        lambda_: Cosmological coupling λ

    Returns:
        Action value as an mpf at the current working precision
    """
    if not alpha > 0:
        raise ValueError("alpha must be > 0")

    a = mpf(alpha)
    k = mpf(k)
    lam = mpf(lambda_)
    root_a = sqrt(a)

    timelike_term = 2 * pi * k * root_a

    three_one_term = (
        -3 * k * asinh(1 / (sqrt(3) * sqrt(4 * a + 1)))
        - 3 * k * root_a * acos((2 * a + 1) / (4 * a + 1))
        - lam / 12 * sqrt(3 * a + 1)
    )

    two_two_term = (
        2 * k * asinh(2 * sqrt(2) * sqrt(2 * a + 1) / (4 * a + 1))
        - 4 * k * root_a * acos(-1 / (4 * a + 1))
        - lam / 12 * sqrt(4 * a + 2)
    )

    return (
        int(timelike_edges) * timelike_term
        + int(three_one) * three_one_term
        + int(two_two) * two_two_term
    )
