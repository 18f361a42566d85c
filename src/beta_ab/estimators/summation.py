"""
Exact Summation Estimator
=========================

Closed-form P(A < B) for Beta distributions with integer shape parameters
(posteriors built from counts), as a finite sum of log-beta terms.

For integer B.a:

    P(A < B) = sum_{i=0}^{B.a - 1}
        B(A.a + i, A.b + B.b) / ((B.b + i) B(1 + i, B.b) B(A.a, A.b))

The sum runs over B.a terms. Using P(A < B) = 1 - P(B < A) and the
reflection X -> 1 - X (which swaps a and b), the same identity can be
summed over any one of the four shape parameters; the estimator picks the
smallest to keep the loop short.

Reference:
----------
- Evan Miller (2015): "Formulas for Bayesian A/B Testing"
  https://www.evanmiller.org/bayesian-ab-testing.html

Example Usage:
--------------
>>> from beta_ab.core.types import BetaParams
>>> from beta_ab.estimators.summation import summation_prob_a_lt_b
>>>
>>> A = BetaParams(51, 36)
>>> B = BetaParams(46, 41)
>>> print(f"P(A < B) = {summation_prob_a_lt_b(A, B):.4f}")
P(A < B) = 0.2213
"""

import logging
from typing import Literal, Optional

import numpy as np

from beta_ab.core.special import log_beta
from beta_ab.core.types import BetaParams, Delta

logger = logging.getLogger(__name__)

Axis = Literal['A.a', 'A.b', 'B.a', 'B.b']


def summation_prob_a_lt_b(
    A: BetaParams,
    B: BetaParams,
    delta: Optional[Delta] = None,
) -> Optional[float]:
    """
    Exact P(A < B) for integer-shaped Beta distributions.

    Parameters
    ----------
    A, B : BetaParams
        Distributions to compare
    delta : Delta, optional
        Not supported; passing one raises

    Returns
    -------
    float or None
        P(A < B), or None when any shape is not an integer or the
        computation fails

    Raises
    ------
    ValueError
        If a delta is requested
    """
    if delta is not None:
        raise ValueError("Summation method does not support delta adjustments")

    if not (A.is_integer and B.is_integer):
        return None

    try:
        return summation_via_axis(A, B, _cheapest_axis(A, B))
    except (ArithmeticError, ValueError):
        logger.warning("Summation failed for A=%s, B=%s", A, B, exc_info=True)
        return None


def summation_via_axis(A: BetaParams, B: BetaParams, axis: Axis) -> float:
    """
    P(A < B) summed over the chosen shape parameter.

    Parameters
    ----------
    A, B : BetaParams
        Integer-shaped distributions
    axis : {'A.a', 'A.b', 'B.a', 'B.b'}
        Parameter whose value sets the number of terms

    Returns
    -------
    float
        P(A < B); every axis gives the same value up to rounding
    """
    if axis == 'B.a':
        return _sum_terms(A, B)
    if axis == 'A.a':
        return 1.0 - _sum_terms(B, A)
    if axis == 'A.b':
        return _sum_terms(B.reflected(), A.reflected())
    if axis == 'B.b':
        return 1.0 - _sum_terms(A.reflected(), B.reflected())
    raise ValueError(f"axis must be one of 'A.a', 'A.b', 'B.a', 'B.b', got '{axis}'")


def _cheapest_axis(A: BetaParams, B: BetaParams) -> Axis:
    candidates = (('B.a', B.a), ('A.a', A.a), ('A.b', A.b), ('B.b', B.b))
    return min(candidates, key=lambda item: item[1])[0]


def _sum_terms(A: BetaParams, B: BetaParams) -> float:
    """P(A < B) as B.a log-space terms."""
    i = np.arange(int(B.a), dtype=float)
    log_terms = (
        log_beta(A.a + i, B.b + A.b)
        - np.log(B.b + i)
        - log_beta(1.0 + i, B.b)
        - log_beta(A.a, A.b)
    )
    total = float(np.exp(log_terms).sum())
    if not np.isfinite(total):
        raise ArithmeticError(f"non-finite summation result {total}")
    return total
