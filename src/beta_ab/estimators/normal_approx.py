"""
Normal Approximation Estimator
==============================

Moment-matches each Beta distribution to a Gaussian and evaluates

    P(A < B) ~ Phi((mean_B - mean_A') / sqrt(var_A' + var_B))

where (mean_A', var_A') are A's moments after the delta shift. Accurate
once both posteriors hold a few dozen observations; cheap enough for the
large simulation sweeps.

Logit shifts are rejected: they have no closed-form effect on a Gaussian's
variance.

Example Usage:
--------------
>>> from beta_ab.core.types import BetaParams
>>> from beta_ab.estimators.normal_approx import normal_approx_prob_a_lt_b
>>>
>>> p = normal_approx_prob_a_lt_b(BetaParams(51, 36), BetaParams(46, 41))
>>> print(f"P(A < B) ~ {p:.4f}")
"""

import logging
from typing import Optional

import numpy as np

from beta_ab.core.delta import apply_delta_moments
from beta_ab.core.special import normal_cdf
from beta_ab.core.types import BetaParams, Delta

logger = logging.getLogger(__name__)


def normal_approx_prob_a_lt_b(
    A: BetaParams,
    B: BetaParams,
    delta: Optional[Delta] = None,
) -> Optional[float]:
    """
    Gaussian approximation of P(delta(A) < B).

    Parameters
    ----------
    A, B : BetaParams
        Distributions to compare
    delta : Delta, optional
        Constant or relative shift applied to A

    Returns
    -------
    float or None
        Approximate probability, or None if it cannot be evaluated

    Raises
    ------
    ValueError
        If a logit delta is requested
    """
    if delta is not None and delta.type == 'logit':
        raise ValueError("Normal approximation method does not support logit delta adjustments")

    try:
        mean_a, variance_a = apply_delta_moments(A.mean, A.variance, delta)
        mean_diff = B.mean - mean_a
        combined_sd = np.sqrt(variance_a + B.variance)
        result = float(normal_cdf(mean_diff / combined_sd))
    except (ArithmeticError, ValueError):
        logger.warning("Normal approximation failed for A=%s, B=%s", A, B, exc_info=True)
        return None

    if np.isnan(result):
        logger.warning("Normal approximation produced NaN for A=%s, B=%s", A, B)
        return None
    return result
