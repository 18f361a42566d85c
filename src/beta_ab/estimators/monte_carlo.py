"""
Monte Carlo Estimator
=====================

P(A < B) from independent Beta draws: sample both distributions, shift A's
samples by the delta, and count the pairs with a < b using one of the
pairwise comparators.

Example Usage:
--------------
>>> from beta_ab.core.types import BetaParams
>>> from beta_ab.estimators.monte_carlo import monte_carlo_prob_a_lt_b
>>>
>>> p = monte_carlo_prob_a_lt_b(
...     BetaParams(51, 36), BetaParams(46, 41),
...     samples=400_000, random_state=42
... )
>>> print(f"P(A < B) ~ {p:.3f}")
P(A < B) ~ 0.221
"""

import logging
from typing import Optional

import numpy as np

from beta_ab.constants import DEFAULT_PAIRWISE_METHOD, MONTE_CARLO_DEFAULT_SAMPLE_SIZE
from beta_ab.core.delta import apply_delta
from beta_ab.core.types import BetaParams, Delta
from beta_ab.estimators.pairwise import PAIRWISE_METHODS
from beta_ab.sampling.distributions import beta_sample

logger = logging.getLogger(__name__)


def monte_carlo_prob_a_lt_b(
    A: BetaParams,
    B: BetaParams,
    delta: Optional[Delta] = None,
    samples: int = MONTE_CARLO_DEFAULT_SAMPLE_SIZE,
    pairwise_method: str = DEFAULT_PAIRWISE_METHOD,
    random_state: Optional[int] = None,
) -> Optional[float]:
    """
    Sampling estimate of P(delta(A) < B).

    Parameters
    ----------
    A, B : BetaParams
        Distributions to compare
    delta : Delta, optional
        Shift applied to every sample of A (clamped into [0, 1])
    samples : int, default=10000
        Number of draws from each distribution
    pairwise_method : {'mann_whitney', 'naive'}, default='mann_whitney'
        Comparator for counting pairs; 'naive' is O(samples^2)
    random_state : int, optional
        Random seed for reproducibility

    Returns
    -------
    float or None
        Fraction of sample pairs with a < b, or None if sampling fails

    Notes
    -----
    - Standard error is roughly sqrt(p(1-p) / samples); 400k samples keep it
      under 0.001
    """
    if samples <= 0:
        raise ValueError("samples must be positive")
    if pairwise_method not in PAIRWISE_METHODS:
        raise ValueError(
            f"pairwise_method must be one of {list(PAIRWISE_METHODS)}, got '{pairwise_method}'"
        )
    compare = PAIRWISE_METHODS[pairwise_method]

    if random_state is not None:
        np.random.seed(random_state)

    try:
        samples_a = beta_sample(A.a, A.b, size=samples)
        samples_b = beta_sample(B.a, B.b, size=samples)
        samples_a = apply_delta(samples_a, delta)
        return compare(samples_a, samples_b)
    except (ArithmeticError, ValueError):
        logger.warning("Monte Carlo estimate failed for A=%s, B=%s", A, B, exc_info=True)
        return None
