"""
Comparison Method Registry
==========================

One contract, four strategies. Every estimator takes (A, B, delta, **options)
and returns P(A < B) in [0, 1] or None. This module names the strategies,
resolves the default, and rejects method/delta combinations that an
estimator cannot honour, before any computation starts.

Example Usage:
--------------
>>> from beta_ab.core.types import BetaParams, Delta
>>> from beta_ab.estimators import registry
>>>
>>> p = registry.estimate_prob_a_lt_b(
...     BetaParams(41, 46), BetaParams(46, 46),
...     delta=Delta('relative', 0.1), method='normal_approx'
... )
>>> registry.validate_comparison('summation', Delta('constant', 0.1))
Traceback (most recent call last):
...
ValueError: Summation method does not support delta adjustments
"""

from enum import Enum
from typing import Callable, Dict, Optional, Union

from beta_ab.core.types import BetaParams, Delta
from beta_ab.estimators.integration import integral_prob_a_lt_b
from beta_ab.estimators.monte_carlo import monte_carlo_prob_a_lt_b
from beta_ab.estimators.normal_approx import normal_approx_prob_a_lt_b
from beta_ab.estimators.summation import summation_prob_a_lt_b

Estimator = Callable[..., Optional[float]]


class ComparisonMethod(str, Enum):
    NORMAL_APPROX = 'normal_approx'
    SUMMATION = 'summation'
    INTEGRATION = 'integration'
    MONTE_CARLO = 'monte_carlo'


ESTIMATORS: Dict[ComparisonMethod, Estimator] = {
    ComparisonMethod.NORMAL_APPROX: normal_approx_prob_a_lt_b,
    ComparisonMethod.SUMMATION: summation_prob_a_lt_b,
    ComparisonMethod.INTEGRATION: integral_prob_a_lt_b,
    ComparisonMethod.MONTE_CARLO: monte_carlo_prob_a_lt_b,
}


def resolve_comparison_method(
    method: Union[str, ComparisonMethod, None],
    delta: Optional[Delta] = None,
) -> ComparisonMethod:
    """
    Turn a user-supplied method name into a ComparisonMethod.

    None picks 'integration' when a delta is given (summation cannot shift)
    and the exact 'summation' otherwise.
    """
    if method is None:
        return ComparisonMethod.INTEGRATION if delta is not None else ComparisonMethod.SUMMATION
    try:
        return ComparisonMethod(method)
    except ValueError:
        raise ValueError(
            f"comparison method must be one of {[m.value for m in ComparisonMethod]}, "
            f"got '{method}'"
        ) from None


def validate_comparison(
    method: Union[str, ComparisonMethod, None],
    delta: Optional[Delta] = None,
) -> ComparisonMethod:
    """
    Resolve the method and reject unsupported combinations.

    Raises
    ------
    ValueError
        For summation with any delta, normal approximation with a logit
        delta, or an unknown method
    """
    resolved = resolve_comparison_method(method, delta)
    if delta is None:
        return resolved
    if resolved is ComparisonMethod.SUMMATION:
        raise ValueError("Summation method does not support delta adjustments")
    if resolved is ComparisonMethod.NORMAL_APPROX and delta.type == 'logit':
        raise ValueError("Normal approximation method does not support logit delta adjustments")
    return resolved


def get_estimator(method: Union[str, ComparisonMethod]) -> Estimator:
    return ESTIMATORS[resolve_comparison_method(method)]


def estimate_prob_a_lt_b(
    A: BetaParams,
    B: BetaParams,
    delta: Optional[Delta] = None,
    method: Union[str, ComparisonMethod, None] = None,
    **options,
) -> Optional[float]:
    """
    Validate the configuration and dispatch to the chosen estimator.

    Parameters
    ----------
    A, B : BetaParams
        Distributions to compare
    delta : Delta, optional
        Shift applied to A
    method : str or ComparisonMethod, optional
        'normal_approx', 'summation', 'integration' or 'monte_carlo';
        see ``resolve_comparison_method`` for the default
    **options
        Estimator-specific keywords (``steps`` for integration; ``samples``,
        ``pairwise_method``, ``random_state`` for Monte Carlo)

    Returns
    -------
    float or None
        P(delta(A) < B), or None when the estimator has no result
    """
    resolved = validate_comparison(method, delta)
    return ESTIMATORS[resolved](A, B, delta, **options)
