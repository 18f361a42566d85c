"""
beta_ab - P(A < B) for Beta Posteriors
======================================

Estimators for the probability that a draw from Beta posterior A is below
a draw from Beta posterior B, optionally after shifting A by a hypothesized
minimum effect, plus a simulation harness that checks the estimators'
empirical confidence and power.

Modules:
--------
- core: Value types, the delta transform and special functions
- sampling: Binomial, gamma and beta variate generators
- estimators: Summation, integration, Monte Carlo and normal approximation
- simulation: Confidence/power experiment harness

Example Usage:
--------------
>>> from beta_ab import BetaParams, Delta, estimate_prob_a_lt_b
>>>
>>> A = BetaParams.from_counts(successes=40, failures=45)
>>> B = BetaParams.from_counts(successes=45, failures=40)
>>>
>>> # Exact P(A < B) from the counts
>>> p = estimate_prob_a_lt_b(A, B)
>>>
>>> # Probability that B beats A by at least 10 percentage points
>>> p = estimate_prob_a_lt_b(A, B, delta=Delta('constant', 0.1), method='integration')

Version: 1.0.0
License: MIT
"""

__version__ = "1.0.0"
__license__ = "MIT"

from beta_ab.core.types import BetaParams, Delta, IntegrationParams
from beta_ab.core.delta import apply_delta, apply_delta_moments, invert_delta
from beta_ab.core.special import await_ready, ensure_ready
from beta_ab.estimators.registry import ComparisonMethod, estimate_prob_a_lt_b
from beta_ab.estimators.summation import summation_prob_a_lt_b
from beta_ab.estimators.integration import integral_prob_a_lt_b
from beta_ab.estimators.monte_carlo import monte_carlo_prob_a_lt_b
from beta_ab.estimators.normal_approx import normal_approx_prob_a_lt_b
from beta_ab.simulation.experiments import (
    ExperimentReport,
    run_experiments_find_confidence_and_power,
    sweep_confidence_and_power,
)

__all__ = [
    "BetaParams",
    "Delta",
    "IntegrationParams",
    "apply_delta",
    "apply_delta_moments",
    "invert_delta",
    "await_ready",
    "ensure_ready",
    "ComparisonMethod",
    "estimate_prob_a_lt_b",
    "summation_prob_a_lt_b",
    "integral_prob_a_lt_b",
    "monte_carlo_prob_a_lt_b",
    "normal_approx_prob_a_lt_b",
    "ExperimentReport",
    "run_experiments_find_confidence_and_power",
    "sweep_confidence_and_power",
]
