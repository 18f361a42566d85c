"""
Confidence and Power Simulation
===============================

Validates a P(A < B) estimator end to end. Each simulated experiment draws
true conversion rates for A and B, synthesizes binomial outcomes, builds
the Beta posteriors and asks the estimator whether B beats A at the chosen
significance. Comparing those calls with the known truth gives a confusion
matrix, from which the empirical false-positive share (p-value), confidence
and power follow.

Key Concepts:
- **Ground truth positive**: Pb > delta(Pa)
- **Observed positive**: 1 - P(A < B) < significance
- **Empirical p-value**: FP / (FP + TP), should stay below significance
- **Empirical power**: TP / (TP + FN)

Example Usage:
--------------
>>> from beta_ab.simulation import experiments
>>>
>>> report = experiments.run_experiments_find_confidence_and_power(
...     n_experiments=1000,
...     n_per_experiment=100,
...     significance=0.1,
...     random_state=42,
... )
>>> print(f"Empirical p-value: {report.empirical_p_value:.3f}")
>>> print(f"Empirical power: {report.empirical_power:.1%}")
"""

import logging
from dataclasses import dataclass, asdict, field
from typing import Any, Dict, Iterable, Optional, Tuple

import numpy as np
import pandas as pd
from statsmodels.stats.proportion import proportion_confint

from beta_ab.core.delta import apply_delta
from beta_ab.core.types import BetaParams, Delta
from beta_ab.estimators.registry import ESTIMATORS, validate_comparison
from beta_ab.sampling.binomial import get_binomial_sampler

logger = logging.getLogger(__name__)

_NAN_INTERVAL = (float('nan'), float('nan'))


@dataclass
class ExperimentReport:
    """Confusion-matrix accumulator for one simulation run."""
    n_experiments: int
    n_true_positives: int = 0
    n_false_positives: int = 0
    n_true_negatives: int = 0
    n_false_negatives: int = 0
    empirical_confidence: float = 0.0
    empirical_p_value: float = 0.0
    empirical_power: float = 0.0
    # Sum of (1 - p_val) over observed positives: the false-positive mass the
    # estimator itself expects. Compare with n_false_positives.
    hypothesized_false_positives: float = 0.0
    p_value_ci: Tuple[float, float] = field(default=_NAN_INTERVAL)
    power_ci: Tuple[float, float] = field(default=_NAN_INTERVAL)

    def record(self, observed_positive: bool, truth_positive: bool, p_val: float) -> None:
        if observed_positive:
            self.hypothesized_false_positives += 1.0 - p_val
            if truth_positive:
                self.n_true_positives += 1
            else:
                self.n_false_positives += 1
        elif truth_positive:
            self.n_false_negatives += 1
        else:
            self.n_true_negatives += 1

    def finalize(self, ci_alpha: float = 0.05) -> 'ExperimentReport':
        """
        Derive the empirical rates from the four counts.

        Rates with an empty denominator (e.g. no observed positives) are NaN.
        Intervals are Wilson score intervals at level 1 - ci_alpha.
        """
        n_observed_positive = self.n_false_positives + self.n_true_positives
        n_truth_positive = self.n_true_positives + self.n_false_negatives

        self.empirical_p_value, self.p_value_ci = _rate_with_ci(
            self.n_false_positives, n_observed_positive, ci_alpha
        )
        self.empirical_confidence = 1.0 - self.empirical_p_value
        self.empirical_power, self.power_ci = _rate_with_ci(
            self.n_true_positives, n_truth_positive, ci_alpha
        )
        return self

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


def _rate_with_ci(count: int, nobs: int, ci_alpha: float) -> Tuple[float, Tuple[float, float]]:
    if nobs == 0:
        return float('nan'), _NAN_INTERVAL
    lower, upper = proportion_confint(count, nobs, alpha=ci_alpha, method='wilson')
    return count / nobs, (float(lower), float(upper))


def run_experiments_find_confidence_and_power(
    n_experiments: int,
    n_per_experiment: int,
    significance: float,
    delta: Optional[Delta] = None,
    binomial_type: str = 'optimized',
    comparison_method: Optional[str] = None,
    random_state: Optional[int] = None,
    estimator_options: Optional[Dict[str, Any]] = None,
) -> ExperimentReport:
    """
    Simulate experiments and measure the estimator's empirical confidence and power.

    Parameters
    ----------
    n_experiments : int
        Number of simulated experiments
    n_per_experiment : int
        Trials per group in each experiment
    significance : float
        Alpha; an experiment is called positive when 1 - P(A < B) < alpha
    delta : Delta, optional
        Minimum effect B must show over A to count as a true positive
    binomial_type : {'optimized', 'naive'}, default='optimized'
        Generator for the synthetic outcomes
    comparison_method : {'summation', 'integration', 'monte_carlo', 'normal_approx'}, optional
        Estimator; defaults to 'integration' with a delta, 'summation' without
    random_state : int, optional
        Random seed for reproducibility
    estimator_options : dict, optional
        Extra keywords for the estimator (e.g. {'samples': 2000})

    Returns
    -------
    ExperimentReport
        Finalized confusion matrix and empirical rates

    Raises
    ------
    ValueError
        For invalid arguments or an unsupported method/delta combination
    RuntimeError
        If the estimator returns no result for a simulated experiment

    Example
    -------
    >>> report = run_experiments_find_confidence_and_power(1000, 100, 0.1, random_state=42)
    >>> report.empirical_p_value < 0.1
    True
    """
    if n_experiments <= 0:
        raise ValueError("n_experiments must be positive")
    if n_per_experiment < 0:
        raise ValueError("n_per_experiment must be non-negative")
    if not (0 < significance < 1):
        raise ValueError("significance must be between 0 and 1")

    method = validate_comparison(comparison_method, delta)
    estimator = ESTIMATORS[method]
    binomial = get_binomial_sampler(binomial_type)
    options = dict(estimator_options or {})

    logger.debug(
        "Running %d experiments (n=%d, alpha=%s, method=%s, binomial=%s, delta=%s)",
        n_experiments, n_per_experiment, significance, method.value, binomial_type, delta,
    )

    if random_state is not None:
        np.random.seed(random_state)

    report = ExperimentReport(n_experiments=n_experiments)

    for _ in range(n_experiments):
        p_a = np.random.random()
        p_b = np.random.random()
        truth_positive = p_b > apply_delta(p_a, delta)

        successes_a = binomial(p_a, n_per_experiment)
        successes_b = binomial(p_b, n_per_experiment)
        dist_a = BetaParams.from_counts(successes_a, n_per_experiment - successes_a)
        dist_b = BetaParams.from_counts(successes_b, n_per_experiment - successes_b)

        p_val = estimator(dist_a, dist_b, delta, **options)
        if p_val is None:
            raise RuntimeError(
                f"Comparison failed for A={dist_a}, B={dist_b} with method '{method.value}'"
            )

        report.record(1.0 - p_val < significance, truth_positive, p_val)

    report.finalize()
    logger.debug(
        "TP=%d FP=%d TN=%d FN=%d p-value=%.4f power=%.4f",
        report.n_true_positives, report.n_false_positives,
        report.n_true_negatives, report.n_false_negatives,
        report.empirical_p_value, report.empirical_power,
    )
    return report


def sweep_confidence_and_power(
    alphas: Iterable[float],
    sample_sizes: Iterable[int],
    n_experiments: int,
    random_state: Optional[int] = None,
    **kwargs,
) -> pd.DataFrame:
    """
    Run the simulation over a grid of significance levels and sample sizes.

    Parameters
    ----------
    alphas : iterable of float
        Significance levels
    sample_sizes : iterable of int
        Trials per group per experiment
    n_experiments : int
        Experiments per grid cell
    random_state : int, optional
        Seed for the whole sweep (cells run sequentially from it)
    **kwargs
        Passed to ``run_experiments_find_confidence_and_power``

    Returns
    -------
    pd.DataFrame
        One row per (significance, n_per_experiment) with the report fields

    Example
    -------
    >>> df = sweep_confidence_and_power([0.1, 0.05], [20, 100], n_experiments=500)
    >>> df[['significance', 'n_per_experiment', 'empirical_p_value', 'empirical_power']]
    """
    if random_state is not None:
        np.random.seed(random_state)

    rows = []
    for alpha in alphas:
        for n_per_experiment in sample_sizes:
            report = run_experiments_find_confidence_and_power(
                n_experiments=n_experiments,
                n_per_experiment=n_per_experiment,
                significance=alpha,
                **kwargs,
            )
            rows.append({
                'significance': alpha,
                'n_per_experiment': n_per_experiment,
                **report.to_dict(),
            })

    return pd.DataFrame(rows)
