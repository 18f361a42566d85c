"""P(A < B) estimators sharing one (A, B, delta, **options) contract."""

from beta_ab.estimators import (
    integration,
    monte_carlo,
    normal_approx,
    pairwise,
    registry,
    summation,
)

__all__ = [
    "integration",
    "monte_carlo",
    "normal_approx",
    "pairwise",
    "registry",
    "summation",
]
