"""Random variate generators used by the estimators and the harness."""

from beta_ab.sampling import binomial, distributions

__all__ = ["binomial", "distributions"]
