"""
Value Types
===========

Containers passed between the delta transform, the estimators and the
experiment harness.

Example Usage:
--------------
>>> from beta_ab.core.types import BetaParams, Delta
>>>
>>> # Posterior after 50 conversions out of 85 visitors (uniform prior)
>>> A = BetaParams.from_counts(successes=50, failures=35)
>>> A
BetaParams(a=51.0, b=36.0)
>>> delta = Delta('relative', 0.1)  # "B beats A by at least 10%"
"""

from dataclasses import dataclass
from typing import Optional, Literal

DeltaType = Literal['constant', 'relative', 'logit']
DELTA_TYPES = ('constant', 'relative', 'logit')


@dataclass(frozen=True)
class BetaParams:
    """Shape parameters (a, b) of a Beta distribution."""
    a: float
    b: float

    def __post_init__(self):
        if not (self.a > 0 and self.b > 0):
            raise ValueError(
                f"Beta shape parameters must be positive, got a={self.a}, b={self.b}"
            )

    @classmethod
    def from_counts(
        cls,
        successes: int,
        failures: int,
        prior_alpha: float = 1.0,
        prior_beta: float = 1.0,
    ) -> 'BetaParams':
        """
        Conjugate posterior Beta(prior_alpha + successes, prior_beta + failures).

        Parameters
        ----------
        successes : int
            Number of observed successes
        failures : int
            Number of observed failures
        prior_alpha, prior_beta : float, default=1.0
            Beta prior (1, 1 = uniform)

        Returns
        -------
        BetaParams
            Posterior shape parameters
        """
        if successes < 0 or failures < 0:
            raise ValueError("Number of successes and failures must be non-negative")
        return cls(float(prior_alpha + successes), float(prior_beta + failures))

    @property
    def mean(self) -> float:
        return self.a / (self.a + self.b)

    @property
    def variance(self) -> float:
        total = self.a + self.b
        return (self.a * self.b) / (total ** 2 * (total + 1))

    @property
    def is_integer(self) -> bool:
        """True when both shapes are whole numbers (posterior counts)."""
        return float(self.a).is_integer() and float(self.b).is_integer()

    def reflected(self) -> 'BetaParams':
        """Distribution of 1 - X for X ~ Beta(a, b)."""
        return BetaParams(self.b, self.a)


@dataclass(frozen=True)
class Delta:
    """
    Hypothesized shift applied to A before comparing it with B.

    - constant: p + value
    - relative: p * (1 + value)
    - logit: sigmoid(logit(p) + value)
    """
    type: DeltaType
    value: float

    def __post_init__(self):
        if self.type not in DELTA_TYPES:
            raise ValueError(
                f"delta type must be one of {list(DELTA_TYPES)}, got '{self.type}'"
            )
        if self.type == 'relative' and not self.value > -1:
            raise ValueError("relative delta value must be greater than -1")


@dataclass(frozen=True)
class IntegrationParams:
    """Request for the numerical integration estimator."""
    A: BetaParams
    B: BetaParams
    delta: Optional[Delta] = None
    steps: Optional[int] = None
