"""
Delta Transform
===============

Applies a hypothesized shift (constant, relative or logit) to a probability,
to an array of sampled probabilities, or to the (mean, variance) pair of a
moment-matched Beta distribution, and inverts a shift so that comparing
A < B under ``delta`` can be rewritten as comparing B < A under
``invert_delta(delta)``.

Example Usage:
--------------
>>> from beta_ab.core.types import Delta
>>> from beta_ab.core.delta import apply_delta, invert_delta
>>>
>>> d = Delta('relative', 0.25)
>>> apply_delta(0.4, d)
0.5
"""

from typing import Optional, Tuple

import numpy as np

from beta_ab.core.special import sigmoid, inverse_sigmoid
from beta_ab.core.types import Delta


def clamp_probability(p):
    """Clamp a probability (or array of them) into [0, 1]."""
    if isinstance(p, np.ndarray):
        return np.clip(p, 0.0, 1.0)
    return min(1.0, max(0.0, float(p)))


def _shift(p, delta: Delta):
    if delta.type == 'constant':
        return p + delta.value
    if delta.type == 'relative':
        return p * (1 + delta.value)
    if delta.type == 'logit':
        return sigmoid(inverse_sigmoid(p) + delta.value)
    raise ValueError(f"Unknown delta type: {delta.type}")


def apply_delta(p, delta: Optional[Delta]):
    """
    Shift a probability by ``delta`` and clamp the result into [0, 1].

    Parameters
    ----------
    p : float or np.ndarray
        Probability value(s); arrays are transformed pointwise
    delta : Delta, optional
        Shift to apply; None returns ``p`` unchanged

    Returns
    -------
    float or np.ndarray
        Shifted probability, same kind as ``p``
    """
    if delta is None:
        return p
    return clamp_probability(_shift(p, delta))


def apply_delta_moments(
    mean: float,
    variance: float,
    delta: Optional[Delta],
) -> Tuple[float, float]:
    """
    Shift the (mean, variance) pair of a distribution by ``delta``.

    Notes
    -----
    - constant: mean + v, variance unchanged
    - relative: mean * (1+v), variance * (1+v)^2
    - logit: mean through the logit shift, variance unchanged. This is an
      approximation since the logistic map is nonlinear.
    """
    if delta is None:
        return mean, variance

    adjusted_variance = variance
    if delta.type == 'relative':
        adjusted_variance = variance * (1 + delta.value) ** 2
    adjusted_mean = clamp_probability(_shift(mean, delta))

    return adjusted_mean, adjusted_variance


def invert_delta(delta: Optional[Delta]) -> Optional[Delta]:
    """
    Algebraic inverse of a shift.

    - constant: -v
    - relative: 1/(1+v) - 1, so that the two scale factors multiply to 1
    - logit: -v
    """
    if delta is None:
        return None
    if delta.type == 'relative':
        return Delta('relative', 1 / (1 + delta.value) - 1)
    if delta.type in ('constant', 'logit'):
        return Delta(delta.type, -delta.value)
    raise ValueError(f"Unknown delta type: {delta.type}")
