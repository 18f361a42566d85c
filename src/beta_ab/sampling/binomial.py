"""
Binomial Variate Generators
===========================

Exact Binomial(n, p) sampling for the experiment harness.

- ``optimized_binomial_sample``: inversion for n*p <= 30, BTPE (Bins,
  Triangles, Parallelogram, Exponential) rejection sampling above, with the
  p > 0.5 reflection n - X(1-p). Same dispatch as numpy's ``random_binomial``.
- ``naive_binomial_sample``: n independent Bernoulli(p) trials. Slow but
  obviously correct; used to cross-check the optimized path.

Reference:
----------
- Kachitvichyanukul & Schmeiser (1988): "Binomial Random Variate Generation",
  Communications of the ACM 31(2)

Example Usage:
--------------
>>> import numpy as np
>>> from beta_ab.sampling import binomial
>>>
>>> np.random.seed(42)
>>> draws = [binomial.optimized_binomial_sample(0.3, 1000) for _ in range(10_000)]
>>> print(f"Mean: {np.mean(draws):.1f}, Var: {np.var(draws):.1f}")  # ~300, ~210
"""

import math
from typing import Callable, Dict

import numpy as np

from beta_ab.constants import BTPE_THRESHOLD
from beta_ab.core.special import log_gamma


def naive_binomial_sample(p: float, n: int) -> int:
    """
    Count successes in n independent Bernoulli(p) trials.

    Parameters
    ----------
    p : float
        Success probability
    n : int
        Number of trials (>= 0)

    Returns
    -------
    int
        Number of successes in [0, n]
    """
    if n <= 0:
        return 0
    return int((np.random.random(n) < p).sum())


def optimized_binomial_sample(p: float, n: int) -> int:
    """
    Draw X ~ Binomial(n, p).

    Parameters
    ----------
    p : float
        Success probability; values outside [0, 1] are treated as the bound
    n : int
        Number of trials (>= 0)

    Returns
    -------
    int
        Number of successes in [0, n]

    Notes
    -----
    - p <= 0.5 is sampled directly; p > 0.5 returns n - X with X ~ Bin(n, 1-p)
    - n*p <= 30 uses inversion, larger n*p uses BTPE
    """
    n = int(n)
    if n <= 0 or p <= 0:
        return 0
    if p >= 1:
        return n

    if p <= 0.5:
        return _sample_small_p(n, p)
    return n - _sample_small_p(n, 1.0 - p)


def _sample_small_p(n: int, p: float) -> int:
    if n * p <= BTPE_THRESHOLD:
        x = _binomial_inversion(n, p)
    else:
        x = _binomial_btpe(n, p)
    return min(max(x, 0), n)


def _binomial_inversion(n: int, p: float) -> int:
    """Walk the cdf upward from 0 using the pmf ratio recurrence."""
    q = 1.0 - p
    px = math.exp(n * math.log(q))
    x = 0
    u = np.random.random()

    while u > px:
        u -= px
        x += 1
        if x > n:
            # accumulated rounding left mass uncovered
            return n
        px *= ((n - x + 1) * p) / (x * q)

    return x


def _binomial_btpe(n: int, p: float) -> int:
    """
    BTPE rejection sampler for n*p > 30 and p <= 0.5.

    The envelope has four regions with cumulative areas p1 < p2 < p3 < p4:
    a triangle centred on the mode, the parallelograms beside it, and
    exponential tails on the left and right.
    """
    q = 1.0 - p
    r = min(p, q)
    nr = n * r

    fm = nr + r
    m = math.floor(fm)
    p1 = math.floor(2.195 * math.sqrt(nr * q) - 4.6 * q) + 0.5
    xm = m + 0.5
    xl = xm - p1
    xr = xm + p1
    c = 0.134 + 20.5 / (15.3 + m)

    a = (fm - xl) / (fm - xl * r)
    lam_l = a * (1.0 + a / 2.0)
    a = (xr - fm) / (xr * q)
    lam_r = a * (1.0 + a / 2.0)

    p2 = p1 * (1.0 + 2.0 * c)
    p3 = p2 + c / lam_l
    p4 = p3 + c / lam_r

    log_odds = math.log(r / q)
    log_pmf_mode = log_gamma(m + 1) + log_gamma(n - m + 1)

    while True:
        u = np.random.random() * p4
        v = np.random.random()

        if u <= p1:
            return math.floor(xm - p1 * v + u)

        if u <= p2:
            xf = xl + (u - p1) / c
            v = v * c + 1.0 - abs(m - xf + 0.5) / p1
            if v > 1.0:
                continue
            x = math.floor(xf)
        elif v == 0.0:
            continue
        elif u <= p3:
            x = math.floor(xl + math.log(v) / lam_l)
            v = v * (u - p2) * lam_l
        else:
            x = math.floor(xr - math.log(v) / lam_r)
            v = v * (u - p3) * lam_r

        if x < 0 or x > n or v <= 0.0:
            continue
        log_ratio = (
            (x - m) * log_odds
            + log_pmf_mode
            - (log_gamma(x + 1) + log_gamma(n - x + 1))
        )
        if math.log(v) <= log_ratio:
            return x


BINOMIAL_SAMPLERS: Dict[str, Callable[[float, int], int]] = {
    'naive': naive_binomial_sample,
    'optimized': optimized_binomial_sample,
}


def get_binomial_sampler(binomial_type: str) -> Callable[[float, int], int]:
    """Look up a binomial generator by name ('naive' or 'optimized')."""
    try:
        return BINOMIAL_SAMPLERS[binomial_type]
    except KeyError:
        raise ValueError(
            f"binomial_type must be one of {list(BINOMIAL_SAMPLERS)}, got '{binomial_type}'"
        ) from None
