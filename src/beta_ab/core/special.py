"""
Special Functions
=================

Thin wrappers over ``scipy.special`` used by the samplers and estimators:
log-gamma, log-beta, the beta function, the regularized incomplete beta
(Beta CDF), the standard normal CDF and the logistic pair.

The provider is checked once per process. Synchronous callers get the check
lazily on first use; async callers can ``await await_ready()`` up front.

Example Usage:
--------------
>>> import asyncio
>>> from beta_ab.core import special
>>>
>>> asyncio.run(special.await_ready())
>>> float(special.normal_cdf(0.0))
0.5
"""

import asyncio
import logging
import math
import threading

from scipy import special as sc

logger = logging.getLogger(__name__)

_ready = False
_ready_lock = threading.Lock()


def ensure_ready() -> None:
    """
    Run the one-time self-check of the special-function provider.

    Safe to call from several threads; only the first call does work.

    Raises
    ------
    RuntimeError
        If the provider returns values that are not correct to double precision
    """
    global _ready
    if _ready:
        return
    with _ready_lock:
        if _ready:
            return
        checks = {
            'gammaln(5)': (float(sc.gammaln(5.0)), math.log(24.0)),
            'betaln(2, 3)': (float(sc.betaln(2.0, 3.0)), math.log(1.0 / 12.0)),
            'betainc(1, 1, 0.25)': (float(sc.betainc(1.0, 1.0, 0.25)), 0.25),
            'ndtr(0)': (float(sc.ndtr(0.0)), 0.5),
        }
        for name, (got, expected) in checks.items():
            if not math.isclose(got, expected, rel_tol=1e-12, abs_tol=1e-15):
                raise RuntimeError(
                    f"Special-function self-check failed: {name} = {got}, expected {expected}"
                )
        logger.debug("Special-function provider ready (scipy.special)")
        _ready = True


async def await_ready() -> None:
    """Async readiness gate; await once before issuing estimator calls."""
    await asyncio.to_thread(ensure_ready)


def is_ready() -> bool:
    return _ready


def log_gamma(x):
    ensure_ready()
    return sc.gammaln(x)


def log_beta(x, y):
    ensure_ready()
    return sc.betaln(x, y)


def beta_function(x, y):
    ensure_ready()
    return sc.beta(x, y)


def incomplete_beta(a, b, x):
    """Regularized incomplete beta I_x(a, b), i.e. the Beta(a, b) CDF at x."""
    ensure_ready()
    return sc.betainc(a, b, x)


def normal_cdf(z):
    ensure_ready()
    return sc.ndtr(z)


def sigmoid(x):
    return sc.expit(x)


def inverse_sigmoid(p):
    return sc.logit(p)


def xlogy(x, y):
    """x * log(y), defined as 0 when x == 0."""
    return sc.xlogy(x, y)


def xlog1py(x, y):
    """x * log1p(y), defined as 0 when x == 0."""
    return sc.xlog1py(x, y)
