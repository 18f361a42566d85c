"""
Pairwise Comparison of Sample Sets
==================================

Two ways to compute the fraction of pairs (a, b), a from A's samples and b
from B's samples, with a < b. Both return the same exact statistic of the
data; they differ only in cost.

- ``naive_prob_a_lt_b_from_samples``: every pair, O(N_A * N_B)
- ``mann_whitney_prob_a_lt_b_from_samples``: sort + two-pointer sweep,
  O(N log N). This is the Mann-Whitney U statistic divided by N_A * N_B.

Example Usage:
--------------
>>> from beta_ab.estimators import pairwise
>>>
>>> pairwise.mann_whitney_prob_a_lt_b_from_samples([0.1, 0.5], [0.3, 0.5])
0.5
"""

from typing import Sequence

import numpy as np

from beta_ab.constants import NAIVE_PAIRWISE_BLOCK


def _validate(samples_a, samples_b):
    a = np.asarray(samples_a, dtype=float)
    b = np.asarray(samples_b, dtype=float)
    if a.size == 0 or b.size == 0:
        raise ValueError("Both sample sets must be non-empty")
    return a.ravel(), b.ravel()


def mann_whitney_prob_a_lt_b_from_samples(
    samples_a: Sequence[float],
    samples_b: Sequence[float],
) -> float:
    """
    Fraction of pairs with a < b via a merge-style sweep.

    Both sets are sorted. Whenever A[i] < B[j], A[i] is also below every
    remaining element of B, so N_B - j pairs are counted at once and i
    advances; otherwise j advances.

    Parameters
    ----------
    samples_a, samples_b : array-like
        Samples from A and from B

    Returns
    -------
    float
        count(a < b) / (N_A * N_B)
    """
    a, b = _validate(samples_a, samples_b)
    sorted_a = np.sort(a).tolist()
    sorted_b = np.sort(b).tolist()
    n_a = len(sorted_a)
    n_b = len(sorted_b)

    i = 0
    j = 0
    count = 0
    while i < n_a and j < n_b:
        if sorted_a[i] < sorted_b[j]:
            count += n_b - j
            i += 1
        else:
            j += 1

    return count / (n_a * n_b)


def naive_prob_a_lt_b_from_samples(
    samples_a: Sequence[float],
    samples_b: Sequence[float],
    block_size: int = NAIVE_PAIRWISE_BLOCK,
) -> float:
    """
    Fraction of pairs with a < b by comparing every pair.

    Rows of A are compared against all of B in blocks of ``block_size`` to
    keep the comparison matrix small. Use only for small sample sets.
    """
    a, b = _validate(samples_a, samples_b)
    count = 0
    for start in range(0, a.size, block_size):
        block = a[start:start + block_size]
        count += int(np.count_nonzero(block[:, None] < b[None, :]))
    return count / (a.size * b.size)


PAIRWISE_METHODS = {
    'naive': naive_prob_a_lt_b_from_samples,
    'mann_whitney': mann_whitney_prob_a_lt_b_from_samples,
}
