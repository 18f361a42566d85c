"""Unit tests for the Monte Carlo estimator."""

import logging

import pytest
import numpy as np
from beta_ab.core.types import BetaParams, Delta
from beta_ab.estimators import monte_carlo
from beta_ab.estimators.monte_carlo import monte_carlo_prob_a_lt_b
from beta_ab.estimators.summation import summation_prob_a_lt_b


A = BetaParams(51, 36)
B = BetaParams(46, 41)


class TestMonteCarloValue:
    def test_close_to_exact(self):
        """400k draws land within a few standard errors of the exact value."""
        p = monte_carlo_prob_a_lt_b(A, B, samples=400_000, random_state=42)
        assert p == pytest.approx(summation_prob_a_lt_b(A, B), abs=0.003)

    def test_relative_delta(self):
        p = monte_carlo_prob_a_lt_b(
            BetaParams(41, 46), BetaParams(46, 46),
            delta=Delta('relative', 0.1), samples=200_000, random_state=7,
        )
        assert p == pytest.approx(0.408, abs=0.005)

    def test_in_unit_interval(self):
        p = monte_carlo_prob_a_lt_b(BetaParams(1, 1), BetaParams(2, 9), samples=1000, random_state=0)
        assert 0.0 <= p <= 1.0

    def test_delta_clamped_to_unit_interval(self):
        """A shift that pushes every sample past 1 leaves nothing below B."""
        p = monte_carlo_prob_a_lt_b(
            BetaParams(90, 10), BetaParams(2, 2),
            delta=Delta('constant', 2.0), samples=1000, random_state=0,
        )
        assert p == 0.0


class TestMonteCarloReproducibility:
    def test_same_seed_same_result(self):
        first = monte_carlo_prob_a_lt_b(A, B, samples=5000, random_state=123)
        second = monte_carlo_prob_a_lt_b(A, B, samples=5000, random_state=123)
        assert first == second

    def test_comparators_agree_on_same_draws(self):
        """Naive and Mann-Whitney compute the same statistic of the same samples."""
        naive = monte_carlo_prob_a_lt_b(A, B, samples=2000, pairwise_method='naive', random_state=5)
        sweep = monte_carlo_prob_a_lt_b(A, B, samples=2000, pairwise_method='mann_whitney', random_state=5)
        assert naive == sweep


class TestMonteCarloInputs:
    def test_invalid_samples(self):
        with pytest.raises(ValueError, match="samples must be positive"):
            monte_carlo_prob_a_lt_b(A, B, samples=0)

    def test_invalid_pairwise_method(self):
        with pytest.raises(ValueError, match="pairwise_method must be one of"):
            monte_carlo_prob_a_lt_b(A, B, pairwise_method='bubble')

    def test_failure_returns_none(self, monkeypatch, caplog):
        def broken_sample(a, b, size=None):
            raise FloatingPointError("overflow")

        monkeypatch.setattr(monte_carlo, 'beta_sample', broken_sample)
        with caplog.at_level(logging.WARNING):
            assert monte_carlo_prob_a_lt_b(A, B, samples=10) is None
        assert "Monte Carlo estimate failed" in caplog.text
