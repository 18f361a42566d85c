"""Unit tests for the numerical integration estimator."""

import logging

import pytest
import numpy as np
from beta_ab.core.types import BetaParams, Delta, IntegrationParams
from beta_ab.estimators import integration
from beta_ab.estimators.integration import (
    compute_integral,
    integral_prob_a_lt_b,
    peak_and_width,
    steps_schema,
)
from beta_ab.estimators.summation import summation_prob_a_lt_b


class TestIntegralValue:
    """Tests for the value of P(A < B)."""

    def test_matches_summation(self):
        A, B = BetaParams(51, 36), BetaParams(46, 41)
        assert integral_prob_a_lt_b(A, B) == pytest.approx(summation_prob_a_lt_b(A, B), abs=1e-3)

    def test_skewed_posteriors_match_summation(self):
        A, B = BetaParams(3, 40), BetaParams(9, 35)
        assert integral_prob_a_lt_b(A, B) == pytest.approx(summation_prob_a_lt_b(A, B), abs=1e-3)

    def test_symmetry(self):
        """Averaging direct and complement makes P(A<B) + P(B<A) = 1."""
        A, B = BetaParams(20, 31), BetaParams(25, 27)
        assert integral_prob_a_lt_b(A, B) + integral_prob_a_lt_b(B, A) == pytest.approx(1.0, abs=1e-9)

    def test_constant_delta(self):
        A, B = BetaParams(41, 46), BetaParams(46, 41)
        assert integral_prob_a_lt_b(A, B, delta=Delta('constant', 0.1)) == pytest.approx(0.286, abs=0.002)

    def test_delta_lowers_probability(self):
        A, B = BetaParams(41, 46), BetaParams(46, 41)
        plain = integral_prob_a_lt_b(A, B)
        shifted = integral_prob_a_lt_b(A, B, delta=Delta('relative', 0.1))
        assert shifted < plain

    def test_more_steps_converge(self):
        A, B = BetaParams(51, 36), BetaParams(46, 41)
        exact = summation_prob_a_lt_b(A, B)
        coarse = integral_prob_a_lt_b(A, B, steps=50)
        fine = integral_prob_a_lt_b(A, B, steps=5000)
        assert abs(fine - exact) <= abs(coarse - exact) + 1e-12

    def test_compute_integral_directly(self):
        """A single pass is close to the averaged estimate."""
        A, B = BetaParams(51, 36), BetaParams(46, 41)
        direct = compute_integral(IntegrationParams(A, B))
        assert direct == pytest.approx(integral_prob_a_lt_b(A, B), abs=1e-3)

    @pytest.mark.parametrize("A, B", [
        (BetaParams(1, 1000), BetaParams(1000, 1)),
        (BetaParams(1000, 1), BetaParams(1, 1000)),
        (BetaParams(1, 101), BetaParams(101, 1)),
        (BetaParams(300, 1), BetaParams(1, 300)),
    ])
    def test_separated_posteriors_stay_in_unit_interval(self, A, B):
        """Quadrature overshoot on far-apart posteriors is clamped."""
        p = integral_prob_a_lt_b(A, B)
        assert 0.0 <= p <= 1.0
        assert p == pytest.approx(summation_prob_a_lt_b(A, B), abs=0.02)

    def test_separated_posteriors_with_delta(self):
        p = integral_prob_a_lt_b(BetaParams(1, 1000), BetaParams(1000, 1), delta=Delta('constant', 0.05))
        assert 0.0 <= p <= 1.0

    def test_shape_below_one_returns_none(self, caplog):
        """The density is infinite at an endpoint when a shape is below 1."""
        with caplog.at_level(logging.WARNING):
            assert integral_prob_a_lt_b(BetaParams(0.5, 0.5), BetaParams(2, 3)) is None
        assert "Numerical integration failed" in caplog.text

    def test_invalid_steps(self):
        with pytest.raises(ValueError, match="steps must be positive"):
            integral_prob_a_lt_b(BetaParams(2, 3), BetaParams(3, 2), steps=0)

    def test_failure_returns_none(self, monkeypatch, caplog):
        def broken_pdf(a, b, x):
            raise FloatingPointError("underflow")

        monkeypatch.setattr(integration, 'beta_pdf', broken_pdf)
        with caplog.at_level(logging.WARNING):
            assert integral_prob_a_lt_b(BetaParams(2, 3), BetaParams(3, 2)) is None
        assert "Numerical integration failed" in caplog.text


class TestPeakAndWidth:
    def test_mode_and_width(self):
        peak, width = peak_and_width(BetaParams(3, 5))
        assert peak == pytest.approx(2 / 6)
        assert width == pytest.approx(4 * np.sqrt(15 / (64 * 9)))

    def test_uniform_falls_back_to_mean(self):
        peak, _ = peak_and_width(BetaParams(1, 1))
        assert peak == 0.5


def _assert_partition(schema, steps_each):
    assert len(schema) == 5
    assert schema[0][0] == 0.0
    assert schema[-1][1] == 1.0
    for (start, end, steps), (next_start, _, _) in zip(schema, schema[1:]):
        assert end == next_start
    for start, end, steps in schema:
        assert start <= end
        assert steps == steps_each
    assert sum(end - start for start, end, _ in schema) == pytest.approx(1.0)


class TestStepsSchema:
    """Partition of [0, 1] for every window layout."""

    def test_partial_overlap(self):
        schema = steps_schema(BetaParams(51, 36), BetaParams(46, 41), 1000)
        _assert_partition(schema, 200)

    def test_disjoint_a_below_b(self):
        schema = steps_schema(BetaParams(100, 900), BetaParams(900, 100), 1000)
        _assert_partition(schema, 200)
        # A's window is second, B's window fourth
        assert schema[1][1] < 0.5 < schema[3][0]

    def test_disjoint_b_below_a(self):
        schema = steps_schema(BetaParams(900, 100), BetaParams(100, 900), 1000)
        _assert_partition(schema, 200)

    def test_a_nested_in_b(self):
        schema = steps_schema(BetaParams(500, 500), BetaParams(20, 20), 500)
        _assert_partition(schema, 100)
        # B's wider window bounds the middle three sub-ranges
        assert schema[1][0] < schema[2][0] < schema[2][1] < schema[3][1]

    def test_b_nested_in_a(self):
        schema = steps_schema(BetaParams(20, 20), BetaParams(500, 500), 500)
        _assert_partition(schema, 100)

    def test_window_clamped_at_boundary(self):
        """A window reaching past 0 gives an empty first sub-range."""
        schema = steps_schema(BetaParams(1, 30), BetaParams(2, 20), 1000)
        _assert_partition(schema, 200)
        assert schema[0] == (0.0, 0.0, 200)
