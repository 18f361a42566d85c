"""Unit tests for the delta transform."""

import math

import pytest
import numpy as np
from beta_ab.core.types import Delta
from beta_ab.core.delta import (
    apply_delta,
    apply_delta_moments,
    clamp_probability,
    invert_delta,
)


class TestApplyDelta:
    """Tests for shifting a probability."""

    def test_no_delta_is_identity(self):
        """None leaves the value untouched."""
        assert apply_delta(0.37, None) == 0.37

    def test_constant_shift(self):
        """Constant delta adds its value."""
        assert apply_delta(0.3, Delta('constant', 0.1)) == pytest.approx(0.4)

    def test_relative_shift(self):
        """Relative delta scales by (1 + value)."""
        assert apply_delta(0.4, Delta('relative', 0.25)) == pytest.approx(0.5)

    def test_logit_shift(self):
        """Logit delta shifts the log-odds."""
        # logit(0.5) = 0, sigmoid(log 3) = 0.75
        assert apply_delta(0.5, Delta('logit', math.log(3))) == pytest.approx(0.75)

    def test_result_is_clamped(self):
        """Shifted values never leave [0, 1]."""
        assert apply_delta(0.95, Delta('constant', 0.1)) == 1.0
        assert apply_delta(0.05, Delta('constant', -0.1)) == 0.0
        assert apply_delta(0.8, Delta('relative', 0.5)) == 1.0

    def test_array_is_transformed_pointwise(self):
        """Arrays are shifted and clipped element by element."""
        p = np.array([0.1, 0.5, 0.95])
        result = apply_delta(p, Delta('constant', 0.1))

        assert isinstance(result, np.ndarray)
        np.testing.assert_allclose(result, [0.2, 0.6, 1.0])

    def test_logit_boundaries_do_not_raise(self):
        """logit(0) and logit(1) map back to the boundary."""
        d = Delta('logit', 0.5)
        assert apply_delta(0.0, d) == 0.0
        assert apply_delta(1.0, d) == 1.0


class TestApplyDeltaMoments:
    """Tests for shifting a (mean, variance) pair."""

    def test_constant_keeps_variance(self):
        mean, var = apply_delta_moments(0.4, 0.01, Delta('constant', 0.1))
        assert mean == pytest.approx(0.5)
        assert var == 0.01

    def test_relative_scales_variance(self):
        mean, var = apply_delta_moments(0.4, 0.01, Delta('relative', 0.1))
        assert mean == pytest.approx(0.44)
        assert var == pytest.approx(0.01 * 1.1 ** 2)

    def test_logit_shifts_mean_only(self):
        mean, var = apply_delta_moments(0.5, 0.02, Delta('logit', math.log(3)))
        assert mean == pytest.approx(0.75)
        assert var == 0.02

    def test_mean_is_clamped(self):
        mean, _ = apply_delta_moments(0.98, 0.001, Delta('constant', 0.1))
        assert mean == 1.0

    def test_no_delta(self):
        assert apply_delta_moments(0.3, 0.02, None) == (0.3, 0.02)


class TestInvertDelta:
    """Tests for delta inversion."""

    def test_constant_inverse_is_negation(self):
        assert invert_delta(Delta('constant', 0.1)) == Delta('constant', -0.1)

    def test_logit_inverse_is_negation(self):
        assert invert_delta(Delta('logit', 0.7)) == Delta('logit', -0.7)

    def test_relative_inverse_undoes_scale(self):
        """(1 + v) * (1 + inverse) == 1."""
        inv = invert_delta(Delta('relative', 0.25))
        assert inv.type == 'relative'
        assert (1 + 0.25) * (1 + inv.value) == pytest.approx(1.0)

    @pytest.mark.parametrize("delta", [
        Delta('constant', 0.1),
        Delta('constant', -0.03),
        Delta('relative', 0.1),
        Delta('relative', -0.4),
        Delta('logit', 0.8),
    ])
    def test_double_inverse_round_trip(self, delta):
        """invert(invert(d)) == d."""
        twice = invert_delta(invert_delta(delta))
        assert twice.type == delta.type
        assert twice.value == pytest.approx(delta.value, abs=1e-12)

    @pytest.mark.parametrize("delta", [
        Delta('constant', 0.1),
        Delta('relative', 0.2),
        Delta('logit', -0.5),
    ])
    def test_apply_then_inverse_is_identity(self, delta):
        """Shift forward then back returns the original probability."""
        p = 0.42
        assert apply_delta(apply_delta(p, delta), invert_delta(delta)) == pytest.approx(p)

    def test_none(self):
        assert invert_delta(None) is None


class TestClampProbability:
    def test_scalar(self):
        assert clamp_probability(-0.1) == 0.0
        assert clamp_probability(1.2) == 1.0
        assert clamp_probability(0.3) == 0.3

    def test_array(self):
        np.testing.assert_array_equal(clamp_probability(np.array([-1.0, 0.5, 2.0])), [0.0, 0.5, 1.0])
