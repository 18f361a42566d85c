"""Unit tests for the special-function provider."""

import asyncio
import math

import pytest
from beta_ab.core import special


class TestReadiness:
    """Tests for the one-time readiness gate."""

    def test_ensure_ready(self):
        special.ensure_ready()
        assert special.is_ready()

    def test_await_ready(self):
        asyncio.run(special.await_ready())
        assert special.is_ready()

    def test_ensure_ready_is_idempotent(self):
        special.ensure_ready()
        special.ensure_ready()
        assert special.is_ready()


class TestFunctions:
    """Spot checks against known values."""

    def test_log_gamma(self):
        assert special.log_gamma(6.0) == pytest.approx(math.log(120.0))

    def test_log_beta_matches_beta(self):
        assert special.log_beta(3.0, 4.0) == pytest.approx(math.log(special.beta_function(3.0, 4.0)))

    def test_incomplete_beta_bounds(self):
        assert special.incomplete_beta(2.0, 3.0, 0.0) == 0.0
        assert special.incomplete_beta(2.0, 3.0, 1.0) == 1.0

    def test_incomplete_beta_uniform(self):
        assert special.incomplete_beta(1.0, 1.0, 0.3) == pytest.approx(0.3)

    def test_normal_cdf(self):
        assert special.normal_cdf(0.0) == 0.5
        assert special.normal_cdf(1.959963984540054) == pytest.approx(0.975)

    def test_sigmoid_inverse(self):
        assert special.sigmoid(special.inverse_sigmoid(0.3)) == pytest.approx(0.3)
