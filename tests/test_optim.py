"""
Tests for the RMSProp optimizer.

These tests verify:
    - Update rule and accumulator persistence
    - No movement without gradient signal
    - Convergence on a simple quadratic
"""

import math
import os
import sys

import pytest

sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from scalardqn.autograd import RMSProp, ScalarNode


class TestRMSPropUpdate:
    """Test the update rule."""

    def test_zero_gradient_leaves_values_unchanged(self):
        params = [ScalarNode(v) for v in (1.0, -2.0, 0.5)]
        optimizer = RMSProp(params, learning_rate=0.1)
        optimizer.step()
        assert [p.value for p in params] == [1.0, -2.0, 0.5]

    def test_single_step(self):
        p = ScalarNode(1.0)
        p.grad = 0.5
        optimizer = RMSProp([p], learning_rate=0.1)
        optimizer.step()

        v = 0.1 * 0.25
        assert optimizer.accumulators == [pytest.approx(v)]
        assert p.value == pytest.approx(1.0 - 0.1 * 0.5 / (math.sqrt(v) + 1e-8))

    def test_accumulators_persist_across_steps(self):
        p = ScalarNode(1.0)
        optimizer = RMSProp([p], learning_rate=0.1, beta=0.9)
        p.grad = 0.5
        optimizer.step()
        optimizer.step()
        assert optimizer.accumulators[0] == pytest.approx(0.9 * 0.025 + 0.1 * 0.25)

    def test_defaults(self):
        optimizer = RMSProp([ScalarNode(0.0)], learning_rate=0.01)
        assert optimizer.beta == 0.9
        assert optimizer.epsilon == 1e-8

    def test_accumulators_start_at_zero(self):
        optimizer = RMSProp([ScalarNode(0.0), ScalarNode(1.0)], learning_rate=0.01)
        assert optimizer.accumulators == [0.0, 0.0]

    def test_step_does_not_touch_gradients(self):
        p = ScalarNode(1.0)
        p.grad = 0.3
        RMSProp([p], learning_rate=0.1).step()
        assert p.grad == 0.3


class TestRMSPropValidation:
    """Test constructor checks."""

    def test_non_positive_learning_rate(self):
        with pytest.raises(ValueError):
            RMSProp([ScalarNode(0.0)], learning_rate=0.0)

    def test_beta_out_of_range(self):
        with pytest.raises(ValueError):
            RMSProp([ScalarNode(0.0)], learning_rate=0.1, beta=1.0)


class TestRMSPropTraining:
    """Test optimization behaviour."""

    def test_zero_grad(self):
        params = [ScalarNode(1.0), ScalarNode(2.0)]
        for p in params:
            p.grad = 1.0
        RMSProp(params, learning_rate=0.1).zero_grad()
        assert all(p.grad == 0.0 for p in params)

    def test_minimizes_quadratic(self):
        x = ScalarNode(3.0)
        optimizer = RMSProp([x], learning_rate=0.05)
        for _ in range(200):
            optimizer.zero_grad()
            ((x - 1) ** 2).backward()
            optimizer.step()
        assert abs(x.value - 1.0) < 0.25
