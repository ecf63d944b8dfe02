"""
Pytest configuration for the test suite.

This file is automatically loaded by pytest and applies configuration
to all tests in the tests/ directory.
"""

import os
import sys

import pytest

sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))


def pytest_configure(config):
    """Configure pytest with custom markers and settings."""
    config.addinivalue_line(
        "markers", "slow: marks tests as slow (deselect with '-m \"not slow\"')"
    )


@pytest.fixture(autouse=True)
def suppress_config_warning():
    """Suppress the MAX_EPISODES=0 warning during tests.

    This warning is useful for production to remind users that training
    will run indefinitely, but it's expected behavior in tests where
    we use the default Config().
    """
    import warnings
    with warnings.catch_warnings():
        warnings.filterwarnings(
            "ignore",
            message="MAX_EPISODES is 0",
            category=UserWarning
        )
        yield


@pytest.fixture
def numeric_derivative():
    """Central finite difference of a scalar function."""
    def _derivative(f, x, h=1e-6):
        return (f(x + h) - f(x - h)) / (2 * h)
    return _derivative
