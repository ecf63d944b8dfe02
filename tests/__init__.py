"""
Tests for Scalar DQN
====================

Run all tests:
    pytest tests/

Run with coverage:
    pytest tests/ --cov=scalardqn --cov-report=html
"""
