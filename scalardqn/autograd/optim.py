"""
RMSProp Optimizer
=================

Per-parameter adaptive learning rate from a moving average of squared
gradients:

    v_i     = beta * v_i + (1 - beta) * g_i^2
    theta_i = theta_i - lr * g_i / (sqrt(v_i) + epsilon)

The optimizer is bound once to a fixed parameter list; its accumulators line
up with that list index-for-index, so it must not be reused for another
network.

Usage:
    opt = RMSProp(net.parameters(), learning_rate=0.01)
    opt.zero_grad()
    loss.backward()
    opt.step()
"""

import math
from typing import List, Sequence

from .node import ScalarNode


class RMSProp:
    """
    RMSProp over a fixed sequence of ScalarNode parameters.

    Attributes:
        learning_rate: Step size
        beta: Decay of the squared-gradient average
        epsilon: Denominator stabilizer
    """

    def __init__(
        self,
        parameters: Sequence[ScalarNode],
        learning_rate: float,
        beta: float = 0.9,
        epsilon: float = 1e-8
    ):
        if learning_rate <= 0:
            raise ValueError(f"Learning rate must be positive, got {learning_rate}")
        if not 0.0 <= beta < 1.0:
            raise ValueError(f"beta must be in [0, 1), got {beta}")
        self.parameters = list(parameters)
        self.learning_rate = learning_rate
        self.beta = beta
        self.epsilon = epsilon
        self._v = [0.0] * len(self.parameters)

    @property
    def accumulators(self) -> List[float]:
        """Copy of the squared-gradient averages."""
        return list(self._v)

    def zero_grad(self) -> None:
        for p in self.parameters:
            p.grad = 0.0

    def step(self) -> None:
        """Apply one update from the gradients left by the last backward pass."""
        for i, p in enumerate(self.parameters):
            g = p.grad
            self._v[i] = self.beta * self._v[i] + (1.0 - self.beta) * g * g
            p.value -= self.learning_rate * g / (math.sqrt(self._v[i]) + self.epsilon)
