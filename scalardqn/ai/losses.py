"""
Smooth-L1 (Huber) loss
======================

Quadratic near zero, linear for large errors, so a single outlier target
cannot blow up the gradient:

    d = prediction - target
    loss = 0.5 * d^2      if |d| < 1
           |d| - 0.5      otherwise

Both branches equal 0.5 at |d| = 1.
"""

from ..autograd import ScalarNode, absolute, multiply, subtract
from ..autograd.node import Operand


def huber_value(diff: float) -> float:
    """Plain-float smooth-L1 of an error."""
    abs_diff = abs(diff)
    return 0.5 * diff * diff if abs_diff < 1.0 else abs_diff - 0.5


def smooth_l1(prediction: Operand, target: Operand) -> ScalarNode:
    """
    Differentiable smooth-L1 between two scalars.

    The branch is chosen from the forward value of |prediction - target|.
    """
    diff = subtract(prediction, target)
    abs_diff = absolute(diff)
    if abs_diff.value < 1.0:
        return multiply(multiply(diff, diff), 0.5)
    return subtract(abs_diff, 0.5)
