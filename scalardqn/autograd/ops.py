"""
Differentiable Operations
=========================

The fixed operator set of the engine. Each function takes ScalarNodes or
plain numbers (promoted to constant leaves), computes the forward value and
returns a NEW node tagged with the rule the backward pass will replay.
Operands are never mutated.

Primitive ops (own a backward rule in engine.py):
    add, multiply, power, absolute, sigmoid

Composite ops (built from primitives):
    negate(a)       = multiply(a, -1)
    subtract(a, b)  = add(a, negate(b))
    divide(a, b)    = multiply(a, power(b, -1))

Numerical degeneracy (0 ** -1, exp overflow) is NOT trapped: values become
inf/nan and flow through the graph like ordinary IEEE floats.
"""

from typing import Iterable

import numpy as np

from .node import Op, Operand, ScalarNode


def as_node(x: Operand) -> ScalarNode:
    """Return x unchanged if it is a node, otherwise wrap it as a constant leaf."""
    return x if isinstance(x, ScalarNode) else ScalarNode(x)


def float_power(base: float, exponent: float) -> float:
    """base ** exponent with IEEE semantics (inf/nan instead of exceptions)."""
    with np.errstate(all='ignore'):
        return float(np.power(np.float64(base), np.float64(exponent)))


def float_sigmoid(x: float) -> float:
    """Logistic function with IEEE semantics on overflow."""
    with np.errstate(all='ignore'):
        return float(1.0 / (1.0 + np.exp(-np.float64(x))))


def add(a: Operand, b: Operand) -> ScalarNode:
    a, b = as_node(a), as_node(b)
    return ScalarNode(a.value + b.value, (a, b), Op.ADD)


def multiply(a: Operand, b: Operand) -> ScalarNode:
    a, b = as_node(a), as_node(b)
    return ScalarNode(a.value * b.value, (a, b), Op.MUL)


def power(a: Operand, exponent: float) -> ScalarNode:
    """
    Raise a node to a constant real exponent.

    Args:
        a: Base
        exponent: Constant exponent (not differentiated)
    """
    a = as_node(a)
    exponent = float(exponent)
    return ScalarNode(float_power(a.value, exponent), (a,), Op.POW, exponent=exponent)


def absolute(a: Operand) -> ScalarNode:
    a = as_node(a)
    return ScalarNode(abs(a.value), (a,), Op.ABS)


def sigmoid(a: Operand) -> ScalarNode:
    a = as_node(a)
    return ScalarNode(float_sigmoid(a.value), (a,), Op.SIGMOID)


def negate(a: Operand) -> ScalarNode:
    return multiply(a, -1.0)


def subtract(a: Operand, b: Operand) -> ScalarNode:
    return add(a, negate(b))


def divide(a: Operand, b: Operand) -> ScalarNode:
    return multiply(a, power(b, -1.0))


def sum_nodes(nodes: Iterable[Operand]) -> ScalarNode:
    """
    Left fold of add() over a non-empty sequence.

    Raises:
        ValueError: If nodes is empty
    """
    iterator = iter(nodes)
    try:
        total = as_node(next(iterator))
    except StopIteration:
        raise ValueError("sum_nodes() requires at least one operand") from None
    for node in iterator:
        total = add(total, node)
    return total
