"""
Reverse-Mode Engine
===================

Computes d(output)/d(node) for every ancestor of a scalar output.

Algorithm:
    1. Depth-first post-order walk over parent links, visiting each node once.
       The resulting list has every node AFTER all of its parents.
    2. Seed output.grad = 1.
    3. Walk the list backwards (output first) and replay each node's local
       rule once, adding its contribution into its parents' gradients.

Gradients are accumulated with +=, never assigned. Nothing is zeroed here:
callers zero parameter gradients (Network.zero_grad / RMSProp.zero_grad)
before every independent backward pass.

Complexity: O(edges) for both the walk and the sweep.
"""

from typing import List

from .node import Op, ScalarNode
from .ops import float_power

# d|x|/dx is undefined at 0; the engine picks -1 there.
ABS_ZERO_SIGN = -1.0


def topological_order(output: ScalarNode) -> List[ScalarNode]:
    """
    Return every node reachable from output, parents before children.

    Uses an explicit stack so long reduction chains (minibatch sums) do not
    hit the interpreter recursion limit.
    """
    order: List[ScalarNode] = []
    visited = set()
    stack = [(output, False)]

    while stack:
        node, expanded = stack.pop()
        if expanded:
            order.append(node)
            continue
        if node in visited:
            continue
        visited.add(node)
        stack.append((node, True))
        # Reversed so parents[0] is explored first
        for parent in reversed(node.parents):
            if parent not in visited:
                stack.append((parent, False))

    return order


def _abs_sign(x: float) -> float:
    if x > 0:
        return 1.0
    if x < 0:
        return -1.0
    return ABS_ZERO_SIGN


def _apply_local_rule(node: ScalarNode) -> None:
    """Add node.grad, scaled by the local derivative, into each parent."""
    g = node.grad
    op = node.op

    if op is Op.LEAF:
        return
    elif op is Op.ADD:
        a, b = node.parents
        a.grad += g
        b.grad += g
    elif op is Op.MUL:
        a, b = node.parents
        a.grad += b.value * g
        b.grad += a.value * g
    elif op is Op.POW:
        (a,) = node.parents
        n = node.exponent
        a.grad += n * float_power(a.value, n - 1.0) * g
    elif op is Op.ABS:
        (a,) = node.parents
        a.grad += _abs_sign(a.value) * g
    elif op is Op.SIGMOID:
        (a,) = node.parents
        # Closed form reuses the forward value
        a.grad += g * node.value * (1.0 - node.value)
    else:
        raise ValueError(f"Unknown op tag: {op!r}")


def backward(output: ScalarNode) -> None:
    """
    Back-propagate from a scalar output through its whole graph.

    Args:
        output: The loss/output node; its grad is set to 1.0
    """
    order = topological_order(output)
    output.grad = 1.0
    for node in reversed(order):
        _apply_local_rule(node)
