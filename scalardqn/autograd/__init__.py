"""
Autograd Module
===============

Scalar reverse-mode automatic differentiation and the small network stack
built on top of it.

Classes:
    ScalarNode - Differentiable scalar with recorded provenance
    Op         - Tag for each node's local derivative rule
    Unit       - Weighted sum + bias
    Layer      - Row of Units
    Network    - Stack of Layers with activations
    RMSProp    - Optimizer over a fixed parameter list
"""

from .node import Op, ScalarNode
from .ops import (
    absolute, add, as_node, divide, multiply, negate, power, sigmoid,
    subtract, sum_nodes,
)
from .engine import backward, topological_order
from .nn import (
    Layer, Network, Unit, constant_initializer, get_activation, identity,
    normal_initializer,
)
from .optim import RMSProp

__all__ = [
    'Op', 'ScalarNode',
    'absolute', 'add', 'as_node', 'divide', 'multiply', 'negate', 'power',
    'sigmoid', 'subtract', 'sum_nodes',
    'backward', 'topological_order',
    'Layer', 'Network', 'Unit', 'constant_initializer', 'get_activation',
    'identity', 'normal_initializer',
    'RMSProp',
]
