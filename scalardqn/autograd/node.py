"""
Scalar Computation Node
=======================

The primitive of the autodiff engine: a single floating point value that
remembers how it was produced.

Every arithmetic operation creates a fresh ScalarNode holding:
    - value:    the forward result
    - grad:     d(output)/d(this node), filled in by a backward pass
    - parents:  the nodes it was computed from (non-owning references)
    - op:       which local derivative rule to replay during backward

The graph built this way is a DAG. A node may feed many children (weight
sharing), in which case its gradient is the SUM of every downstream
contribution.

Example:
    >>> x = ScalarNode(2.0)
    >>> y = x * x + 3
    >>> y.backward()
    >>> x.grad
    4.0
"""

from enum import Enum
from typing import Optional, Tuple, Union


class Op(Enum):
    """Tag naming the local derivative rule a node replays during backward."""
    LEAF = 'leaf'
    ADD = 'add'
    MUL = 'mul'
    POW = 'pow'
    ABS = 'abs'
    SIGMOID = 'sigmoid'


class ScalarNode:
    """
    A differentiable scalar with recorded provenance.

    Attributes:
        value: Forward value (mutated in place by optimizers for parameters)
        grad: Accumulated gradient, 0.0 until a backward pass reaches this node
        parents: Nodes this one was derived from (empty for leaves)
        op: Local rule tag used by the backward pass
        exponent: Constant exponent, only set for Op.POW
    """

    def __init__(
        self,
        value: float,
        parents: Tuple['ScalarNode', ...] = (),
        op: Op = Op.LEAF,
        exponent: Optional[float] = None,
    ):
        self.value = float(value)
        self.grad = 0.0
        self.parents = tuple(parents)
        self.op = op
        self.exponent = exponent

    def __repr__(self) -> str:
        return f"ScalarNode(value={self.value:.6g}, grad={self.grad:.6g}, op={self.op.value})"

    @property
    def is_leaf(self) -> bool:
        return self.op is Op.LEAF

    # =========================================================================
    # OPERATOR SUGAR (delegates to scalardqn.autograd.ops)
    # =========================================================================

    def __add__(self, other: 'Operand') -> 'ScalarNode':
        from .ops import add
        return add(self, other)

    def __radd__(self, other: 'Operand') -> 'ScalarNode':
        from .ops import add
        return add(other, self)

    def __sub__(self, other: 'Operand') -> 'ScalarNode':
        from .ops import subtract
        return subtract(self, other)

    def __rsub__(self, other: 'Operand') -> 'ScalarNode':
        from .ops import subtract
        return subtract(other, self)

    def __mul__(self, other: 'Operand') -> 'ScalarNode':
        from .ops import multiply
        return multiply(self, other)

    def __rmul__(self, other: 'Operand') -> 'ScalarNode':
        from .ops import multiply
        return multiply(other, self)

    def __truediv__(self, other: 'Operand') -> 'ScalarNode':
        from .ops import divide
        return divide(self, other)

    def __rtruediv__(self, other: 'Operand') -> 'ScalarNode':
        from .ops import divide
        return divide(other, self)

    def __pow__(self, exponent: float) -> 'ScalarNode':
        from .ops import power
        return power(self, exponent)

    def __neg__(self) -> 'ScalarNode':
        from .ops import negate
        return negate(self)

    def __abs__(self) -> 'ScalarNode':
        from .ops import absolute
        return absolute(self)

    def abs(self) -> 'ScalarNode':
        return self.__abs__()

    def sigmoid(self) -> 'ScalarNode':
        from .ops import sigmoid
        return sigmoid(self)

    def backward(self) -> None:
        """Run reverse-mode differentiation with this node as the output."""
        from .engine import backward
        backward(self)


Operand = Union[ScalarNode, float, int]
