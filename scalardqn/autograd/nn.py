"""
Feed-Forward Network on Scalar Nodes
====================================

A tiny multi-layer perceptron where every weight, bias and activation is an
individual ScalarNode. The graph is rebuilt on every forward pass; parameters
are long-lived leaves whose .value the optimizer mutates in place.

Hierarchy:
    Unit    - weighted sum of its inputs plus a bias (one output)
    Layer   - a row of Units sharing the same input width
    Network - a stack of Layers, activation applied after EVERY layer

Parameter order (stable, used for optimizer state and target sync):
    for each layer, for each unit: weights..., bias

Example:
    >>> rng = np.random.default_rng(0)
    >>> net = Network([3, 5, 5, 3], initializer=normal_initializer(rng))
    >>> q_values = net.forward([0.1, 0.5, 0.9])   # 3 ScalarNodes
    >>> len(net.parameters())
    68
"""

from typing import Callable, Dict, List, Optional, Sequence

import numpy as np

from .node import ScalarNode
from .ops import add, multiply, sigmoid, sum_nodes

Initializer = Callable[[], float]
Activation = Callable[[ScalarNode], ScalarNode]


# =============================================================================
# INITIALIZERS & ACTIVATIONS
# =============================================================================

def normal_initializer(
    rng: Optional[np.random.Generator] = None,
    mean: float = 0.0,
    std: float = 1.0
) -> Initializer:
    """
    Gaussian weight initializer backed by an explicit random source.

    Args:
        rng: numpy Generator (a fresh unseeded one if None)
        mean: Distribution mean
        std: Distribution standard deviation
    """
    rng = rng if rng is not None else np.random.default_rng()

    def _sample() -> float:
        return float(rng.normal(mean, std))
    return _sample


def constant_initializer(value: float) -> Initializer:
    """Initializer returning the same value for every parameter."""
    def _constant() -> float:
        return float(value)
    return _constant


def identity(x: ScalarNode) -> ScalarNode:
    return x


_ACTIVATIONS: Dict[str, Activation] = {
    'sigmoid': sigmoid,
    'identity': identity,
}


def get_activation(name: str) -> Activation:
    """
    Look up an activation function by name.

    Raises:
        ValueError: For names outside the supported set
    """
    try:
        return _ACTIVATIONS[name]
    except KeyError:
        raise ValueError(
            f"Unknown activation '{name}'. Options: {sorted(_ACTIVATIONS)}"
        ) from None


def _check_width(owner: str, expected: int, actual: int) -> None:
    if expected != actual:
        raise ValueError(f"{owner} expected {expected} inputs, got {actual}")


# =============================================================================
# MODULES
# =============================================================================

class Unit:
    """
    Single neuron: sum_i(w_i * x_i) + b.

    Attributes:
        weights: One ScalarNode per input
        bias: Bias ScalarNode
    """

    def __init__(self, input_width: int, initializer: Initializer):
        if input_width < 1:
            raise ValueError(f"Unit input width must be positive, got {input_width}")
        self.input_width = input_width
        self.weights = [ScalarNode(initializer()) for _ in range(input_width)]
        self.bias = ScalarNode(initializer())

    def forward(self, inputs: Sequence[ScalarNode]) -> ScalarNode:
        _check_width('Unit', self.input_width, len(inputs))
        weighted = sum_nodes(multiply(w, x) for w, x in zip(self.weights, inputs))
        return add(weighted, self.bias)

    __call__ = forward

    def parameters(self) -> List[ScalarNode]:
        return self.weights + [self.bias]


class Layer:
    """A row of Units, each computed independently on the same inputs."""

    def __init__(self, input_width: int, output_width: int, initializer: Initializer):
        if output_width < 1:
            raise ValueError(f"Layer needs at least one unit, got {output_width}")
        self.input_width = input_width
        self.units = [Unit(input_width, initializer) for _ in range(output_width)]

    @classmethod
    def from_units(cls, units: Sequence[Unit]) -> 'Layer':
        """
        Assemble a layer from pre-built units.

        Raises:
            ValueError: If units is empty or their input widths differ
        """
        if not units:
            raise ValueError("Layer needs at least one unit, got 0")
        width = units[0].input_width
        for unit in units[1:]:
            _check_width('Layer unit', width, unit.input_width)
        layer = cls.__new__(cls)
        layer.input_width = width
        layer.units = list(units)
        return layer

    @property
    def output_width(self) -> int:
        return len(self.units)

    def forward(self, inputs: Sequence[ScalarNode]) -> List[ScalarNode]:
        _check_width('Layer', self.input_width, len(inputs))
        return [unit.forward(inputs) for unit in self.units]

    __call__ = forward

    def parameters(self) -> List[ScalarNode]:
        return [p for unit in self.units for p in unit.parameters()]


class Network:
    """
    Multi-layer perceptron with an activation after every layer.

    The output layer is activated too (sigmoid by default), so Q-value
    estimates live in (0, 1) with the default activation.

    Attributes:
        layers: Ordered layers; layer i's width feeds layer i+1
        activation: Elementwise activation applied after each layer
    """

    def __init__(
        self,
        shape: Sequence[int],
        initializer: Optional[Initializer] = None,
        activation: Activation = sigmoid
    ):
        """
        Build a network from layer widths.

        Args:
            shape: [input_width, hidden..., output_width]
            initializer: Zero-arg callable producing initial parameter values
                         (standard normal if None)
            activation: Function applied to every layer output
        """
        if len(shape) < 2:
            raise ValueError(f"Network shape needs input and output widths, got {list(shape)}")
        initializer = initializer or normal_initializer()
        self.layers = [
            Layer(shape[i], shape[i + 1], initializer)
            for i in range(len(shape) - 1)
        ]
        self.activation = activation

    @classmethod
    def from_layers(cls, layers: Sequence[Layer], activation: Activation = sigmoid) -> 'Network':
        """
        Assemble a network from pre-built layers, checking that widths chain.

        Raises:
            ValueError: If layers is empty or layer i's output width differs
                        from layer i+1's input width
        """
        if not layers:
            raise ValueError("Network needs at least one layer")
        for i in range(len(layers) - 1):
            _check_width(f'Layer {i + 1}', layers[i + 1].input_width, layers[i].output_width)
        net = cls.__new__(cls)
        net.layers = list(layers)
        net.activation = activation
        return net

    @property
    def shape(self) -> List[int]:
        return [self.layers[0].input_width] + [layer.output_width for layer in self.layers]

    @property
    def input_width(self) -> int:
        return self.layers[0].input_width

    @property
    def output_width(self) -> int:
        return self.layers[-1].output_width

    def forward(self, inputs: Sequence[float]) -> List[ScalarNode]:
        """
        Run the network on plain numbers.

        Each input is wrapped in a fresh leaf, so gradients w.r.t. the inputs
        are available on the returned graph as well.

        Raises:
            ValueError: If len(inputs) differs from the input width
        """
        _check_width('Network', self.input_width, len(inputs))
        x = [ScalarNode(v) for v in inputs]
        for layer in self.layers:
            x = [self.activation(out) for out in layer.forward(x)]
        return x

    __call__ = forward

    def parameters(self) -> List[ScalarNode]:
        return [p for layer in self.layers for p in layer.parameters()]

    @property
    def num_parameters(self) -> int:
        return sum(len(layer.parameters()) for layer in self.layers)

    def zero_grad(self) -> None:
        for p in self.parameters():
            p.grad = 0.0

    def state_values(self) -> List[float]:
        """Snapshot of parameter values in parameters() order."""
        return [p.value for p in self.parameters()]

    def load_state_values(self, values: Sequence[float]) -> None:
        """
        Overwrite parameter values in place (nodes are kept, not replaced).

        Raises:
            ValueError: If the number of values differs from num_parameters
        """
        params = self.parameters()
        if len(values) != len(params):
            raise ValueError(
                f"Expected {len(params)} parameter values, got {len(values)}"
            )
        for p, v in zip(params, values):
            p.value = float(v)
