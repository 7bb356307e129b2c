"""
Layered Network Module

This module implements a fixed-topology, fully connected feedforward neural
network in an object oriented manner. Every unit of the network (input nerves
and neurons alike) exposes the last value it predicted, and neurons read the
values of the units feeding into them by reference.

All weights and biases of a network can be flattened into a single vector (the
genome) and written back from one, which is what the genetic algorithm evolves.

Classes:
    Nerve:       A zero-input unit holding an externally set value
    Neuron:      A weighted-sum unit with an activation function
    NeuronLayer: An ordered group of neurons sharing one input vector
    Network:     An ordered chain of layers fed by input nerves
"""

from typing import Callable, Sequence

import graphviz  # type: ignore
import numpy as np

from evodrive.activations import resolve_activation, identity_activation

class Nerve:
    """
    A "nerve" feeds one value into a network.

    It has no inputs and no weights; its predicted value is set explicitly
    by whoever drives the network (e.g. with a sensor reading).

    Public Attributes:
        predicted_value: The value supplied to the network
        bias:            Present for interface symmetry, never used
    """

    def __init__(self, value: float = 0.0):
        self.predicted_value: float = value
        self.bias           : float = 0.0

    @property
    def inputs(self) -> tuple:
        return ()

    @property
    def weights(self) -> np.ndarray:
        return np.zeros(0)

    def predict(self) -> float:
        """Does no calculation and returns the set value."""
        return self.predicted_value

    def __repr__(self):
        return f"Nerve(value={self.predicted_value})"

class Neuron:
    """
    A computational unit in a layered network.

    The neuron computes its output as:
        activation(bias + sum_i(inputs[i].predicted_value * weights[i]))

    The number of inputs is fixed at construction. Inputs and weights can be
    replaced afterwards, but only by sequences of the same length. Weights are
    copied on assignment, inputs are shared references to other units.

    Public Attributes:
        bias:       Bias value added to the weighted input
        activation: Activation function applied to the weighted input

    Public Properties:
        inputs:          The units feeding into this neuron
        weights:         The weights of the inputs
        predicted_value: The last predicted value

    Public Methods:
        predict(): Compute, store and return a new predicted value
    """

    def __init__(self,
                 inputs    : Sequence,
                 rng       : np.random.Generator | None = None,
                 activation: str | Callable[[float], float] = identity_activation):
        """
        Initialize a neuron with random weights and bias in [-1.0, 1.0).

        Parameters:
            inputs:     The units feeding into the neuron, their count is fixed from here on
            rng:        Random generator used to draw the initial weights and bias
            activation: Activation function, or its name
        """
        rng = rng if rng is not None else np.random.default_rng()

        self._inputs         : tuple      = tuple(inputs)
        self._weights        : np.ndarray = rng.uniform(-1.0, 1.0, len(self._inputs))
        self.bias            : float      = float(rng.uniform(-1.0, 1.0))
        self.activation      : Callable   = resolve_activation(activation)
        self._predicted_value: float      = 0.0

    @property
    def inputs(self) -> tuple:
        return self._inputs

    @inputs.setter
    def inputs(self, value: Sequence):
        self._assert_input_count(len(value))
        self._inputs = tuple(value)

    @property
    def weights(self) -> np.ndarray:
        return self._weights

    @weights.setter
    def weights(self, value: Sequence[float]):
        self._assert_input_count(len(value))
        self._weights = np.array(value, dtype=np.float64)

    @property
    def predicted_value(self) -> float:
        return self._predicted_value

    def predict(self) -> float:
        """
        Calculate a new predicted value from the current input values.

        Returns:
            The new predicted value
        """
        total = self.bias
        for unit, weight in zip(self._inputs, self._weights):
            total += unit.predicted_value * weight

        self._predicted_value = float(self.activation(total))
        return self._predicted_value

    def _assert_input_count(self, count: int) -> None:
        if count != len(self._inputs):
            raise ValueError(f"Expected {len(self._inputs)} elements, got {count}")

    def __repr__(self):
        return f"Neuron(inputs={len(self._inputs)}, bias={self.bias}, weights={self._weights})"

class NeuronLayer:
    """
    An ordered group of neurons which all read the same input units.

    Public Properties:
        inputs:           The units every neuron of the layer reads from
        outputs:          The neurons of the layer
        predicted_values: The values computed by the last call to 'predict'

    Public Methods:
        predict():                        Recompute every neuron
        set_all_activation_functions(fn): Set the activation of every neuron
    """

    def __init__(self, inputs: Sequence, output_count: int, rng: np.random.Generator | None = None):
        rng = rng if rng is not None else np.random.default_rng()

        self._inputs          : tuple         = tuple(inputs)
        self._outputs         : list[Neuron]  = [Neuron(self._inputs, rng) for _ in range(output_count)]
        self._predicted_values: np.ndarray    = np.zeros(output_count)

    @property
    def inputs(self) -> tuple:
        return self._inputs

    @property
    def outputs(self) -> list[Neuron]:
        return self._outputs

    @property
    def predicted_values(self) -> np.ndarray:
        return self._predicted_values

    def predict(self) -> np.ndarray:
        """
        Recompute every neuron of the layer.

        The returned buffer is owned by the layer and overwritten in place
        on the next call.
        """
        for i, neuron in enumerate(self._outputs):
            self._predicted_values[i] = neuron.predict()
        return self._predicted_values

    def set_all_activation_functions(self, activation: str | Callable[[float], float]) -> None:
        activation = resolve_activation(activation)
        for neuron in self._outputs:
            neuron.activation = activation

class Network:
    """
    A layered feedforward neural network.

    The first layer reads from the input nerves, every further layer reads
    the neurons of the layer before it. The outputs of the network are the
    neurons of the last layer.

    The genome of a network is the concatenation of, for every layer and every
    neuron of that layer in order, the neuron's weights followed by its bias.
    Its length only depends on the architecture:
        sum over layers of (inputs_to_layer + 1) * neurons_in_layer

    Public Properties:
        inputs:           The input nerves
        outputs:          The neurons of the last layer
        layers:           All layers, the last one being the output layer
        output_layer:     The last layer
        predicted_values: The values computed by the last prediction

    Public Methods:
        set_input_values(values):         Set the values of the input nerves
        predict(values=None):             Run all layers in order
        get_all_weights():                Flatten all weights and biases into a genome
        set_all_weights(genome):          Inflate a genome into the weights and biases
        get_weight_count():               The genome length
        set_all_activation_functions(fn): Set the activation of every neuron
        visualize(view):                  Render the network with Graphviz
    """

    def __init__(self, input_count: int, *layer_sizes: int, rng: np.random.Generator | None = None):
        """
        Build the network and randomly initialize its weights and biases.

        Parameters:
            input_count: The number of input nerves
            layer_sizes: The number of neurons of each layer, one value per layer
            rng:         Random generator used to draw the initial weights and biases
        """
        if len(layer_sizes) == 0:
            raise ValueError("At least one layer has to exist for a Network")

        rng = rng if rng is not None else np.random.default_rng()

        self._inputs: list[Nerve]       = [Nerve() for _ in range(input_count)]
        self._layers: list[NeuronLayer] = []

        next_inputs = self._inputs
        for size in layer_sizes:
            layer = NeuronLayer(next_inputs, size, rng)
            self._layers.append(layer)
            next_inputs = layer.outputs

        self._predicted_values: np.ndarray = self.output_layer.predicted_values

    @property
    def inputs(self) -> list[Nerve]:
        return self._inputs

    @property
    def outputs(self) -> list[Neuron]:
        return self.output_layer.outputs

    @property
    def layers(self) -> list[NeuronLayer]:
        return self._layers

    @property
    def output_layer(self) -> NeuronLayer:
        return self._layers[-1]

    @property
    def predicted_values(self) -> np.ndarray:
        return self._predicted_values

    def set_input_values(self, values: Sequence[float]) -> None:
        if len(values) != len(self._inputs):
            raise ValueError(f"Expected {len(self._inputs)} input values, got {len(values)}")

        for nerve, value in zip(self._inputs, values):
            nerve.predicted_value = float(value)

    def predict(self, values: Sequence[float] | None = None) -> np.ndarray:
        """
        Predict new output values.

        Parameters:
            values: If given, set as the input values first

        Returns:
            The values of the output layer (a buffer owned by the network)
        """
        if values is not None:
            self.set_input_values(values)

        for layer in self._layers:
            layer.predict()

        self._predicted_values = self.output_layer.predicted_values
        return self._predicted_values

    def get_weight_count(self) -> int:
        return sum((len(layer.inputs) + 1) * len(layer.outputs) for layer in self._layers)

    def get_all_weights(self) -> np.ndarray:
        """
        Flatten all weights and biases into a genome.

        Returns:
            A new array; modifying it does not affect the network
        """
        genome = np.empty(self.get_weight_count())

        index = 0
        for layer in self._layers:
            for neuron in layer.outputs:
                count = len(neuron.weights)
                genome[index:index + count] = neuron.weights
                genome[index + count] = neuron.bias
                index += count + 1

        return genome

    def set_all_weights(self, genome: Sequence[float]) -> None:
        """
        Inflate a genome into the weights and biases of the network.

        Parameters:
            genome: A vector laid out as returned by 'get_all_weights'

        Raises:
            ValueError: if the genome length does not match 'get_weight_count';
                        the network is left unchanged
        """
        if len(genome) != self.get_weight_count():
            raise ValueError(f"Expected {self.get_weight_count()} weights, got {len(genome)}")

        genome = np.asarray(genome, dtype=np.float64)

        index = 0
        for layer in self._layers:
            for neuron in layer.outputs:
                count = len(neuron.weights)
                neuron.weights = genome[index:index + count]
                neuron.bias    = float(genome[index + count])
                index += count + 1

    def set_all_activation_functions(self, activation: str | Callable[[float], float]) -> None:
        for layer in self._layers:
            layer.set_all_activation_functions(activation)

    def visualize(self, view: bool = True) -> graphviz.Digraph:
        """
        Visualize the network using Graphviz.

        Parameters:
            view: If True, automatically open the visualization after rendering

        Returns:
            graphviz.Digraph object representing the network
        """
        dot = graphviz.Digraph()
        dot.attr(rankdir='LR')

        node_attrs = {'style': 'filled', 'shape': 'circle', 'penwidth': '0.5', 'fontsize': '5',
                      'width': '0.5', 'height': '0.5', 'fixedsize': 'true', 'color': 'black'}

        names = {}
        with dot.subgraph(name='cluster_input') as cluster:
            cluster.attr(rank='source', label='Inputs', style='invisible')
            for i, nerve in enumerate(self._inputs):
                names[id(nerve)] = f"I{i}"
                cluster.node(f"I{i}", label=f"I{i}", fillcolor='lightgrey', **node_attrs)

        last = len(self._layers) - 1
        for l, layer in enumerate(self._layers):
            with dot.subgraph(name=f'cluster_layer{l}') as cluster:
                cluster.attr(rank='same', label=f'Layer {l}', style='invisible')
                fill = 'white' if l == last else 'lightblue'
                for n, neuron in enumerate(layer.outputs):
                    names[id(neuron)] = f"L{l}N{n}"
                    cluster.node(f"L{l}N{n}", label=f"L{l}N{n}\\nbias={neuron.bias:.2f}", fillcolor=fill, **node_attrs)

        for layer in self._layers:
            for neuron in layer.outputs:
                for unit, weight in zip(neuron.inputs, neuron.weights):
                    dot.edge(names[id(unit)], names[id(neuron)], label=f"w={weight:.2f}",
                             fontsize='5', penwidth='0.5', arrowsize='0.5')

        if view:
            dot.view(cleanup=True)

        return dot

    def __repr__(self):
        sizes = ", ".join(str(len(layer.outputs)) for layer in self._layers)
        return f"Network({len(self._inputs)}, {sizes})"
