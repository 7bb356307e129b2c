"""
Unit tests for the network module (Nerve, Neuron, NeuronLayer, Network classes).
"""

import pytest
import numpy as np
from evodrive.activations import identity_activation, tanh_activation, threshold_activation
from evodrive.phenotype.network import Nerve, Neuron, NeuronLayer, Network


# ============================================================================
# Test Fixtures
# ============================================================================

@pytest.fixture
def nerves():
    """Two input nerves holding 2.0 and 4.0."""
    return [Nerve(2.0), Nerve(4.0)]


@pytest.fixture
def small_network(rng):
    """Network with 3 inputs and layers [3, 2]."""
    return Network(3, 3, 2, rng=rng)


# ============================================================================
# Test Nerve
# ============================================================================

class TestNerve:

    def test_predict_returns_set_value(self):
        nerve = Nerve()
        nerve.predicted_value = 1.5
        assert nerve.predict() == 1.5

    def test_has_no_inputs_or_weights(self):
        nerve = Nerve()
        assert len(nerve.inputs) == 0
        assert len(nerve.weights) == 0


# ============================================================================
# Test Neuron
# ============================================================================

class TestNeuron:

    def test_initial_weights_and_bias_in_range(self, nerves, rng):
        for _ in range(20):
            neuron = Neuron(nerves, rng)
            assert np.all(neuron.weights >= -1.0) and np.all(neuron.weights < 1.0)
            assert -1.0 <= neuron.bias < 1.0

    def test_weight_count_matches_inputs(self, nerves, rng):
        neuron = Neuron(nerves, rng)
        assert len(neuron.weights) == len(neuron.inputs) == 2

    def test_predict_weighted_sum(self, nerves, rng):
        """2*0.5 + 4*(-0.5) + 0.1 = -0.9"""
        neuron = Neuron(nerves, rng)
        neuron.weights = [0.5, -0.5]
        neuron.bias = 0.1

        assert neuron.predict() == pytest.approx(-0.9)
        assert neuron.predicted_value == pytest.approx(-0.9)

    def test_predict_applies_activation(self, nerves, rng):
        neuron = Neuron(nerves, rng, activation='tanh')
        neuron.weights = [0.5, -0.5]
        neuron.bias = 0.1

        assert neuron.predict() == pytest.approx(np.tanh(-0.9))

    def test_predict_reads_current_input_values(self, nerves, rng):
        neuron = Neuron(nerves, rng)
        neuron.weights = [1.0, 1.0]
        neuron.bias = 0.0

        nerves[0].predicted_value = 10.0
        assert neuron.predict() == pytest.approx(14.0)

    def test_weights_assignment_copies(self, nerves, rng):
        neuron = Neuron(nerves, rng)
        weights = np.array([0.5, -0.5])
        neuron.weights = weights
        weights[0] = 99.0

        assert neuron.weights[0] == 0.5

    def test_weights_wrong_length_raises(self, nerves, rng):
        neuron = Neuron(nerves, rng)
        before = neuron.weights.copy()

        with pytest.raises(ValueError):
            neuron.weights = [1.0, 2.0, 3.0]
        np.testing.assert_array_equal(neuron.weights, before)

    def test_inputs_wrong_length_raises(self, nerves, rng):
        neuron = Neuron(nerves, rng)

        with pytest.raises(ValueError):
            neuron.inputs = [Nerve()]

    def test_inputs_same_length_replaces(self, nerves, rng):
        neuron = Neuron(nerves, rng)
        replacement = [Nerve(1.0), Nerve(1.0)]
        neuron.inputs = replacement

        assert neuron.inputs[0] is replacement[0]


# ============================================================================
# Test NeuronLayer
# ============================================================================

class TestNeuronLayer:

    def test_all_neurons_share_inputs(self, nerves, rng):
        layer = NeuronLayer(nerves, 3, rng)
        for neuron in layer.outputs:
            assert list(neuron.inputs) == nerves

    def test_predict_reuses_buffer(self, nerves, rng):
        layer = NeuronLayer(nerves, 3, rng)
        first = layer.predict()
        second = layer.predict()

        assert first is second
        assert len(first) == 3

    def test_predict_values_match_neurons(self, nerves, rng):
        layer = NeuronLayer(nerves, 3, rng)
        values = layer.predict()

        for value, neuron in zip(values, layer.outputs):
            assert value == neuron.predicted_value

    def test_set_all_activation_functions(self, nerves, rng):
        layer = NeuronLayer(nerves, 3, rng)
        layer.set_all_activation_functions('threshold')

        assert all(neuron.activation is threshold_activation for neuron in layer.outputs)
        assert set(layer.predict()) <= {-1.0, 1.0}


# ============================================================================
# Test Network
# ============================================================================

class TestNetworkInit:

    def test_zero_layers_raises(self):
        with pytest.raises(ValueError, match="At least one layer"):
            Network(3)

    def test_layers_are_chained(self, small_network):
        assert list(small_network.layers[0].inputs) == small_network.inputs
        assert list(small_network.layers[1].inputs) == small_network.layers[0].outputs
        assert small_network.outputs == small_network.layers[1].outputs

    def test_default_activation_is_identity(self, small_network):
        for layer in small_network.layers:
            assert all(neuron.activation is identity_activation for neuron in layer.outputs)


class TestNetworkWeights:

    def test_weight_count_example(self, small_network):
        """(3+1)*3 + (3+1)*2 = 20"""
        assert small_network.get_weight_count() == 20

    def test_weight_count_matches_genome_length(self, rng):
        for architecture in [(1, 1), (4, 4, 2), (5, 3, 3, 2), (0, 2)]:
            network = Network(*architecture, rng=rng)
            assert network.get_weight_count() == len(network.get_all_weights())

    def test_genome_traversal_order(self, rng):
        network = Network(2, 2, rng=rng)
        first, second = network.outputs
        first.weights, first.bias = [1.0, 2.0], 3.0
        second.weights, second.bias = [4.0, 5.0], 6.0

        np.testing.assert_array_equal(network.get_all_weights(), [1.0, 2.0, 3.0, 4.0, 5.0, 6.0])

    def test_set_all_weights_round_trip(self, small_network):
        genome = np.arange(20, dtype=np.float64)
        small_network.set_all_weights(genome)

        np.testing.assert_array_equal(small_network.get_all_weights(), genome)

    def test_set_all_weights_wrong_length_leaves_weights(self, small_network):
        before = small_network.get_all_weights()

        for length in [0, 19, 21]:
            with pytest.raises(ValueError):
                small_network.set_all_weights(np.zeros(length))

        np.testing.assert_array_equal(small_network.get_all_weights(), before)

    def test_get_all_weights_returns_copy(self, small_network):
        genome = small_network.get_all_weights()
        genome[:] = 0.0

        assert not np.all(small_network.get_all_weights() == 0.0)


class TestNetworkPredict:

    def test_single_layer_example(self, rng):
        network = Network(2, 1, rng=rng)
        network.outputs[0].weights = [0.5, -0.5]
        network.outputs[0].bias = 0.1

        result = network.predict([2.0, 4.0])
        assert result[0] == pytest.approx(-0.9)

    def test_set_input_values_wrong_length_raises(self, small_network):
        with pytest.raises(ValueError):
            small_network.set_input_values([1.0, 2.0])

    def test_predict_runs_layers_in_order(self, rng):
        network = Network(1, 1, 1, rng=rng)
        network.set_all_weights([2.0, 1.0, 3.0, -1.0])   # h = 2x + 1, y = 3h - 1

        assert network.predict([1.0])[0] == pytest.approx(8.0)
        assert network.predict([0.0])[0] == pytest.approx(2.0)

    def test_predict_without_values_uses_nerves(self, rng):
        network = Network(2, 1, rng=rng)
        network.set_all_weights([1.0, 1.0, 0.0])
        network.inputs[0].predicted_value = 1.0
        network.inputs[1].predicted_value = 2.0

        assert network.predict()[0] == pytest.approx(3.0)
        assert network.predicted_values[0] == pytest.approx(3.0)

    def test_tanh_output_bounded(self, rng):
        network = Network(3, 3, 2, rng=rng)
        network.set_all_activation_functions(tanh_activation)
        result = network.predict([100.0, -100.0, 50.0])

        assert np.all(np.abs(result) <= 1.0)


class TestNetworkVisualize:

    def test_visualize_contains_all_units(self, small_network):
        dot = small_network.visualize(view=False)
        source = dot.source

        for name in ['I0', 'I1', 'I2', 'L0N0', 'L0N2', 'L1N0', 'L1N1']:
            assert name in source
        assert source.count('->') == 3 * 3 + 3 * 2
