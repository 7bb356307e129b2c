"""
Phenotype Package

This package implements the executable side of evolution: layered feedforward
neural networks, and the neural driver they power.

Modules:
    network:    Nerve, Neuron, NeuronLayer and Network classes
    individual: Neural driver combining a network, a fitness and an active flag

Exported Classes:
    Nerve:       A zero-input unit holding an externally set value
    Neuron:      A weighted-sum unit with an activation function
    NeuronLayer: An ordered group of neurons sharing one input vector
    Network:     An ordered chain of layers fed by input nerves
    Individual:  A neural driver evolved by the EvolutionManager
"""

from evodrive.phenotype.network    import Nerve, Neuron, NeuronLayer, Network
from evodrive.phenotype.individual import Individual

__all__ = ['Nerve',
           'Neuron',
           'NeuronLayer',
           'Network',
           'Individual']
