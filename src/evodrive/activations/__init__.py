"""
Activations Package

This package provides the activation functions applied by neurons to their
weighted input sum.

Exported:
    activations:          Dictionary mapping activation function names to functions
    resolve_activation:   Turn a name (or a function) into an activation function
    identity_activation:  f(x) = x
    threshold_activation: f(x) = 1 if x > 0 else -1
    tanh_activation:      f(x) = tanh(x)
"""

from evodrive.activations.basic_activations import (
    activations,
    resolve_activation,
    identity_activation,
    threshold_activation,
    tanh_activation
)

__all__ = [
    'activations',
    'resolve_activation',
    'identity_activation',
    'threshold_activation',
    'tanh_activation'
]
