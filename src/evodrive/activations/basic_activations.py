import numpy as np

def identity_activation(z):
    return z

def threshold_activation(z):
    # zero maps to -1
    return np.where(z > 0.0, 1.0, -1.0)[()]

def tanh_activation(z):
    return np.tanh(z)

activations = {
    "identity" : identity_activation,
    "threshold": threshold_activation,
    "tanh"     : tanh_activation
    }

def resolve_activation(activation):
    """
    Turn an activation name or function into an activation function.

    Parameters:
        activation: Either a key of 'activations' or a callable float -> float

    Returns:
        The activation function
    """
    if callable(activation):
        return activation
    try:
        return activations[activation]
    except KeyError:
        raise ValueError(f"Unknown activation function '{activation}'") from None
