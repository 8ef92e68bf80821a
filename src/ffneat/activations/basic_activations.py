import numpy as np
from enum import Enum

def identity_activation(z):
    return z

def sigmoid_activation(z):
    z = np.clip(z, -500, 500)   # to prevent overflow when calculating exp
    return 1.0 / (1.0 + np.exp(-z))

def tanh_activation(z):
    return np.tanh(z)

class ActivationFunction(Enum):
    """
    The closed set of activation functions a neuron can carry.
    """
    IDENTITY = "identity"
    SIGMOID  = "sigmoid"
    TANH     = "tanh"

    def __call__(self, z: float) -> float:
        return float(activations[self](z))

    @classmethod
    def parse(cls, name: 'str | ActivationFunction') -> 'ActivationFunction':
        """
        Look up an activation function by name (case-insensitive).
        "none" is accepted as an alias of IDENTITY.
        """
        if isinstance(name, cls):
            return name
        key = name.strip().lower()
        if key == "none":
            key = "identity"
        for member in cls:
            if member.value == key:
                return member
        raise ValueError(f"Invalid activation function '{name}'")

activations = {
    ActivationFunction.IDENTITY: identity_activation,
    ActivationFunction.SIGMOID : sigmoid_activation,
    ActivationFunction.TANH    : tanh_activation
    }

# 3-letter identifiers for each activation function
activation_codes = {
    ActivationFunction.IDENTITY: "IDN",
    ActivationFunction.SIGMOID : "SIG",
    ActivationFunction.TANH    : "TNH"
    }
