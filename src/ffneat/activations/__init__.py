"""
Activations Package

This package provides the activation functions available to NEAT neurons.
The set is closed: a neuron's activation is one member of the
'ActivationFunction' enum, dispatched through a table of pure functions.

Exported:
    ActivationFunction: Enumeration of the supported activation functions
    activations:        Dictionary mapping each ActivationFunction to its function
    activation_codes:   Dictionary mapping each ActivationFunction to a 3-letter code
    Individual activation functions: identity_activation, sigmoid_activation, tanh_activation
"""

from ffneat.activations.basic_activations import (
    ActivationFunction,
    activations,
    activation_codes,
    identity_activation,
    sigmoid_activation,
    tanh_activation
)

__all__ = [
    'ActivationFunction',
    'activations',
    'activation_codes',
    'identity_activation',
    'sigmoid_activation',
    'tanh_activation'
]
