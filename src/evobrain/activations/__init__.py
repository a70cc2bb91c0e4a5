"""
Activations Package

This package provides the activation functions used by the weight-vector layers.

Exported:
    activations: Dictionary mapping activation function names to functions
    gate_activation: Squashing function used by recurrent gates (output in [0, 1])
    Individual activation functions: identity_activation, clamped_activation,
                                     relu_activation, logistic_activation,
                                     neat_activation, tanh_activation
"""

from evobrain.activations.basic_activations import (
    activations,
    gate_activation,
    identity_activation,
    clamped_activation,
    relu_activation,
    logistic_activation,
    neat_activation,
    tanh_activation
)

__all__ = [
    'activations',
    'gate_activation',
    'identity_activation',
    'clamped_activation',
    'relu_activation',
    'logistic_activation',
    'neat_activation',
    'tanh_activation'
]
