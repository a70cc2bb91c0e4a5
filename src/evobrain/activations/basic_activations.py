import numpy as np

def identity_activation(z):
    return z

def clamped_activation(z):
    return np.clip(z, -1.0, 1.0)

def relu_activation(z):
    return np.maximum(0.0, z)

def logistic_activation(z):
    z = np.clip(z, -100, 100)   # to prevent under/overflow when calculating exp
    return 1.0 / (1.0 + np.exp(-z))

def neat_activation(z):
    # steepened logistic, as used by the original NEAT
    return logistic_activation(4.924273 * z)

def tanh_activation(z):
    return np.tanh(z)

activations = {
    "identity": identity_activation,
    "clamped" : clamped_activation,
    "relu"    : relu_activation,
    "logistic": logistic_activation,
    "neat"    : neat_activation,
    "tanh"    : tanh_activation
    }

# Gates are always squashed into [0, 1]
gate_activation = logistic_activation
