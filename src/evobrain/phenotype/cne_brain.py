"""
Weight-Vector Brain Module

This module implements the brain grown from a weight-vector genotype.

Classes:
    CneBrain: Stack of hidden layers followed by a feed-forward output layer
"""

import numpy as np
from typing import Sequence, TYPE_CHECKING

from evobrain.activations          import activations
from evobrain.phenotype.brain_base import Brain
from evobrain.phenotype.cne_layers import FeedforwardLayer, Layer, layer_classes
if TYPE_CHECKING:
    from evobrain.genotype import CneGenotype

class CneBrain(Brain):
    """
    A brain made of a stack of layers.

    The input vector is fed to the first hidden layer, the output of each layer
    is fed to the next one, and the output layer produces the brain outputs.
    Recurrent hidden layers (LSTM, LSTM-lite) keep their state between calls
    to 'forward_pass()'; call 'reset_state()' at the start of every episode.

    Public Attributes:
        layers: The hidden layers followed by the output layer

    Public Methods:
        forward_pass(inputs): Process one input vector and return the output vector
        reset_state():        Zero the state of every layer
    """

    def __init__(self, genotype: 'CneGenotype'):
        """
        Build the brain from a (seeded) genotype.
        The weights are copied, so later changes to the genotype don't affect the brain.

        Parameters:
            genotype: The genotype encoding the layer weights
        """
        sizes = genotype.layer_sizes
        super().__init__(sizes[0], sizes[-1])

        activation = activations[genotype._config.activation_function]
        self.layers: list[Layer] = [layer_classes[type(gene)](gene, activation) for gene in genotype.hidden_layers]
        self.layers.append(FeedforwardLayer(genotype.output_layer, activation))

        self.reset_state()

    def forward_pass(self, inputs: Sequence[float]) -> np.ndarray:
        values = self._as_input_vector(inputs)
        for layer in self.layers:
            layer.evaluate(values)
            values = layer.values
        return np.array(values, dtype=np.float64)

    def reset_state(self) -> None:
        for layer in self.layers:
            layer.reset_state()

    @property
    def is_recurrent(self) -> bool:
        return any(not isinstance(layer, FeedforwardLayer) for layer in self.layers)
