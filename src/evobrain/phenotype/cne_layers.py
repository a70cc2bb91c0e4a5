"""
Weight-Vector Layers Module

This module implements the layers that make up the brains grown from
weight-vector genotypes. Each layer is built from one gene; its weights are
copied from the gene, and the runtime state is owned by the layer.

All layers compute the affine projection of their inputs first:
    v[i] = sum_j w[j][i] * x[j] + w[bias][i]
then apply their own transfer rule to v.

Classes:
    Layer:            Abstract base class for layers
    FeedforwardLayer: values = activate(v)
    LstmLayer:        Full LSTM cell (input, forget and output gates)
    LstmLiteLayer:    Single-gate LSTM cell
"""

import numpy as np
from abc    import ABC, abstractmethod
from typing import Callable

from evobrain.activations          import gate_activation
from evobrain.errors               import check
from evobrain.genotype.weight_gene import (FeedforwardGene, LstmGene, LstmLiteGene,
                                           LstmWeightId, LstmLiteWeightId)

class Layer(ABC):
    """
    Abstract base class for a layer.

    Public Attributes:
        values: The layer outputs computed by the last call to 'evaluate()'

    Public Methods:
        evaluate(inputs): Compute the layer outputs
        reset_state():    Zero the runtime state
    """

    def __init__(self, gene: FeedforwardGene, activation: Callable):
        self.w: np.ndarray = gene.w.copy()
        self._activation   = activation
        self.values        = np.zeros(gene.outputs, dtype=np.float64)

    def _project(self, inputs: np.ndarray) -> np.ndarray:
        # the last row of 'w' holds the biases
        return inputs @ self.w[:-1] + self.w[-1]

    @abstractmethod
    def evaluate(self, inputs: np.ndarray) -> None:
        pass

    def reset_state(self) -> None:
        self.values[:] = 0.0

class FeedforwardLayer(Layer):
    """
    A stateless fully connected layer.
    """

    def evaluate(self, inputs: np.ndarray) -> None:
        self.values = self._activation(self._project(inputs))

class LstmLayer(Layer):
    """
    A layer of LSTM units.

    For each unit, using its previous output 'prev' as the recurrent input:
        candidate = activate(Wc * v + Uc * prev + Bc)
        i, f, o   = gate(W * v + U * prev + B)        (for the input, forget, output gates)
        cell      = f * cell + i * candidate
        value     = o * activate(cell)
    """

    def __init__(self, gene: LstmGene, activation: Callable):
        super().__init__(gene, activation)
        self.lw: np.ndarray = gene.lw.copy()
        check(self.lw.shape == (gene.outputs, len(LstmWeightId)), "inconsistent LSTM weights", shape=self.lw.shape)
        self.cells = np.zeros(gene.outputs, dtype=np.float64)

    def evaluate(self, inputs: np.ndarray) -> None:
        v    = self._project(inputs)
        prev = self.values
        lw   = self.lw
        Id   = LstmWeightId

        cand_c = self._activation(lw[:, Id.WC] * v + lw[:, Id.UC] * prev + lw[:, Id.BC])
        i_gate = gate_activation (lw[:, Id.WI] * v + lw[:, Id.UI] * prev + lw[:, Id.BI])
        f_gate = gate_activation (lw[:, Id.WF] * v + lw[:, Id.UF] * prev + lw[:, Id.BF])
        o_gate = gate_activation (lw[:, Id.WO] * v + lw[:, Id.UO] * prev + lw[:, Id.BO])

        self.cells  = f_gate * self.cells + i_gate * cand_c
        self.values = o_gate * self._activation(self.cells)

    def reset_state(self) -> None:
        super().reset_state()
        self.cells[:] = 0.0

class LstmLiteLayer(Layer):
    """
    A layer of simplified LSTM units: the cell value is the only recurrence,
    and a single gate controls how much of the candidate is blended into it.
        gate      = gate(Wg * v + Ug * prev + Bg)
        candidate = activate(Wc * v)
        cell      = (1 - gate) * cell + gate * candidate
        value     = cell
    """

    def __init__(self, gene: LstmLiteGene, activation: Callable):
        super().__init__(gene, activation)
        self.lw: np.ndarray = gene.lw.copy()
        check(self.lw.shape == (gene.outputs, len(LstmLiteWeightId)), "inconsistent LSTM-lite weights",
              shape=self.lw.shape)
        self.cells = np.zeros(gene.outputs, dtype=np.float64)

    def evaluate(self, inputs: np.ndarray) -> None:
        v    = self._project(inputs)
        prev = self.values
        lw   = self.lw
        Id   = LstmLiteWeightId

        gate   = gate_activation(lw[:, Id.WG] * v + lw[:, Id.UG] * prev + lw[:, Id.BG])
        cand_c = self._activation(lw[:, Id.WC] * v)

        self.cells  = (1.0 - gate) * self.cells + gate * cand_c
        self.values = self.cells.copy()

    def reset_state(self) -> None:
        super().reset_state()
        self.cells[:] = 0.0

# The layer type matching each gene type
layer_classes = {
    FeedforwardGene: FeedforwardLayer,
    LstmGene       : LstmLayer,
    LstmLiteGene   : LstmLiteLayer
    }
