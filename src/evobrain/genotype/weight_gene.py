"""
Weight Gene Module

This module implements the genes of the weight-vector genotypes. Each gene
describes one layer of a neural network: its inputs, its outputs and the
weights in between.

Classes:
    FeedforwardGene:  Weight matrix (inputs + bias -> outputs) of a feed-forward layer
    LstmWeightId:     Column layout of the LSTM gate-parameter matrix
    LstmGene:         Feed-forward weights plus the full LSTM gate parameters
    LstmLiteWeightId: Column layout of the LSTM-lite gate-parameter matrix
    LstmLiteGene:     Feed-forward weights plus the single-gate LSTM parameters
"""

import numpy as np
from enum import IntEnum

from evobrain.errors                    import LoadError
from evobrain.genotype.weight_operators import crossover_weights, mutate_weights, randomize_weights

def _matrix_from_json(json_obj: dict, key: str) -> np.ndarray:
    """
    Parse a matrix stored as a list of rows of floats.

    Raises:
        LoadError: If the value is missing or is not a rectangular matrix of numbers
    """
    if key not in json_obj:
        raise LoadError(f"Can't load gene, missing '{key}'")
    rows = json_obj[key]
    if not isinstance(rows, list) or not all(isinstance(row, list) for row in rows):
        raise LoadError(f"Can't load gene, '{key}' must be a list of rows")
    if len({len(row) for row in rows}) > 1:
        raise LoadError(f"Can't load gene, '{key}' rows have different lengths")
    # bool is a subclass of int, but true/false are not weights
    if not all(isinstance(value, (int, float)) and not isinstance(value, bool) for row in rows for value in row):
        raise LoadError(f"Can't load gene, '{key}' holds non-numeric values")
    matrix = np.array(rows, dtype=np.float64)
    if matrix.ndim != 2:
        raise LoadError(f"Can't load gene, '{key}' must be a 2D matrix")
    return matrix

class FeedforwardGene:
    """
    A gene describing a feed-forward layer.

    The weight matrix 'w' has one row per layer input, plus a final row
    holding the biases, and one column per layer output:
        w[j][i] = weight of the connection from input j to output i
        w[-1][i] = bias of output i

    Public Attributes:
        w: Weight matrix, shape (inputs + 1, outputs)

    Public Properties:
        inputs:  Number of layer inputs (bias excluded)
        outputs: Number of layer outputs

    Public Methods:
        randomize(rng, weight_range):                         Replace every weight with a fresh random value
        mutate(std_dev, rng):                                 Perturb every weight
        crossover(parent1, parent2, preference, rng, operator): Set the weights by combining two parents
        to_dict():                                            Convert gene to a JSON compatible dictionary

    Class Methods:
        from_dict(json_obj, inputs, outputs): Create a gene from a dictionary, validating its shape
    """

    def __init__(self, inputs: int = 0, outputs: int = 0):
        """
        Initialize a gene with all weights set to zero.

        Parameters:
            inputs:  number of layer inputs (the bias input is added automatically)
            outputs: number of layer outputs
        """
        self.w: np.ndarray = np.zeros((inputs + 1, outputs), dtype=np.float64)

    @property
    def inputs(self) -> int:
        return self.w.shape[0] - 1

    @property
    def outputs(self) -> int:
        return self.w.shape[1]

    def randomize(self, rng: np.random.Generator, weight_range: float = 1.0) -> None:
        randomize_weights(self.w, rng, weight_range)

    def mutate(self, std_dev: float, rng: np.random.Generator) -> None:
        mutate_weights(self.w, std_dev, rng)

    def crossover(self,
                  parent1   : 'FeedforwardGene',
                  parent2   : 'FeedforwardGene',
                  preference: float,
                  rng       : np.random.Generator,
                  operator  : str = 'uniform') -> None:
        """
        Set this gene's weights by combining the weights of two parents.

        Parameters:
            parent1:    the first parent gene
            parent2:    the second parent gene
            preference: how much the first parent is favored, in [0, 1]
            rng:        source of randomness
            operator:   crossover operator ("uniform" or "blend")
        """
        crossover_weights(self.w, parent1.w, parent2.w, preference, rng, operator)

    def to_dict(self) -> dict:
        return {"w": self.w.tolist()}

    @classmethod
    def from_dict(cls, json_obj: dict, inputs: int, outputs: int) -> 'FeedforwardGene':
        """
        Create a gene from a dictionary description.

        Parameters:
            json_obj: dictionary produced by 'to_dict()'
            inputs:   expected number of layer inputs
            outputs:  expected number of layer outputs

        Returns:
            A new gene holding the loaded weights

        Raises:
            LoadError: If the description is malformed or has the wrong shape
        """
        if not isinstance(json_obj, dict):
            raise LoadError("Can't load gene, expected a JSON object")
        gene = cls(inputs, outputs)
        w = _matrix_from_json(json_obj, "w")
        if w.shape != gene.w.shape:
            raise LoadError(f"Can't load gene, 'w' has shape {w.shape}, expected {gene.w.shape}")
        gene.w = w
        return gene

    def __eq__(self, other):
        if type(self) is not type(other):
            return NotImplemented
        return np.array_equal(self.w, other.w)

    __hash__ = None

    def __repr__(self):
        return f"{type(self).__name__}(inputs={self.inputs}, outputs={self.outputs})"

class LstmWeightId(IntEnum):
    """
    Columns of the LSTM gate-parameter matrix.
    For each of the input (I), forget (F), output (O) gates and for the candidate
    value (C): the weight of the layer input (W), the weight of the unit's previous
    output (U) and a bias (B).
    """
    WI = 0
    UI = 1
    BI = 2
    WF = 3
    UF = 4
    BF = 5
    WO = 6
    UO = 7
    BO = 8
    WC = 9
    UC = 10
    BC = 11

class LstmLiteWeightId(IntEnum):
    """
    Columns of the LSTM-lite gate-parameter matrix: the single gate (W, U, B)
    and the weight of the layer input for the candidate value.
    """
    WG = 0
    UG = 1
    BG = 2
    WC = 3

class _RecurrentGene(FeedforwardGene):
    """
    Feed-forward weights plus a matrix of per-output gate parameters,
    'lw', of shape (outputs, N_WEIGHTS).
    """

    N_WEIGHTS = 0

    def __init__(self, inputs: int = 0, outputs: int = 0):
        super().__init__(inputs, outputs)
        self.lw: np.ndarray = np.zeros((outputs, self.N_WEIGHTS), dtype=np.float64)

    def randomize(self, rng: np.random.Generator, weight_range: float = 1.0) -> None:
        super().randomize(rng, weight_range)
        randomize_weights(self.lw, rng, weight_range)

    def mutate(self, std_dev: float, rng: np.random.Generator) -> None:
        super().mutate(std_dev, rng)
        mutate_weights(self.lw, std_dev, rng)

    def crossover(self, parent1, parent2, preference, rng, operator='uniform') -> None:
        super().crossover(parent1, parent2, preference, rng, operator)
        crossover_weights(self.lw, parent1.lw, parent2.lw, preference, rng, operator)

    def to_dict(self) -> dict:
        json_obj = super().to_dict()
        json_obj["lw"] = self.lw.tolist()
        return json_obj

    @classmethod
    def from_dict(cls, json_obj: dict, inputs: int, outputs: int) -> '_RecurrentGene':
        gene = super().from_dict(json_obj, inputs, outputs)
        lw = _matrix_from_json(json_obj, "lw")
        if lw.shape[1] != cls.N_WEIGHTS or lw.shape[0] != gene.w.shape[1]:
            raise LoadError(f"Can't load gene, inconsistent gate weights: 'lw' has shape {lw.shape}, "
                            f"expected {(gene.w.shape[1], cls.N_WEIGHTS)}")
        gene.lw = lw
        return gene

    def __eq__(self, other):
        if type(self) is not type(other):
            return NotImplemented
        return np.array_equal(self.w, other.w) and np.array_equal(self.lw, other.lw)

    __hash__ = None

class LstmGene(_RecurrentGene):
    """
    A gene describing an LSTM layer (input, forget and output gates).
    """
    N_WEIGHTS = len(LstmWeightId)

class LstmLiteGene(_RecurrentGene):
    """
    A gene describing a drastically simplified LSTM layer: the cell value is
    the only recurrence, and a single gate controls its updates.
    """
    N_WEIGHTS = len(LstmLiteWeightId)
