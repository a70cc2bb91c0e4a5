"""
Brain Base Module

This module defines the abstract base class for brains: the executable
phenotypes grown from genotypes.

Classes:
    Brain: Abstract base class defining the brain interface
"""

import numpy as np
from abc    import ABC, abstractmethod
from typing import Sequence

class Brain(ABC):
    """
    Abstract base class for brain implementations.

    A brain maps an input vector to an output vector. Its structure is fixed at
    construction (it is grown from a genotype and never changes afterwards);
    recurrent brains additionally carry runtime state which persists across
    calls to 'forward_pass()' until 'reset_state()' is invoked.

    Brains never share mutable state, so distinct brains can be evaluated concurrently.

    Public Properties:
        num_inputs:  Length of the input vector
        num_outputs: Length of the output vector

    Public Methods:
        forward_pass(inputs): Process one input vector and return the output vector
        reset_state():        Clear the runtime state (start of a new episode)
    """

    def __init__(self, num_inputs: int, num_outputs: int):
        self._num_inputs  = num_inputs
        self._num_outputs = num_outputs

    @property
    def num_inputs(self) -> int:
        return self._num_inputs

    @property
    def num_outputs(self) -> int:
        return self._num_outputs

    @abstractmethod
    def forward_pass(self, inputs: Sequence[float]) -> np.ndarray:
        """
        Process one input vector.

        Parameters:
            inputs: The input values, one per domain input

        Returns:
            The output values, one per domain output
        """
        pass

    def reset_state(self) -> None:
        """
        Clear the runtime state. Stateless brains have nothing to clear.
        """
        pass

    def _as_input_vector(self, inputs: Sequence[float]) -> np.ndarray:
        """
        Convert the inputs to a 1D float array, checking their number.

        Raises:
            ValueError: If the number of inputs is wrong
        """
        x = np.asarray(inputs, dtype=np.float64).reshape(-1)
        if x.shape[0] != self._num_inputs:
            raise ValueError(f"Expected {self._num_inputs} inputs, got {x.shape[0]}")
        return x
