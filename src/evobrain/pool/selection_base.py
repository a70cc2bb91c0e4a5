"""
Selection Algorithm Base Module

Classes:
    SelectionAlgorithm: Abstract base class for selection algorithms
"""

import numpy as np
from abc    import ABC, abstractmethod
from typing import TYPE_CHECKING

from evobrain.run.config import Config
if TYPE_CHECKING:
    from evobrain.pool.generation_factory import GenerationFactory
    from evobrain.pool.population         import Population

class SelectionAlgorithm(ABC):
    """
    Abstract base class for selection algorithms.

    A selection algorithm is a stateless policy: it reads a ranked population
    and fills every slot of a GenerationFactory. It never modifies the source
    population.
    """

    def __init__(self, config: Config):
        self._config = config

    @abstractmethod
    def create_next_generation(self,
                               population     : 'Population',
                               next_generation: 'GenerationFactory',
                               rng            : np.random.Generator) -> None:
        """
        Fill every slot of 'next_generation' from the (ranked) 'population'.

        Parameters:
            population:      the current, ranked, population
            next_generation: the builder of the next generation
            rng:             source of randomness for the selection decisions
        """
        pass
