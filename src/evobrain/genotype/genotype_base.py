"""
Genotype Base Module

This module defines the abstract base class shared by all genotype encodings,
together with the record of a genotype's ancestry.

Classes:
    GenotypeKind: Enumeration of the supported encodings
    Genealogy:    How a genotype was created (genetic operator and parents)
    Genotype:     Abstract base class for all genotype encodings
"""

import copy
import numpy as np
from abc         import ABC, abstractmethod
from dataclasses import dataclass, field
from enum        import Enum
from typing      import Optional, TYPE_CHECKING

from evobrain.run.config import Config
if TYPE_CHECKING:
    from evobrain.phenotype import Brain
    from evobrain.run       import Domain

class GenotypeKind(Enum):
    """
    The closed set of genotype encodings (values match the configuration names).
    """
    CGP         = "cgp"
    FEEDFORWARD = "feedforward"
    LSTM        = "lstm"
    LSTM_LITE   = "lstm_lite"

@dataclass
class Genealogy:
    """
    The origin of a genotype.

    Attributes:
        genetic_operator: "" (unknown), "p" (primordial seed), "e" (elite copy),
                          "em" (mutated elite copy) or "c" (crossover child)
        parents:          ranking positions of the parents in the previous generation
    """
    genetic_operator: str       = ""
    parents         : list[int] = field(default_factory=list)

class Genotype(ABC):
    """
    Abstract base class for genotype encodings.

    A genotype is the evolvable representation of a brain. It is created empty
    (no genes) and becomes usable only after 'create_primordial_seed()' or
    'load()' populate it. The brain is obtained from the genotype through a
    one-way transformation, 'grow()'.

    Gene counts derive from the configuration and from the arity of the domain,
    so they are the same for all the genotypes of a population run.

    Public Attributes:
        fitness:   Fitness score (None until evaluated)
        genealogy: How this genotype was created

    Public Properties:
        is_empty: Whether the genotype holds no genes

    Public Methods (must be implemented by subclasses):
        create_primordial_seed(rng):                   Populate with random genes
        grow():                                        Build the brain encoded by this genotype
        mutate(...):                                   Stochastically mutate the genes
        crossover(parent1, parent2, preference, rng):  Set the genes by combining two parents
        save():                                        Convert to a JSON compatible dictionary
        load(json_obj):                                Replace the genes with the ones described by a dictionary
        reset():                                       Return to the empty state

    Public Methods:
        clone(): Create a deep copy of this genotype
    """

    kind: GenotypeKind = None

    def __init__(self, config: Config, domain: 'Domain'):
        """
        Initialize an empty genotype.

        Parameters:
            config: Stores configuration parameters
            domain: The domain whose brains this genotype encodes
        """
        self._config   : Config          = config
        self._domain   : 'Domain'        = domain
        self.fitness   : Optional[float] = None
        self.genealogy : Genealogy       = Genealogy()

    @property
    @abstractmethod
    def is_empty(self) -> bool:
        pass

    @abstractmethod
    def create_primordial_seed(self, rng: np.random.Generator | None = None) -> None:
        """
        Populate the genotype with random genes (first generation).

        Parameters:
            rng: source of randomness (a fresh generator if None)
        """
        pass

    @abstractmethod
    def grow(self) -> 'Brain':
        """
        Build the brain encoded by this genotype.
        The genotype is not modified, and it's a fatal error to grow an empty genotype.
        """
        pass

    @abstractmethod
    def mutate(self, *args, rng: np.random.Generator | None = None, **kwargs) -> None:
        """
        Stochastically mutate the genes.
        When called without mutation parameters, the configured ones are used.
        """
        pass

    @abstractmethod
    def crossover(self,
                  parent1   : 'Genotype',
                  parent2   : 'Genotype',
                  preference: float,
                  rng       : np.random.Generator | None = None) -> None:
        """
        Replace the genes of this genotype by combining the genes of two parents.

        Parameters:
            parent1:    the first parent
            parent2:    the second parent
            preference: how much the first parent is favored, in [0, 1]
            rng:        source of randomness (a fresh generator if None)
        """
        pass

    @abstractmethod
    def save(self) -> dict:
        pass

    @abstractmethod
    def load(self, json_obj: dict) -> None:
        """
        Replace the genes with the ones described by 'json_obj'.

        The description is fully validated before it's applied:
        on failure the genotype is left unchanged.

        Raises:
            LoadError: If the description is malformed
        """
        pass

    def reset(self) -> None:
        """
        Return the genotype to the empty state.
        Subclasses should call super().reset() and then clear their genes.
        """
        self.fitness   = None
        self.genealogy = Genealogy()

    def clone(self) -> 'Genotype':
        """
        Create a deep copy of this genotype.
        The configuration and the domain are shared, not copied.
        """
        memo = {id(self._config): self._config, id(self._domain): self._domain}
        return copy.deepcopy(self, memo)

    @staticmethod
    def _make_rng(rng: np.random.Generator | None) -> np.random.Generator:
        # Never fall back on a generator shared between callers
        return rng if rng is not None else np.random.default_rng()

    def __eq__(self, other):
        if type(self) is not type(other):
            return NotImplemented
        return self._genes_equal(other)

    __hash__ = None

    @abstractmethod
    def _genes_equal(self, other: 'Genotype') -> bool:
        pass
