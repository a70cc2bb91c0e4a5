"""
Generation Factory Module

This module implements the builder which accumulates the genotypes of the
next generation while a selection algorithm runs.

Classes:
    GenotypeFactory:   Creates the genotype of a single population slot
    GenerationFactory: Holds one GenotypeFactory per slot of the next generation
"""

import numpy as np
from loguru import logger
from typing import TYPE_CHECKING

from evobrain.errors   import check
from evobrain.genotype import Genealogy, Genotype, create_genotype
from evobrain.run      import Config
if TYPE_CHECKING:
    from evobrain.run import Domain

class GenotypeFactory:
    """
    Creates the genotype of one slot of the next generation.

    Each slot owns its own random generator, so the genetic operators of
    different slots never share a source of randomness.

    Public Attributes:
        index:    Position of the slot in the next generation
        genotype: The genotype being created (empty until one of the creation methods is called)

    Public Methods:
        create_primordial_seed():                                 Create a random genotype
        replicate(parent, parent_index):                          Copy a parent genotype
        crossover(parent1, parent2, preference, parent_indices):  Combine two parent genotypes
        mutate():                                                 Mutate the created genotype
    """

    def __init__(self, index: int, genotype: Genotype, rng: np.random.Generator):
        self.index   : int                 = index
        self.genotype: Genotype            = genotype
        self._rng    : np.random.Generator = rng
        self._created: bool                = False

    @property
    def created(self) -> bool:
        return self._created

    def create_primordial_seed(self) -> None:
        self.genotype.create_primordial_seed(self._rng)
        self.genotype.genealogy = Genealogy("p", [])
        self._created = True

    def replicate(self, parent: Genotype, parent_index: int) -> None:
        """
        Make the genotype of this slot an exact copy of 'parent'.

        Parameters:
            parent:       the genotype to copy
            parent_index: ranking position of the parent in the previous generation
        """
        self.genotype = parent.clone()
        self.genotype.fitness   = None
        self.genotype.genealogy = Genealogy("e", [parent_index])
        self._created = True

    def crossover(self,
                  parent1       : Genotype,
                  parent2       : Genotype,
                  preference    : float,
                  parent_indices: list[int]) -> None:
        """
        Create the genotype of this slot by combining two parents.

        Parameters:
            parent1:        the first parent
            parent2:        the second parent
            preference:     how much the first parent is favored, in [0, 1]
            parent_indices: ranking positions of the parents in the previous generation
        """
        self.genotype.crossover(parent1, parent2, preference, self._rng)
        self.genotype.fitness   = None
        self.genotype.genealogy = Genealogy("c", list(parent_indices))
        self._created = True

    def mutate(self) -> None:
        """
        Apply the configured mutation to the genotype created for this slot.
        """
        check(self._created, "can't mutate a slot before its genotype is created", index=self.index)
        self.genotype.mutate(rng=self._rng)
        if self.genotype.genealogy.genetic_operator == "e":
            self.genotype.genealogy.genetic_operator = "em"

class GenerationFactory:
    """
    The builder of a new generation.

    A selection algorithm (or the initial seeding) fills every slot through its
    GenotypeFactory, then 'build()' hands over the finished genotypes.

    Public Methods:
        genotype_factory(index): The factory of one slot
        build():                 The genotypes of the new generation, in slot order
    """

    def __init__(self, config: Config, domain: 'Domain', size: int, seed_sequence: np.random.SeedSequence):
        """
        Parameters:
            config:        Stores configuration parameters
            domain:        The domain of the population
            size:          Number of slots in the new generation
            seed_sequence: Source of the per-slot random generators
        """
        check(size > 0, "generation size must be positive", size=size)
        self._factories = [GenotypeFactory(index, create_genotype(config, domain), np.random.default_rng(seed))
                           for index, seed in enumerate(seed_sequence.spawn(size))]

    def __len__(self):
        return len(self._factories)

    def genotype_factory(self, index: int) -> GenotypeFactory:
        check(0 <= index < len(self._factories), "invalid slot index", index=index, size=len(self._factories))
        return self._factories[index]

    def build(self) -> list[Genotype]:
        missing = [factory.index for factory in self._factories if not factory.created]
        check(not missing, "some slots of the new generation were not filled", missing=missing)

        operators = [factory.genotype.genealogy.genetic_operator for factory in self._factories]
        logger.debug("New generation built: {} genotypes ({})", len(self._factories),
                     ", ".join(f"{op}={operators.count(op)}" for op in sorted(set(operators))))
        return [factory.genotype for factory in self._factories]
