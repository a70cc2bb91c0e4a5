"""
Population Module

This module implements the Population class, the top-level orchestrator of the
evolutionary loop. The population holds the genotypes of the current
generation, records their fitness, ranks them, and replaces them with the next
generation created by a selection algorithm.

Classes:
    PopulationState: The stage a generation has reached
    Population:      Fixed-size collection of genotypes evolved generation by generation
"""

import math
import numpy as np
from enum   import Enum
from loguru import logger
from typing import Iterator, Optional, TYPE_CHECKING

from evobrain.errors                    import check
from evobrain.genotype                  import Genotype
from evobrain.pool.generation_factory   import GenerationFactory
from evobrain.pool.selection_base       import SelectionAlgorithm
from evobrain.pool.truncation_selection import TruncationSelection
from evobrain.run.config                import Config
if TYPE_CHECKING:
    from evobrain.run import Domain

class PopulationState(Enum):
    UNSCORED = "unscored"  # some genotypes have no fitness yet
    SCORED   = "scored"    # every genotype has a fitness
    RANKED   = "ranked"    # the ranking index is up to date

class Population:
    """
    A population of evolving genotypes.

    A generation goes through the following stages:
        1. the genotypes are evaluated and their fitness recorded with 'set_fitness()'
        2. the genotypes are ranked by fitness ('rank()')
        3. the selection algorithm fills the next generation ('create_next_generation()'),
           which replaces the current one

    Every random source used by the population (seeding, selection, genetic
    operators) is spawned from a single seed sequence, so evolution is
    reproducible for a fixed seed.

    Public Attributes:
        size:          Number of genotypes in every generation
        generation:    Number of the current generation (0 for the primordial one)
        genotypes:     The genotypes of the current generation
        ranking_index: Genotype indices sorted from fittest to least fit (None until ranked)
        selection:     The selection algorithm creating new generations

    Public Methods:
        create_primordial_generation(): Fill the population with random genotypes
        set_fitness(index, fitness):    Record the fitness of a genotype
        rank():                         Sort the genotypes by fitness
        create_next_generation():       Replace the genotypes by the next generation
        fittest_genotype():             The genotype with the highest fitness
        fitness_values():               The fitness of every genotype
    """

    def __init__(self,
                 config   : Config,
                 domain   : 'Domain',
                 selection: Optional[SelectionAlgorithm] = None,
                 seed     : Optional[int] = None):
        """
        Parameters:
            config:    Stores configuration parameters
            domain:    The problem the genotypes are evolved for
            selection: The selection algorithm (truncation selection if None)
            seed:      Seed of every random source (config.seed if None; OS entropy if both are None)
        """
        check(config.population_size > 0, "population size must be positive", size=config.population_size)

        self._config = config
        self._domain = domain
        self.size      : int                = config.population_size
        self.selection : SelectionAlgorithm = selection if selection is not None else TruncationSelection(config)
        self.generation: int                = 0
        self.genotypes : list[Genotype]     = []
        self.ranking_index: Optional[list[int]] = None

        self._seed_sequence = np.random.SeedSequence(seed if seed is not None else config.seed)

    def create_primordial_generation(self) -> None:
        """
        Fill the population with randomly seeded genotypes (generation 0).
        """
        factory = self._new_generation_factory()
        for index in range(self.size):
            factory.genotype_factory(index).create_primordial_seed()

        self.genotypes     = factory.build()
        self.generation    = 0
        self.ranking_index = None
        logger.info("Created primordial generation of {} {} genotypes", self.size, self._config.genotype)

    def set_fitness(self, index: int, fitness: float) -> None:
        """
        Record the fitness of the genotype at 'index'.
        Each genotype's fitness can be set only once per generation; NaN is recorded as -inf.

        Parameters:
            index:   position of the genotype in the population
            fitness: the fitness value (higher is better)
        """
        check(0 <= index < len(self.genotypes), "invalid genotype index", index=index, size=len(self.genotypes))
        genotype = self.genotypes[index]
        check(genotype.fitness is None, "fitness already set", index=index, fitness=genotype.fitness)

        fitness = float(fitness)
        if math.isnan(fitness):
            logger.warning("Genotype {} of generation {} scored NaN, recorded as -inf", index, self.generation)
            fitness = -math.inf
        genotype.fitness = fitness

    @property
    def state(self) -> PopulationState:
        if self.ranking_index is not None:
            return PopulationState.RANKED
        if self.genotypes and all(genotype.fitness is not None for genotype in self.genotypes):
            return PopulationState.SCORED
        return PopulationState.UNSCORED

    def rank(self) -> list[int]:
        """
        Sort the genotypes by decreasing fitness; ties keep their population order.

        Returns:
            The ranking index: genotype indices from fittest to least fit
        """
        check(self.state != PopulationState.UNSCORED, "can't rank a population before every fitness is set",
              unscored=[i for i, g in enumerate(self.genotypes) if g.fitness is None])

        # sorted() is stable, also when sorting in reverse order
        self.ranking_index = sorted(range(len(self.genotypes)),
                                    key=lambda i: self.genotypes[i].fitness,
                                    reverse=True)
        return self.ranking_index

    def create_next_generation(self) -> None:
        """
        Create the next generation and make it the current one.
        The population is ranked first, if it isn't already.
        """
        if self.state != PopulationState.RANKED:
            self.rank()
        self._log_statistics()

        next_generation = self._new_generation_factory()
        rng = np.random.default_rng(self._seed_sequence.spawn(1)[0])
        self.selection.create_next_generation(self, next_generation, rng)

        self.genotypes     = next_generation.build()
        self.generation   += 1
        self.ranking_index = None

    def fittest_genotype(self) -> Optional[Genotype]:
        """
        The genotype with the highest fitness, or None if no genotype has been evaluated.
        Ties go to the genotype that comes first in the population.
        """
        if self.ranking_index is not None:
            return self.genotypes[self.ranking_index[0]]

        scored = [genotype for genotype in self.genotypes if genotype.fitness is not None]
        if not scored:
            return None
        return max(scored, key=lambda genotype: genotype.fitness)

    def fitness_values(self) -> list[Optional[float]]:
        return [genotype.fitness for genotype in self.genotypes]

    def _new_generation_factory(self) -> GenerationFactory:
        return GenerationFactory(self._config, self._domain, self.size, self._seed_sequence.spawn(1)[0])

    def _log_statistics(self) -> None:
        fitness = np.array(self.fitness_values(), dtype=np.float64)
        finite  = fitness[np.isfinite(fitness)]
        if finite.size == 0:
            logger.info("Generation {}: no finite fitness values", self.generation)
            return
        logger.info("Generation {}: best {:.4f}, mean {:.4f}, worst {:.4f}",
                    self.generation, finite.max(), finite.mean(), finite.min())

    def __len__(self) -> int:
        return len(self.genotypes)

    def __iter__(self) -> Iterator[Genotype]:
        return iter(self.genotypes)

    def __getitem__(self, index: int) -> Genotype:
        return self.genotypes[index]
