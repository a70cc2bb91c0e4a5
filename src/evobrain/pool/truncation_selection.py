"""
Truncation Selection Module

Classes:
    TruncationSelection: Elitism followed by rank-biased crossover and mutation
"""

import numpy as np
from loguru import logger
from typing import TYPE_CHECKING

from evobrain.errors              import check
from evobrain.pool.selection_base import SelectionAlgorithm
from evobrain.run.config          import Config
if TYPE_CHECKING:
    from evobrain.pool.generation_factory import GenerationFactory
    from evobrain.pool.population         import Population

class TruncationSelection(SelectionAlgorithm):
    """
    Truncation selection with elitism.

    The next generation is filled in two phases:

    1. Elitism: walking the ranking from the fittest genotype down, copy up to
       floor(elite_percentage * N) genotypes unchanged into the next generation.
       The walk stops at the first genotype whose fitness is below
       'elite_min_fitness'. Each copied elite is then mutated with probability
       'elite_mutation_chance'.

    2. Offspring: every remaining slot k is filled by crossing over two parents
       whose ranking positions r1, r2 are drawn uniformly from [0, k], so the
       slots near the top of the next generation are bred from the fittest
       genotypes only. The fitter parent is favored by the preference
       (r2 + 1) / (r1 + r2 + 2); the child is then mutated.
    """

    def __init__(self, config: Config):
        super().__init__(config)
        check(0.0 <= config.elite_percentage <= 1.0, "elite percentage must be in [0, 1]",
              elite_percentage=config.elite_percentage)
        check(0.0 <= config.elite_mutation_chance <= 1.0, "elite mutation chance must be in [0, 1]",
              elite_mutation_chance=config.elite_mutation_chance)

    def create_next_generation(self,
                               population     : 'Population',
                               next_generation: 'GenerationFactory',
                               rng            : np.random.Generator) -> None:
        ranking = population.ranking_index
        check(ranking is not None, "population must be ranked before selection")
        check(len(next_generation) == len(population), "next generation size differs from population size",
              population=len(population), next_generation=len(next_generation))

        num_elites = self._select_elites(population, next_generation, rng)

        for slot in range(num_elites, len(next_generation)):
            r1, r2 = (int(r) for r in rng.integers(0, slot + 1, size=2))
            parent1    = population[ranking[r1]]
            parent2    = population[ranking[r2]]
            preference = (r2 + 1) / (r1 + r2 + 2)

            factory = next_generation.genotype_factory(slot)
            factory.crossover(parent1, parent2, preference, [r1, r2])
            factory.mutate()

        logger.debug("Truncation selection: {} elites, {} offspring",
                     num_elites, len(next_generation) - num_elites)

    def _select_elites(self, population: 'Population', next_generation: 'GenerationFactory',
                       rng: np.random.Generator) -> int:
        """
        Copy the elites into the first slots of the next generation.
        Returns the number of elites.
        """
        ranking     = population.ranking_index
        elite_limit = int(np.floor(self._config.elite_percentage * len(population)))

        num_elites = 0
        while num_elites < elite_limit:
            elite = population[ranking[num_elites]]
            if elite.fitness < self._config.elite_min_fitness:
                break

            factory = next_generation.genotype_factory(num_elites)
            factory.replicate(elite, num_elites)
            if rng.random() < self._config.elite_mutation_chance:
                factory.mutate()
            num_elites += 1

        return num_elites
