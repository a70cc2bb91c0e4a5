"""
Unit tests for truncation selection.
"""

import math
import pytest
import numpy as np

from evobrain.errors import InvariantViolation
from evobrain.pool   import GenerationFactory, Population, TruncationSelection


# ============================================================================
# Fixtures
# ============================================================================

@pytest.fixture
def population(config, domain):
    config.population_size = 6
    population = Population(config, domain)
    population.create_primordial_generation()
    return population


def scored(population, fitness_values):
    for index, fitness in enumerate(fitness_values):
        population.set_fitness(index, fitness)
    population.rank()
    return population


def select(population):
    """Run the selection into a new generation factory and return the built genotypes."""
    next_generation = GenerationFactory(population._config, population._domain, len(population),
                                        np.random.SeedSequence(3))
    selection = TruncationSelection(population._config)
    selection.create_next_generation(population, next_generation, np.random.default_rng(4))
    return next_generation.build()


# ============================================================================
# Test Elitism
# ============================================================================

class TestElitism:

    def test_full_elitism_copies_ranked_population(self, population, config):
        config.elite_percentage      = 1.0
        config.elite_min_fitness     = -math.inf
        config.elite_mutation_chance = 0.0
        scored(population, [3.0, 1.0, 5.0, -2.0, 0.0, 4.0])

        next_generation = select(population)
        for position, genotype in enumerate(next_generation):
            parent = population[population.ranking_index[position]]
            assert genotype == parent
            assert genotype is not parent
            assert genotype.genealogy.genetic_operator == "e"
            assert genotype.genealogy.parents == [position]

    def test_elite_count_rounds_down(self, population, config):
        config.elite_percentage  = 0.5   # 3 of 6
        config.elite_min_fitness = -math.inf
        scored(population, [1.0, 2.0, 3.0, 4.0, 5.0, 6.0])

        operators = [genotype.genealogy.genetic_operator for genotype in select(population)]
        assert operators == ["e", "e", "e", "c", "c", "c"]

    def test_min_fitness_stops_elitism(self, population, config):
        config.elite_percentage  = 0.5
        config.elite_min_fitness = 0.0
        scored(population, [5.0, -1.0, 3.0, -2.0, -3.0, -4.0])

        next_generation = select(population)
        operators = [genotype.genealogy.genetic_operator for genotype in next_generation]
        assert operators == ["e", "e", "c", "c", "c", "c"]
        assert next_generation[0] == population[0]
        assert next_generation[1] == population[2]

    def test_no_elite_when_best_is_below_min_fitness(self, population, config):
        config.elite_percentage  = 1.0
        config.elite_min_fitness = 10.0
        scored(population, [1.0, 2.0, 3.0, 4.0, 5.0, 6.0])

        assert all(genotype.genealogy.genetic_operator == "c" for genotype in select(population))

    def test_elite_mutation(self, population, config):
        config.elite_percentage      = 1.0
        config.elite_min_fitness     = -math.inf
        config.elite_mutation_chance = 1.0
        scored(population, [1.0, 2.0, 3.0, 4.0, 5.0, 6.0])

        assert all(genotype.genealogy.genetic_operator == "em" for genotype in select(population))

    def test_source_population_is_unchanged(self, population, config):
        config.elite_percentage      = 0.5
        config.elite_min_fitness     = -math.inf
        config.elite_mutation_chance = 1.0
        scored(population, [1.0, 2.0, 3.0, 4.0, 5.0, 6.0])
        before = [genotype.clone() for genotype in population]

        select(population)
        assert population.genotypes == before
        assert population.fitness_values() == [1.0, 2.0, 3.0, 4.0, 5.0, 6.0]


# ============================================================================
# Test Offspring
# ============================================================================

class TestOffspring:

    def test_parents_are_drawn_from_the_top_ranks(self, population, config):
        config.elite_percentage = 0.0
        scored(population, [1.0, 2.0, 3.0, 4.0, 5.0, 6.0])

        for slot, genotype in enumerate(select(population)):
            assert genotype.genealogy.genetic_operator == "c"
            assert len(genotype.genealogy.parents) == 2
            assert all(0 <= rank <= slot for rank in genotype.genealogy.parents)

    def test_first_slot_breeds_fittest_with_itself(self, population, config):
        config.elite_percentage = 0.0
        scored(population, [1.0, 2.0, 3.0, 4.0, 5.0, 6.0])

        first = select(population)[0]
        assert first.genealogy.parents == [0, 0]

    def test_same_seeds_same_generation(self, population, config):
        config.elite_percentage = 0.0
        scored(population, [1.0, 2.0, 3.0, 4.0, 5.0, 6.0])
        assert select(population) == select(population)


# ============================================================================
# Test Preconditions
# ============================================================================

class TestPreconditions:

    @pytest.mark.parametrize("name, value", [("elite_percentage", 1.5), ("elite_percentage", -0.1),
                                             ("elite_mutation_chance", 2.0)])
    def test_invalid_configuration_is_fatal(self, config, name, value):
        setattr(config, name, value)
        with pytest.raises(InvariantViolation):
            TruncationSelection(config)

    def test_unranked_population_is_fatal(self, population, config):
        next_generation = GenerationFactory(config, population._domain, len(population), np.random.SeedSequence(0))
        with pytest.raises(InvariantViolation, match="ranked"):
            TruncationSelection(config).create_next_generation(population, next_generation,
                                                               np.random.default_rng(0))

    def test_generation_size_mismatch_is_fatal(self, population, config):
        scored(population, [1.0, 2.0, 3.0, 4.0, 5.0, 6.0])
        next_generation = GenerationFactory(config, population._domain, 4, np.random.SeedSequence(0))
        with pytest.raises(InvariantViolation):
            TruncationSelection(config).create_next_generation(population, next_generation,
                                                               np.random.default_rng(0))
