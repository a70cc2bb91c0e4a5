"""
Unit tests for the Domain base class.
"""

import pytest
from joblib import parallel_config

from evobrain.functions import FunctionId
from evobrain.pool      import Population
from evobrain.run       import Domain


# ============================================================================
# Fixtures
# ============================================================================

@pytest.fixture
def population(config, domain):
    config.population_size = 5
    population = Population(config, domain)
    population.create_primordial_generation()
    return population


# ============================================================================
# Tests
# ============================================================================

class TestDomain:

    def test_cannot_instantiate_abstract_domain(self):
        with pytest.raises(TypeError):
            Domain()

    def test_available_functions_default_to_full_catalogue(self, domain):
        assert domain.available_functions() == list(FunctionId)

    def test_evaluate_population_serial(self, population, domain):
        domain.evaluate_population(population)
        expected = [domain.evaluate(genotype) for genotype in population]
        assert population.fitness_values() == expected

    def test_evaluate_population_parallel(self, population, domain):
        with parallel_config(backend="threading"):
            domain.evaluate_population(population, num_jobs=2)
        expected = [domain.evaluate(genotype) for genotype in population]
        assert population.fitness_values() == expected

    def test_evaluated_population_can_be_ranked(self, population, domain):
        domain.evaluate_population(population)
        assert sorted(population.rank()) == list(range(5))

    def test_evaluating_twice_is_fatal(self, population, domain):
        from evobrain.errors import InvariantViolation
        domain.evaluate_population(population)
        with pytest.raises(InvariantViolation):
            domain.evaluate_population(population)
