"""
Integration tests running evolution from the example configuration files.
"""

import pytest
from pathlib import Path

from evobrain.pool import Population
from evobrain.run  import Config

EXAMPLES_DIR = Path(__file__).parent.parent.parent / "examples"


@pytest.mark.parametrize("config_name, encoding", [("config_regression1D.ini", "cgp"),
                                                   ("config_cartpole.ini",     "lstm_lite")])
def test_example_configs_parse(config_name, encoding):
    config = Config(str(EXAMPLES_DIR / config_name))
    assert config.genotype == encoding
    assert config.population_size > 0


def test_evolution_from_example_config(xor_domain):
    config = Config(str(EXAMPLES_DIR / "config_regression1D.ini"))
    config.population_size = 20
    config.seed            = 3

    population = Population(config, xor_domain)
    population.create_primordial_generation()
    for _ in range(3):
        xor_domain.evaluate_population(population)
        population.create_next_generation()

    assert population.generation == 3
    assert len(population) == 20


def test_weight_vector_evolution_from_example_config(xor_domain):
    config = Config(str(EXAMPLES_DIR / "config_cartpole.ini"))
    config.population_size = 10

    population = Population(config, xor_domain)
    population.create_primordial_generation()
    xor_domain.evaluate_population(population)
    population.create_next_generation()

    assert population.generation == 1
    assert all(genotype.layer_sizes == [2, 4, 1] for genotype in population)
