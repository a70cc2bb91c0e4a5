"""
Shared fixtures for integration tests.
"""

import pytest
import numpy as np

from evobrain.run import Config, Domain


class XorDomain(Domain):
    """
    The XOR problem: fitness = 4 - sum of squared errors over the four input pairs.
    Brains with state are reset before every input pair.
    """

    XOR_INPUTS  = [[0.0, 0.0], [0.0, 1.0], [1.0, 0.0], [1.0, 1.0]]
    XOR_OUTPUTS = [0.0, 1.0, 1.0, 0.0]

    def inputs(self):
        return 2

    def outputs(self):
        return 1

    def evaluate(self, genotype):
        brain = genotype.grow()
        fitness = 4.0
        for inputs, expected_output in zip(self.XOR_INPUTS, self.XOR_OUTPUTS):
            brain.reset_state()
            error = brain.forward_pass(inputs)[0] - expected_output
            fitness -= error ** 2
        return float(fitness)


@pytest.fixture
def xor_domain():
    return XorDomain()


@pytest.fixture
def evolution_config():
    """A small population evolved with strict elitism."""
    config = Config()
    config.population_size       = 30
    config.seed                  = 42
    config.elite_percentage      = 0.1
    config.elite_min_fitness     = -np.inf
    config.elite_mutation_chance = 0.0
    config.rows                  = 2
    config.columns               = 8
    config.levels_back           = 4
    config.hidden_layers         = [4]
    return config
