"""Pytest configuration and shared fixtures."""

import pytest
import sys
import numpy as np
from pathlib import Path
from loguru  import logger

# Add the source directory to the Python path
src_dir = Path(__file__).parent.parent / "src"
sys.path.insert(0, str(src_dir))

from evobrain.run import Config, Domain


class SimpleDomain(Domain):
    """
    A domain with configurable arity.
    The fitness of a genotype is the first output of its brain, for an input of all ones.
    """

    def __init__(self, num_inputs=2, num_outputs=1, available_functions=None):
        self._num_inputs  = num_inputs
        self._num_outputs = num_outputs
        self._available   = available_functions

    def inputs(self):
        return self._num_inputs

    def outputs(self):
        return self._num_outputs

    def available_functions(self):
        if self._available is None:
            return super().available_functions()
        return list(self._available)

    def evaluate(self, genotype):
        brain = genotype.grow()
        return float(brain.forward_pass(np.ones(self._num_inputs))[0])


@pytest.fixture
def make_domain():
    """Factory for domains with a given arity (and optionally a restricted set of primitives)."""
    return SimpleDomain


@pytest.fixture
def domain():
    """A domain with 2 inputs and 1 output."""
    return SimpleDomain(2, 1)


@pytest.fixture
def config():
    """A default configuration with a small grid and small networks."""
    config = Config()
    config.population_size = 10
    config.seed            = 42
    config.rows            = 2
    config.columns         = 3
    config.levels_back     = 2
    config.hidden_layers   = [3]
    return config


@pytest.fixture
def log_messages():
    """Collect the messages logged through loguru while the test runs."""
    messages = []
    handler_id = logger.add(lambda message: messages.append(message.record["message"]), level="DEBUG")
    yield messages
    logger.remove(handler_id)
