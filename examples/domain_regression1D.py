"""
1D Function Regression Domain

This module implements 1D function approximation as an evaluation domain.
The goal is to evolve brains that approximate a 1D mathematical function
over a specified range.

The 1D Function Regression Problem:
    Given a continuous function f(x) defined over the range [x_min, x_max], evolve a brain
    that approximates f(x) for all x in that range. The brain is evaluated on multiple
    sample points within the range.

Fitness Function:
    Fitness = 1.0 / (0.1 + MSE)
    where: MSE = mean((brain_output - target)²)

    Higher fitness indicates better approximation.
    The offset (0.1) prevents division by zero and bounds the fitness by 10.

Classes:
    Domain_Regression1D: Domain for 1D function approximation

Usage:
    python domain_regression1D.py [config_file] [num_generations]
"""

import json
import sys
import numpy as np
from pathlib import Path
from loguru  import logger
from typing  import Callable

from evobrain import Config, Domain, FunctionId, Genotype, Population

class Domain_Regression1D(Domain):
    """
    Domain for 1D function approximation.

    Every genotype grows a brain with one input (x) and one output (the
    approximation of f(x)), evaluated on a fixed grid of sample points.
    """

    NUM_POINTS = 100

    def __init__(self, function: Callable[[float], float], x_min: float, x_max: float):
        """
        Parameters:
            function: The 1D function being approximated
            x_min:    The beginning of the range on which the function is approximated
            x_max:    The end of the range on which the function is approximated
        """
        self._Xs = np.linspace(x_min, x_max, self.NUM_POINTS)
        self._Ys = np.array([function(x) for x in self._Xs])

    def inputs(self) -> int:
        return 1

    def outputs(self) -> int:
        return 1

    def available_functions(self) -> list[FunctionId]:
        # arithmetic is enough for polynomials
        return [FunctionId.ONE, FunctionId.TWO, FunctionId.IDENTITY, FunctionId.ADD,
                FunctionId.SUBTRACT, FunctionId.MULTIPLY, FunctionId.DIVIDE, FunctionId.NEGATE]

    def evaluate(self, genotype: Genotype) -> float:
        brain = genotype.grow()
        Os  = np.array([brain.forward_pass([x])[0] for x in self._Xs])
        mse = np.mean((Os - self._Ys)**2)
        return float(1.0 / (0.1 + mse))

def run(config: Config, domain: Domain, num_generations: int, num_jobs: int = 1) -> Genotype:
    """
    Evolve a population for a number of generations and return the fittest genotype.
    """
    population = Population(config, domain)
    population.create_primordial_generation()

    fittest = None
    for _ in range(num_generations):
        domain.evaluate_population(population, num_jobs)
        population.rank()
        fittest = population.fittest_genotype().clone()
        if population.generation % 20 == 0:
            logger.info("Generation {:04d}: maximum fitness = {:.4f}", population.generation, fittest.fitness)
        population.create_next_generation()

    return fittest

if __name__ == "__main__":
    config_file     = sys.argv[1] if len(sys.argv) > 1 else str(Path(__file__).parent / "config_regression1D.ini")
    num_generations = int(sys.argv[2]) if len(sys.argv) > 2 else 200

    config  = Config(config_file)
    domain  = Domain_Regression1D(lambda x: x**3 - 2*x, -2.0, 2.0)
    fittest = run(config, domain, num_generations, num_jobs=-1)

    logger.info("Final fitness: {:.4f}", fittest.fitness)
    print(fittest)
    print(json.dumps(fittest.save()))
