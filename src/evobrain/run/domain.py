"""
Domain Module

This module defines the abstract base class for domains: the tasks on which
brains are evaluated. The core never implements a domain, it only consumes
the narrow interface below.

A domain declares its input/output arity and (for graph-program genotypes)
the primitives available to the graph nodes. It computes the fitness of a
genotype by growing its brain and running it on the task.

Classes:
    Domain: Abstract base class for evaluation domains
"""

from abc    import ABC, abstractmethod
from joblib import Parallel, delayed
from typing import TYPE_CHECKING

from evobrain.functions import FunctionId
if TYPE_CHECKING:
    from evobrain.genotype import Genotype
    from evobrain.pool     import Population

class Domain(ABC):
    """
    Abstract base class for implementing an evaluation domain.

    Subclasses must implement:
    - inputs():            Number of values fed into a brain
    - outputs():           Number of values produced by a brain
    - evaluate(genotype):  Grow the genotype's brain, run it and return its fitness

    Subclasses can override:
    - available_functions(): The primitives graph-program nodes may use (default: all)

    Public Methods:
        evaluate_population(population, num_jobs): Evaluate and score a whole population

    Parallelization of fitness evaluation:
        num_jobs=1:  Serial evaluation (no parallelization)
        num_jobs>1:  Use specified number of parallel processes
        num_jobs=-1: Use all available CPU cores
    """

    @abstractmethod
    def inputs(self) -> int:
        """
        The number of inputs of a brain evaluated in this domain.
        """
        pass

    @abstractmethod
    def outputs(self) -> int:
        """
        The number of outputs of a brain evaluated in this domain.
        """
        pass

    def available_functions(self) -> list[FunctionId]:
        """
        The ordered list of primitives a graph-program node may use.
        """
        return list(FunctionId)

    @abstractmethod
    def evaluate(self, genotype: 'Genotype') -> float:
        """
        Evaluate and return the fitness of a genotype.

        Implementations grow a fresh brain from the genotype (brains are never
        shared between evaluations) and run it on the task. Higher fitness
        values indicate better performance.

        Any randomness involved in the evaluation must come from a random
        source owned by this evaluation, since evaluations may run concurrently.

        Parameters:
            genotype: The genotype to evaluate

        Returns:
            float: Fitness score for the genotype
        """
        pass

    def evaluate_population(self, population: 'Population', num_jobs: int = 1) -> None:
        """
        Evaluate every genotype in the population and record its fitness.

        Uses serial or parallel evaluation based on num_jobs:
        - num_jobs=1: Sequential evaluation in single process
        - num_jobs>1 or -1: Parallel evaluation using joblib

        Parameters:
            population: The population to evaluate
            num_jobs:   Number of parallel processes for fitness evaluation
        """
        genotypes = list(population)
        serialize = num_jobs == 1

        # Calculate genotypes' fitness
        if serialize:
            fitness_all = [self.evaluate(genotype) for genotype in genotypes]
        else:
            fitness_all = Parallel(num_jobs)(delayed(self.evaluate)(g) for g in genotypes)

        # Record fitness values into the population
        for index, fitness in enumerate(fitness_all):
            population.set_fitness(index, fitness)
