"""
evobrain - A neuroevolution engine.

This package evolves populations of genotypes into brains: executable
controllers mapping input vectors to output vectors. Two families of
encodings are supported: graph programs (Cartesian Genetic Programming) and
weight vectors for feed-forward, LSTM and LSTM-lite networks.

Main components:
- genotype: Genetic encodings, their genetic operators and serialization
- phenotype: Brains grown from genotypes
- pool: Population, generation building and selection
- run: Configuration and the problem domain interface
- functions: Primitive functions available to graph programs
- activations: Activation functions for the weight-vector brains

Example:
    >>> from evobrain import Config, Domain, Population
    >>> class MyDomain(Domain):
    ...     def inputs(self):  return 2
    ...     def outputs(self): return 1
    ...     def evaluate(self, genotype):
    ...         brain = genotype.grow()
    ...         return -abs(brain.forward_pass([1.0, 2.0])[0] - 3.0)
    >>> population = Population(Config("config.ini"), MyDomain())
    >>> population.create_primordial_generation()
    >>> for _ in range(100):
    ...     MyDomain().evaluate_population(population)
    ...     population.create_next_generation()
"""

__version__ = "0.1.0"

# Import main classes for convenient access
from evobrain.errors    import EvobrainError, InvariantViolation, LoadError
from evobrain.run       import Config, Domain
from evobrain.functions import FunctionId
from evobrain.genotype  import Genotype, GenotypeKind, CgpGenotype, FeedforwardGenotype, LstmGenotype, \
                               LstmLiteGenotype, create_genotype
from evobrain.phenotype import Brain, CgpBrain, CneBrain
from evobrain.pool      import Population, PopulationState, GenerationFactory, TruncationSelection

__all__ = [
    "EvobrainError",
    "InvariantViolation",
    "LoadError",
    "Config",
    "Domain",
    "FunctionId",
    "Genotype",
    "GenotypeKind",
    "CgpGenotype",
    "FeedforwardGenotype",
    "LstmGenotype",
    "LstmLiteGenotype",
    "create_genotype",
    "Brain",
    "CgpBrain",
    "CneBrain",
    "Population",
    "PopulationState",
    "GenerationFactory",
    "TruncationSelection",
]
