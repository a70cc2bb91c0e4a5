"""
Pool Package

This package manages the population of genotypes and the creation of new generations.

Modules:
    population:           The population and its generation lifecycle
    generation_factory:   Builder of the next generation
    selection_base:       Abstract base class for selection algorithms
    truncation_selection: Truncation selection with elitism

Exported Classes:
    Population:          Fixed-size collection of evolving genotypes
    PopulationState:     The stage a generation has reached
    GenerationFactory:   Builder of the next generation
    GenotypeFactory:     Creates the genotype of one slot
    SelectionAlgorithm:  Abstract base class for selection algorithms
    TruncationSelection: Truncation selection with elitism
"""

from evobrain.pool.generation_factory   import GenerationFactory, GenotypeFactory
from evobrain.pool.selection_base       import SelectionAlgorithm
from evobrain.pool.truncation_selection import TruncationSelection
from evobrain.pool.population           import Population, PopulationState

__all__ = ['Population',
           'PopulationState',
           'GenerationFactory',
           'GenotypeFactory',
           'SelectionAlgorithm',
           'TruncationSelection']
