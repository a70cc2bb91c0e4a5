"""
Weight Operators Module

Genetic operators acting on weight matrices. They are the building blocks
of the weight-vector genes: every gene applies them to each of its matrices.

All operators work in place on the target matrix and draw their random
values from an explicit generator.

Functions:
    randomize_weights(w, rng, weight_range):                        Replace every weight with a fresh draw
    mutate_weights(w, std_dev, rng):                                Perturb every weight with gaussian noise
    crossover_weights(child, parent1, parent2, preference, rng, operator): Combine two parents, element-wise
"""

import numpy as np

from evobrain.errors import check

def randomize_weights(w: np.ndarray, rng: np.random.Generator, weight_range: float = 1.0) -> None:
    """
    Replace every weight by a value drawn uniformly from [-weight_range, weight_range].
    """
    w[...] = rng.uniform(-weight_range, weight_range, size=w.shape)

def mutate_weights(w: np.ndarray, std_dev: float, rng: np.random.Generator) -> None:
    """
    Add independent zero-mean gaussian noise to every weight.
    A standard deviation of 0 leaves the weights untouched.
    """
    check(std_dev >= 0, "mutation standard deviation must be non-negative", std_dev=std_dev)
    if std_dev == 0:
        return
    w += rng.normal(0.0, std_dev, size=w.shape)

def crossover_weights(child     : np.ndarray,
                      parent1   : np.ndarray,
                      parent2   : np.ndarray,
                      preference: float,
                      rng       : np.random.Generator,
                      operator  : str = 'uniform') -> None:
    """
    Combine the weights of two parents into 'child', element-wise.

    Parameters:
        child:      matrix receiving the result (same shape as the parents)
        parent1:    weights of the first parent
        parent2:    weights of the second parent
        preference: how much the first parent is favored, in [0, 1]
        rng:        source of randomness
        operator:   "uniform" - each weight is taken from parent1 with probability 'preference'
                    "blend"   - each weight is preference * parent1 + (1 - preference) * parent2
    """
    check(parent1.shape == parent2.shape == child.shape, "crossover of mismatched matrices",
          child=child.shape, parent1=parent1.shape, parent2=parent2.shape)
    check(0.0 <= preference <= 1.0, "crossover preference must be in [0, 1]", preference=preference)

    if operator == 'uniform':
        from_parent1 = rng.random(size=child.shape) < preference
        child[...] = np.where(from_parent1, parent1, parent2)
    elif operator == 'blend':
        child[...] = preference * parent1 + (1.0 - preference) * parent2
    else:
        check(False, "unknown crossover operator", operator=operator)
