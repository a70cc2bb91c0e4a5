"""
Graph-Program Brain Module

This module implements the brain grown from a graph-program genotype.

Classes:
    CgpBrain: Evaluates the grid of function nodes encoded by a CgpGenotype
"""

import numpy as np
from typing import Sequence, TYPE_CHECKING

from evobrain.functions            import functions
from evobrain.phenotype.brain_base import Brain
if TYPE_CHECKING:
    from evobrain.genotype import CgpGenotype

class CgpBrain(Brain):
    """
    A brain evaluating a graph program.

    All input slots and node values live in a single array, indexed by the flat
    numbering of the genotype. Since connections only reach earlier columns,
    evaluating the nodes in increasing index order (column by column) always
    finds the arguments of a node already computed. Only the active nodes (the
    ones the outputs depend on) are evaluated.

    The brain is stateless: 'forward_pass()' results depend only on its inputs.

    Public Methods:
        forward_pass(inputs): Process one input vector and return the output vector

    Public Properties:
        number_active_nodes: How many nodes are evaluated per forward pass
    """

    def __init__(self, genotype: 'CgpGenotype'):
        """
        Build the brain from a (seeded) genotype.
        The genes are copied, so later changes to the genotype don't affect the brain.

        Parameters:
            genotype: The genotype encoding the graph program
        """
        super().__init__(genotype._domain.inputs(), len(genotype.output_genes))

        # Only the active nodes are evaluated, in increasing index order
        self._nodes = []   # (node index, primitive, first connection, second connection)
        for index in genotype.active_nodes():
            gene = genotype.function_genes[index - self._num_inputs]
            self._nodes.append((index, functions[gene.function], *gene.connections))

        self._output_indices = np.array([gene.connection for gene in genotype.output_genes], dtype=np.int64)
        self._values = np.zeros(self._num_inputs + len(genotype.function_genes), dtype=np.float64)

    @property
    def number_active_nodes(self) -> int:
        return len(self._nodes)

    def forward_pass(self, inputs: Sequence[float]) -> np.ndarray:
        values = self._values
        values[:self._num_inputs] = self._as_input_vector(inputs)

        # primitives are guarded against undefined results, overflows just saturate
        with np.errstate(all='ignore'):
            for index, function, first, second in self._nodes:
                values[index] = function(values[first], values[second])

        return values[self._output_indices].copy()
