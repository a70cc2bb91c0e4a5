"""
Graph-Program Genotype Module

This module implements the graph-program (Cartesian genetic programming)
genotype, together with the genes it is made of.

Classes:
    FunctionGene: Gene encoding a grid node: a primitive and its input connections
    OutputGene:   Gene encoding a brain output: the slot it reads from
    CgpGenotype:  Genotype encoding a grid of function nodes
"""

import numpy as np
from dataclasses import dataclass, field
from loguru      import logger
from typing      import TYPE_CHECKING

from evobrain.errors                 import LoadError, check
from evobrain.functions              import FunctionId, MAX_FUNCTION_ARITY, function_arity, function_codes
from evobrain.genotype.genotype_base import Genotype, GenotypeKind
from evobrain.run.config             import Config
if TYPE_CHECKING:
    from evobrain.phenotype.cgp_brain import CgpBrain
    from evobrain.run                 import Domain

@dataclass
class FunctionGene:
    """
    A gene describing a node of the grid.

    Attributes:
        function:    the primitive computed by the node
        connections: flat indices of the slots feeding the primitive's arguments
    """
    function   : FunctionId = FunctionId.IDENTITY
    connections: list[int]  = field(default_factory=lambda: [0] * MAX_FUNCTION_ARITY)

    def __str__(self):
        return f"[{function_codes[self.function]}:{','.join(str(c) for c in self.connections)}]"

@dataclass
class OutputGene:
    """
    A gene describing a brain output.

    Attributes:
        connection: flat index of the slot (input or node) the output reads
    """
    connection: int = 0

    def __str__(self):
        return f"[out:{self.connection}]"

class CgpGenotype(Genotype):
    """
    A graph-program genotype: a rectangular grid of function nodes plus output genes.

    Every input slot and grid node has a position in a single flat numbering:
        - domain inputs: [0, inputs)
        - grid nodes:    [inputs, inputs + rows * columns), column by column

    Layers are numbered the same way: layer 0 is the input layer, layer k
    (1-indexed) is grid column k-1 and layer 'columns + 1' is the output
    layer. Each node connects only to slots of earlier layers, no more than
    'levels_back' layers back. So nodes within a column never depend on one
    another and the network is always acyclic. Outputs use their own window
    (the whole network, unless 'outputs_use_levels_back' is set).

    Function genes are stored column-major: the gene of node (row, col) is
    function_genes[row + col * rows], and its flat index is inputs + that position.

    Public Attributes:
        function_genes: List of rows * columns FunctionGene objects
        output_genes:   List of OutputGene objects, one per domain output

    Public Methods:
        connection_range(layer, levels_back):               Valid connection range for a layer
        output_levels_back():                               Levels-back window of the output layer
        active_nodes():                                     Flat indices of nodes the outputs depend on
        mutate(connection_rate, function_rate, rng):        Resample connections and primitives
        crossover(parent1, parent2, preference, rng):       Gene-wise uniform crossover
    """

    kind = GenotypeKind.CGP

    def __init__(self, config: Config, domain: 'Domain'):
        super().__init__(config, domain)
        self.function_genes: list[FunctionGene] = []
        self.output_genes  : list[OutputGene]   = []

    @property
    def is_empty(self) -> bool:
        return not self.function_genes

    def create_primordial_seed(self, rng: np.random.Generator | None = None) -> None:
        """
        Allocate all genes, then randomize every connection and every primitive.
        """
        check(self._config.rows > 0,    "CGP grid must have at least one row",    rows=self._config.rows)
        check(self._config.columns > 0, "CGP grid must have at least one column", columns=self._config.columns)

        num_nodes = self._config.rows * self._config.columns
        self.function_genes = [FunctionGene() for _ in range(num_nodes)]
        self.output_genes   = [OutputGene() for _ in range(self._domain.outputs())]

        # randomize all connections and functions
        self.mutate(1.0, 1.0, rng=self._make_rng(rng))

    def connection_range(self, layer: int, levels_back: int) -> tuple[int, int]:
        """
        The inclusive range of flat indices a connection from 'layer' may point to.

        Parameters:
            layer:       0 is the input layer, k is grid column k-1, 'columns + 1' is the output layer
            levels_back: how many layers back the connection may reach

        Returns:
            (min_index, max_index): the base index of layer max(layer - levels_back, 0),
                                    and the last index before the base of 'layer'
        """
        check(0 < layer <= self._config.columns + 1, "invalid layer", layer=layer, columns=self._config.columns)
        check(levels_back > 0, "levels back must be positive", levels_back=levels_back)

        min_connection_layer = max(layer - levels_back, 0)
        min_index = self._layer_base_index(min_connection_layer)
        max_index = self._layer_base_index(layer) - 1
        check(min_index <= max_index, "empty connection range", layer=layer, levels_back=levels_back)
        return min_index, max_index

    def output_levels_back(self) -> int:
        """
        The levels-back window of the output layer.
        """
        if self._config.outputs_use_levels_back:
            return self._config.levels_back
        return self._config.columns + 1   # the whole network

    def _layer_base_index(self, layer: int) -> int:
        if layer == 0:
            return 0
        return self._domain.inputs() + (layer - 1) * self._config.rows

    def mutate(self,
               connection_rate: float | None = None,
               function_rate  : float | None = None,
               rng            : np.random.Generator | None = None) -> None:
        """
        Stochastically mutate the genotype.

        With explicit rates, every primitive is resampled with probability 'function_rate'
        and every connection slot (including the output genes) is resampled with probability
        'connection_rate'. A rate of 0 never touches a gene; a rate of 1 resamples all of them.

        Without rates, the configured mutation strategy is used:
            "probabilistic" - as above, using the configured mutation chances
            "fixed_count"   - exactly 'mutation_count' randomly chosen mutation points are resampled

        Parameters:
            connection_rate: probability of resampling each connection
            function_rate:   probability of resampling each primitive
            rng:             source of randomness (a fresh generator if None)
        """
        check(not self.is_empty, "can't mutate an empty genotype")
        rng = self._make_rng(rng)

        if connection_rate is None and function_rate is None and self._config.mutation_strategy == 'fixed_count':
            self._mutate_fixed_count(self._config.mutation_count, rng)
            return

        if connection_rate is None:
            connection_rate = self._config.connection_mutation_chance
        if function_rate is None:
            function_rate = self._config.function_mutation_chance

        rows, columns = self._config.rows, self._config.columns
        available_functions = self._domain.available_functions()
        if function_rate > 0:
            check(len(available_functions) > 0, "the domain offers no primitives")

        # function genes
        for col in range(columns):
            min_index, max_index = self.connection_range(col + 1, self._config.levels_back)
            for row in range(rows):
                gene = self.function_genes[row + col * rows]
                if rng.random() < function_rate:
                    gene.function = FunctionId(available_functions[rng.integers(len(available_functions))])
                for slot in range(len(gene.connections)):
                    if rng.random() < connection_rate:
                        gene.connections[slot] = int(rng.integers(min_index, max_index + 1))

        # output genes
        min_index, max_index = self.connection_range(columns + 1, self.output_levels_back())
        for gene in self.output_genes:
            if rng.random() < connection_rate:
                gene.connection = int(rng.integers(min_index, max_index + 1))

    def _mutate_fixed_count(self, mutation_count: int, rng: np.random.Generator) -> None:
        """
        Resample exactly 'mutation_count' distinct mutation points.

        The mutation points are, in order: the primitive of each function gene,
        each connection slot of each function gene, each output connection.
        """
        rows = self._config.rows
        available_functions = self._domain.available_functions()
        check(len(available_functions) > 0, "the domain offers no primitives")

        num_genes  = len(self.function_genes)
        num_points = num_genes * (1 + MAX_FUNCTION_ARITY) + len(self.output_genes)
        points = rng.choice(num_points, size=min(mutation_count, num_points), replace=False)

        output_range = self.connection_range(self._config.columns + 1, self.output_levels_back())
        for point in sorted(int(p) for p in points):
            if point < num_genes:
                gene = self.function_genes[point]
                gene.function = FunctionId(available_functions[rng.integers(len(available_functions))])
            elif point < num_genes * (1 + MAX_FUNCTION_ARITY):
                gene_index, slot = divmod(point - num_genes, MAX_FUNCTION_ARITY)
                min_index, max_index = self.connection_range(gene_index // rows + 1, self._config.levels_back)
                self.function_genes[gene_index].connections[slot] = int(rng.integers(min_index, max_index + 1))
            else:
                gene = self.output_genes[point - num_genes * (1 + MAX_FUNCTION_ARITY)]
                gene.connection = int(rng.integers(output_range[0], output_range[1] + 1))

    def crossover(self,
                  parent1   : 'CgpGenotype',
                  parent2   : 'CgpGenotype',
                  preference: float,
                  rng       : np.random.Generator | None = None) -> None:
        """
        Uniform gene-wise crossover.

        Every function gene and every output gene is copied from 'parent1' with
        probability 'preference', otherwise from 'parent2'. Both parents share the
        grid shape, so every inherited connection is valid in the child.
        """
        check(not parent1.is_empty and not parent2.is_empty, "can't crossover empty genotypes")
        check(len(parent1.function_genes) == len(parent2.function_genes) and
              len(parent1.output_genes)   == len(parent2.output_genes),
              "crossover of genotypes with different shapes")
        rng = self._make_rng(rng)

        self.function_genes = []
        for gene1, gene2 in zip(parent1.function_genes, parent2.function_genes):
            gene = gene1 if rng.random() < preference else gene2
            self.function_genes.append(FunctionGene(gene.function, list(gene.connections)))

        self.output_genes = []
        for gene1, gene2 in zip(parent1.output_genes, parent2.output_genes):
            gene = gene1 if rng.random() < preference else gene2
            self.output_genes.append(OutputGene(gene.connection))

    def active_nodes(self) -> list[int]:
        """
        Find the grid nodes the outputs depend on.

        Performs a backward search starting from the output genes, following only the
        connection slots actually read by each node's primitive.

        Returns:
            Sorted list of flat indices of the active nodes (inputs excluded)
        """
        inputs = self._domain.inputs()
        active = set()
        stack  = [gene.connection for gene in self.output_genes]

        while stack:
            index = stack.pop()
            if index < inputs or index in active:
                continue
            active.add(index)

            gene = self.function_genes[index - inputs]
            stack.extend(gene.connections[:function_arity[gene.function]])

        return sorted(active)

    def grow(self) -> 'CgpBrain':
        check(not self.is_empty, "can't grow a brain from an empty genotype")
        from evobrain.phenotype.cgp_brain import CgpBrain
        return CgpBrain(self)

    def reset(self) -> None:
        super().reset()
        self.function_genes = []
        self.output_genes   = []

    def save(self) -> dict:
        """
        Convert the genotype to a dictionary representation.

        Returns:
            Dictionary with the following structure:
            {
                "function_genes": [{"fn": 4, "c": [0, 1]}, ...],
                "output_genes":   [{"c": 5}, ...]
            }
        """
        return {
            "function_genes": [{"fn": int(gene.function), "c": list(gene.connections)}
                               for gene in self.function_genes],
            "output_genes"  : [{"c": gene.connection} for gene in self.output_genes]
        }

    def load(self, json_obj: dict) -> None:
        """
        Replace the genes with the ones described by a dictionary (see 'save()').

        Validates the number of genes, the primitive identifiers and every connection
        index before touching this genotype.

        Raises:
            LoadError: If the description is malformed
        """
        try:
            function_genes, output_genes = self._parse(json_obj)
        except LoadError as e:
            logger.warning("Rejected graph-program genotype: {}", e)
            raise

        self.function_genes = function_genes
        self.output_genes   = output_genes

    def _parse(self, json_obj: dict) -> tuple[list[FunctionGene], list[OutputGene]]:
        if not isinstance(json_obj, dict):
            raise LoadError("Can't load genotype, expected a JSON object")
        if "function_genes" not in json_obj or "output_genes" not in json_obj:
            raise LoadError("Can't load genotype, missing 'function_genes' or 'output_genes'")

        rows, columns = self._config.rows, self._config.columns
        raw_function_genes = json_obj["function_genes"]
        raw_output_genes   = json_obj["output_genes"]
        if not isinstance(raw_function_genes, list) or len(raw_function_genes) != rows * columns:
            raise LoadError(f"Can't load genotype, expected {rows * columns} function genes")
        if not isinstance(raw_output_genes, list) or len(raw_output_genes) != self._domain.outputs():
            raise LoadError(f"Can't load genotype, expected {self._domain.outputs()} output genes")

        function_genes = []
        for position, raw_gene in enumerate(raw_function_genes):
            if not isinstance(raw_gene, dict) or "fn" not in raw_gene or "c" not in raw_gene:
                raise LoadError(f"Can't load function gene {position}, expected 'fn' and 'c'")

            fn = raw_gene["fn"]
            if not _is_int(fn) or not 0 <= fn < len(FunctionId):
                raise LoadError(f"Can't load function gene {position}, invalid function id {fn!r}")

            connections = raw_gene["c"]
            if not isinstance(connections, list) or len(connections) != MAX_FUNCTION_ARITY:
                raise LoadError(f"Can't load function gene {position}, expected {MAX_FUNCTION_ARITY} connections")
            min_index, max_index = self.connection_range(position // rows + 1, self._config.levels_back)
            for c in connections:
                if not _is_int(c) or not min_index <= c <= max_index:
                    raise LoadError(f"Can't load function gene {position}, connection {c!r} "
                                    f"outside [{min_index}, {max_index}]")

            function_genes.append(FunctionGene(FunctionId(fn), list(connections)))

        output_genes = []
        min_index, max_index = self.connection_range(columns + 1, self.output_levels_back())
        for position, raw_gene in enumerate(raw_output_genes):
            if not isinstance(raw_gene, dict) or "c" not in raw_gene:
                raise LoadError(f"Can't load output gene {position}, expected 'c'")
            c = raw_gene["c"]
            if not _is_int(c) or not min_index <= c <= max_index:
                raise LoadError(f"Can't load output gene {position}, connection {c!r} "
                                f"outside [{min_index}, {max_index}]")
            output_genes.append(OutputGene(c))

        return function_genes, output_genes

    def _genes_equal(self, other: 'CgpGenotype') -> bool:
        return self.function_genes == other.function_genes and self.output_genes == other.output_genes

    def __str__(self):
        function_genes_str = ''.join(str(gene) for gene in self.function_genes)
        output_genes_str   = ''.join(str(gene) for gene in self.output_genes)
        return f"Nodes: {function_genes_str}\nOutputs: {output_genes_str}"

def _is_int(value) -> bool:
    # JSON booleans are not valid indices
    return isinstance(value, int) and not isinstance(value, bool)
