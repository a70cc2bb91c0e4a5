"""
Weight-Vector Genotype Module

This module implements the weight-vector genotypes (conventional neuroevolution):
a fixed network topology whose weights are evolved. The topology is a stack of
hidden layers followed by a feed-forward output layer; the hidden layer type
depends on the encoding.

Classes:
    CneGenotype:         Base class for weight-vector genotypes
    FeedforwardGenotype: Feed-forward hidden layers
    LstmGenotype:        LSTM hidden layers
    LstmLiteGenotype:    Single-gate LSTM hidden layers
"""

import numpy as np
from loguru import logger
from typing import TYPE_CHECKING

from evobrain.errors                 import LoadError, check
from evobrain.genotype.genotype_base import Genotype, GenotypeKind
from evobrain.genotype.weight_gene   import FeedforwardGene, LstmGene, LstmLiteGene
from evobrain.run.config             import Config
if TYPE_CHECKING:
    from evobrain.phenotype.cne_brain import CneBrain
    from evobrain.run                 import Domain

class CneGenotype(Genotype):
    """
    A weight-vector genotype.

    The network topology derives from the configuration and the domain:
        domain inputs -> hidden_layers[0] -> ... -> hidden_layers[-1] -> domain outputs

    Each hidden layer is described by a gene of type 'hidden_gene_class'; the output
    layer is always described by a FeedforwardGene.

    Public Attributes:
        hidden_layers: List of hidden layer genes (empty until seeded or loaded)
        output_layer:  Output layer gene (None until seeded or loaded)

    Public Properties:
        layer_sizes: Widths of all the layers, inputs and outputs included

    Public Methods:
        mutate(std_dev, rng):                         Perturb every weight
        crossover(parent1, parent2, preference, rng): Combine the weights of two parents
    """

    hidden_gene_class: type = FeedforwardGene

    def __init__(self, config: Config, domain: 'Domain'):
        super().__init__(config, domain)
        self.hidden_layers: list[FeedforwardGene] = []
        self.output_layer : FeedforwardGene | None = None

    @property
    def is_empty(self) -> bool:
        return self.output_layer is None

    @property
    def layer_sizes(self) -> list[int]:
        return [self._domain.inputs(), *self._config.hidden_layers, self._domain.outputs()]

    def _allocate(self) -> tuple[list[FeedforwardGene], FeedforwardGene]:
        sizes = self.layer_sizes
        hidden_layers = [self.hidden_gene_class(sizes[i], sizes[i + 1]) for i in range(len(sizes) - 2)]
        output_layer  = FeedforwardGene(sizes[-2], sizes[-1])
        return hidden_layers, output_layer

    @property
    def _genes(self) -> list[FeedforwardGene]:
        return [*self.hidden_layers, self.output_layer]

    def create_primordial_seed(self, rng: np.random.Generator | None = None) -> None:
        """
        Allocate all layer genes and randomize every weight.
        """
        check(self._domain.outputs() > 0, "the domain must have at least one output")
        rng = self._make_rng(rng)

        self.hidden_layers, self.output_layer = self._allocate()
        for gene in self._genes:
            gene.randomize(rng, self._config.weight_range)

    def mutate(self, std_dev: float | None = None, rng: np.random.Generator | None = None) -> None:
        """
        Perturb every weight with independent zero-mean gaussian noise.

        Parameters:
            std_dev: standard deviation of the noise (configured 'mutation_std_dev' if None)
            rng:     source of randomness (a fresh generator if None)
        """
        check(not self.is_empty, "can't mutate an empty genotype")
        if std_dev is None:
            std_dev = self._config.mutation_std_dev
        rng = self._make_rng(rng)

        for gene in self._genes:
            gene.mutate(std_dev, rng)

    def crossover(self,
                  parent1   : 'CneGenotype',
                  parent2   : 'CneGenotype',
                  preference: float,
                  rng       : np.random.Generator | None = None) -> None:
        """
        Combine the weights of two parents, layer by layer, using the configured crossover operator.
        """
        check(not parent1.is_empty and not parent2.is_empty, "can't crossover empty genotypes")
        check(len(parent1.hidden_layers) == len(parent2.hidden_layers),
              "crossover of genotypes with different shapes")
        rng = self._make_rng(rng)

        hidden_layers, output_layer = self._allocate()
        for child, gene1, gene2 in zip([*hidden_layers, output_layer], parent1._genes, parent2._genes):
            child.crossover(gene1, gene2, preference, rng, self._config.crossover_operator)
        self.hidden_layers, self.output_layer = hidden_layers, output_layer

    def grow(self) -> 'CneBrain':
        check(not self.is_empty, "can't grow a brain from an empty genotype")
        from evobrain.phenotype.cne_brain import CneBrain
        return CneBrain(self)

    def reset(self) -> None:
        super().reset()
        self.hidden_layers = []
        self.output_layer  = None

    def save(self) -> dict:
        """
        Convert the genotype to a dictionary representation.

        Returns:
            Dictionary with the following structure:
            {
                "hidden_layers": [{"w": [[...], ...], "lw": [[...], ...]}, ...],
                "output_layer":  {"w": [[...], ...]}
            }
            ("lw" is present only for recurrent hidden layers)
        """
        return {
            "hidden_layers": [gene.to_dict() for gene in self.hidden_layers],
            "output_layer" : self.output_layer.to_dict() if self.output_layer is not None else None
        }

    def load(self, json_obj: dict) -> None:
        """
        Replace the genes with the ones described by a dictionary (see 'save()').

        Every gene is validated against the layer sizes before this genotype is touched.

        Raises:
            LoadError: If the description is malformed or the weights have inconsistent shapes
        """
        try:
            hidden_layers, output_layer = self._parse(json_obj)
        except LoadError as e:
            logger.warning("Rejected {}: {}", type(self).__name__, e)
            raise

        self.hidden_layers = hidden_layers
        self.output_layer  = output_layer

    def _parse(self, json_obj: dict) -> tuple[list[FeedforwardGene], FeedforwardGene]:
        if not isinstance(json_obj, dict):
            raise LoadError("Can't load genotype, expected a JSON object")
        if "hidden_layers" not in json_obj or "output_layer" not in json_obj:
            raise LoadError("Can't load genotype, missing 'hidden_layers' or 'output_layer'")

        sizes = self.layer_sizes
        raw_hidden_layers = json_obj["hidden_layers"]
        if not isinstance(raw_hidden_layers, list) or len(raw_hidden_layers) != len(sizes) - 2:
            raise LoadError(f"Can't load genotype, expected {len(sizes) - 2} hidden layers")

        hidden_layers = [self.hidden_gene_class.from_dict(raw_gene, sizes[i], sizes[i + 1])
                         for i, raw_gene in enumerate(raw_hidden_layers)]
        output_layer = FeedforwardGene.from_dict(json_obj["output_layer"], sizes[-2], sizes[-1])
        return hidden_layers, output_layer

    def _genes_equal(self, other: 'CneGenotype') -> bool:
        return self.hidden_layers == other.hidden_layers and self.output_layer == other.output_layer

    def __str__(self):
        layers_str = ' -> '.join(str(size) for size in self.layer_sizes)
        return f"{type(self).__name__}({layers_str})"

class FeedforwardGenotype(CneGenotype):
    kind = GenotypeKind.FEEDFORWARD
    hidden_gene_class = FeedforwardGene

class LstmGenotype(CneGenotype):
    kind = GenotypeKind.LSTM
    hidden_gene_class = LstmGene

class LstmLiteGenotype(CneGenotype):
    kind = GenotypeKind.LSTM_LITE
    hidden_gene_class = LstmLiteGene
