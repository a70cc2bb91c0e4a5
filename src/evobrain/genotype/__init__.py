"""
Genotype Package

This package implements the genotype encodings: the evolvable representations
from which brains are grown.

Two structurally different families of encodings are provided:
- Graph-program: a grid of function nodes wired by connection genes (CGP)
- Weight-vector: the weights of a fixed topology, with feed-forward, LSTM
                 or LSTM-lite hidden layers

Modules:
    genotype_base:    GenotypeKind, Genealogy and the Genotype base class
    cgp_genotype:     FunctionGene, OutputGene and CgpGenotype classes
    weight_operators: Genetic operators on weight matrices
    weight_gene:      FeedforwardGene, LstmGene and LstmLiteGene classes
    cne_genotype:     Weight-vector genotype classes

Exported Classes:
    GenotypeKind:        Enumeration of the supported encodings
    Genealogy:           How a genotype was created
    Genotype:            Abstract base class for all genotype encodings
    FunctionGene:        Gene encoding a grid node
    OutputGene:          Gene encoding a brain output
    CgpGenotype:         Graph-program genotype
    FeedforwardGene:     Gene encoding a feed-forward layer
    LstmGene:            Gene encoding an LSTM layer
    LstmLiteGene:        Gene encoding an LSTM-lite layer
    CneGenotype:         Base class for weight-vector genotypes
    FeedforwardGenotype: Weight-vector genotype with feed-forward hidden layers
    LstmGenotype:        Weight-vector genotype with LSTM hidden layers
    LstmLiteGenotype:    Weight-vector genotype with LSTM-lite hidden layers

Exported:
    genotype_classes:                Dictionary mapping each GenotypeKind to its class
    create_genotype(config, domain): Create an empty genotype of the configured kind
"""

from typing import TYPE_CHECKING

from evobrain.genotype.genotype_base import GenotypeKind, Genealogy, Genotype
from evobrain.genotype.cgp_genotype  import FunctionGene, OutputGene, CgpGenotype
from evobrain.genotype.weight_gene   import FeedforwardGene, LstmGene, LstmLiteGene
from evobrain.genotype.cne_genotype  import CneGenotype, FeedforwardGenotype, LstmGenotype, LstmLiteGenotype
if TYPE_CHECKING:
    from evobrain.run import Config, Domain

genotype_classes = {
    GenotypeKind.CGP        : CgpGenotype,
    GenotypeKind.FEEDFORWARD: FeedforwardGenotype,
    GenotypeKind.LSTM       : LstmGenotype,
    GenotypeKind.LSTM_LITE  : LstmLiteGenotype
    }

def create_genotype(config: 'Config', domain: 'Domain') -> Genotype:
    """
    Create an empty genotype of the kind selected by 'config.genotype'.

    Raises:
        ValueError: If the configured kind is unknown
    """
    try:
        kind = GenotypeKind(config.genotype)
    except ValueError:
        raise ValueError(f"Unknown genotype: {config.genotype}. "
                         f"Use one of {', '.join(k.value for k in GenotypeKind)}.") from None
    return genotype_classes[kind](config, domain)

__all__ = ['GenotypeKind',
           'Genealogy',
           'Genotype',
           'FunctionGene',
           'OutputGene',
           'CgpGenotype',
           'FeedforwardGene',
           'LstmGene',
           'LstmLiteGene',
           'CneGenotype',
           'FeedforwardGenotype',
           'LstmGenotype',
           'LstmLiteGenotype',
           'genotype_classes',
           'create_genotype']
