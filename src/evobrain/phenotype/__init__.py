"""
Phenotype Package

This package implements the brains: the executable phenotypes grown from genotypes.

The phenotype layer transforms the genetic representation (genotype) into a
functioning controller that maps input vectors to output vectors. A brain is
grown again from its genotype at the start of every evaluation episode and
discarded once its fitness has been recorded.

Modules:
    brain_base: Abstract base class for brains
    cgp_brain:  Brain evaluating a graph program
    cne_layers: Feed-forward, LSTM and LSTM-lite layers
    cne_brain:  Brain made of a stack of layers

Exported Classes:
    Brain:            Abstract base class for brains
    CgpBrain:         Graph-program brain
    CneBrain:         Weight-vector brain
    Layer:            Abstract base class for layers
    FeedforwardLayer: Stateless fully connected layer
    LstmLayer:        Layer of LSTM units
    LstmLiteLayer:    Layer of single-gate LSTM units
"""

from evobrain.phenotype.brain_base import Brain
from evobrain.phenotype.cgp_brain  import CgpBrain
from evobrain.phenotype.cne_brain  import CneBrain
from evobrain.phenotype.cne_layers import Layer, FeedforwardLayer, LstmLayer, LstmLiteLayer

__all__ = ['Brain',
           'CgpBrain',
           'CneBrain',
           'Layer',
           'FeedforwardLayer',
           'LstmLayer',
           'LstmLiteLayer']
