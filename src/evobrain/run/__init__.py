"""
Run Package

This package provides the configuration of an evolutionary run
and the contract of the domains on which brains are evaluated.

Modules:
    config: Config class
    domain: Domain abstract base class

Exported Classes:
    Config: Configuration parameters, parsed from an INI file
    Domain: Abstract base class for evaluation domains
"""

from evobrain.run.config import Config
from evobrain.run.domain import Domain

__all__ = ['Config',
           'Domain']
