"""
Functions Package

This package provides the catalogue of primitives evaluated by graph-program nodes.

Exported:
    FunctionId:         Enumeration of the primitive identifiers
    MAX_FUNCTION_ARITY: Number of connection slots carried by every function gene
    functions:          Dictionary mapping each FunctionId to its implementation
    function_arity:     Dictionary mapping each FunctionId to the number of arguments it reads
    function_codes:     Dictionary mapping each FunctionId to a printable mnemonic
"""

from evobrain.functions.basic_functions import (
    FunctionId,
    MAX_FUNCTION_ARITY,
    functions,
    function_arity,
    function_codes
)

__all__ = [
    'FunctionId',
    'MAX_FUNCTION_ARITY',
    'functions',
    'function_arity',
    'function_codes'
]
