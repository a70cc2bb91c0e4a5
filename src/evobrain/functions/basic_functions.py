"""
Graph-Program Primitives Module

The catalogue of computation primitives available to graph-program nodes.
Every primitive takes two arguments (the values of the node's two connection
slots); primitives of smaller arity simply ignore the extra arguments.

None of the primitives raises: undefined operations (division by zero, log of
a non-positive value, ...) return a finite stand-in value instead.
"""

import numpy as np
from enum import IntEnum

from evobrain.activations import logistic_activation

# Every function gene carries this many connection slots
MAX_FUNCTION_ARITY = 2

class FunctionId(IntEnum):
    """
    Stable identifiers of the graph-program primitives.
    These are the integers stored in the persisted genotype documents.
    """
    # constants
    ZERO         = 0
    ONE          = 1
    TWO          = 2
    # basic arithmetic
    IDENTITY     = 3
    ADD          = 4
    SUBTRACT     = 5
    MULTIPLY     = 6
    DIVIDE       = 7
    NEGATE       = 8
    # common math
    ABS          = 9
    AVERAGE      = 10
    MIN          = 11
    MAX          = 12
    SQUARE       = 13
    CUBE         = 14
    SQRT         = 15
    EXP          = 16
    LOG          = 17
    # trigonometry
    SIN          = 18
    COS          = 19
    # ann activation functions
    AFN_LOGISTIC = 20
    AFN_TANH     = 21
    AFN_RELU     = 22
    # comparisons
    CMP_EQ       = 23
    CMP_GT       = 24
    CMP_LT       = 25
    # logic
    AND          = 26
    OR           = 27
    NOT          = 28
    XOR          = 29
    # conditional
    IF_OR_ZERO   = 30
    GATE         = 31

def _bool(x) -> float:
    return 1.0 if x else 0.0

def _divide(a, b):
    return a / b if b != 0 else 0.0

def _square(a):
    a = np.clip(a, -1e154, 1e154)
    return a * a

def _cube(a):
    a = np.clip(a, -1e102, 1e102)
    return a * a * a

def _sqrt(a):
    return np.sqrt(np.abs(a))

def _exp(a):
    return np.exp(np.clip(a, -100, 100))

def _log(a):
    return np.log(np.maximum(np.abs(a), 1e-7))

functions = {
    FunctionId.ZERO        : lambda a, b: 0.0,
    FunctionId.ONE         : lambda a, b: 1.0,
    FunctionId.TWO         : lambda a, b: 2.0,
    FunctionId.IDENTITY    : lambda a, b: a,
    FunctionId.ADD         : lambda a, b: a + b,
    FunctionId.SUBTRACT    : lambda a, b: a - b,
    FunctionId.MULTIPLY    : lambda a, b: a * b,
    FunctionId.DIVIDE      : _divide,
    FunctionId.NEGATE      : lambda a, b: -a,
    FunctionId.ABS         : lambda a, b: abs(a),
    FunctionId.AVERAGE     : lambda a, b: (a + b) / 2.0,
    FunctionId.MIN         : lambda a, b: min(a, b),
    FunctionId.MAX         : lambda a, b: max(a, b),
    FunctionId.SQUARE      : lambda a, b: _square(a),
    FunctionId.CUBE        : lambda a, b: _cube(a),
    FunctionId.SQRT        : lambda a, b: _sqrt(a),
    FunctionId.EXP         : lambda a, b: _exp(a),
    FunctionId.LOG         : lambda a, b: _log(a),
    FunctionId.SIN         : lambda a, b: np.sin(a),
    FunctionId.COS         : lambda a, b: np.cos(a),
    FunctionId.AFN_LOGISTIC: lambda a, b: logistic_activation(a),
    FunctionId.AFN_TANH    : lambda a, b: np.tanh(a),
    FunctionId.AFN_RELU    : lambda a, b: max(a, 0.0),
    FunctionId.CMP_EQ      : lambda a, b: _bool(a == b),
    FunctionId.CMP_GT      : lambda a, b: _bool(a > b),
    FunctionId.CMP_LT      : lambda a, b: _bool(a < b),
    FunctionId.AND         : lambda a, b: _bool(a != 0 and b != 0),
    FunctionId.OR          : lambda a, b: _bool(a != 0 or b != 0),
    FunctionId.NOT         : lambda a, b: _bool(a == 0),
    FunctionId.XOR         : lambda a, b: _bool((a != 0) != (b != 0)),
    FunctionId.IF_OR_ZERO  : lambda a, b: b if a > 0 else 0.0,
    FunctionId.GATE        : lambda a, b: a * logistic_activation(b),
    }

# Number of arguments each primitive actually reads
function_arity = {
    FunctionId.ZERO        : 0,
    FunctionId.ONE         : 0,
    FunctionId.TWO         : 0,
    FunctionId.IDENTITY    : 1,
    FunctionId.ADD         : 2,
    FunctionId.SUBTRACT    : 2,
    FunctionId.MULTIPLY    : 2,
    FunctionId.DIVIDE      : 2,
    FunctionId.NEGATE      : 1,
    FunctionId.ABS         : 1,
    FunctionId.AVERAGE     : 2,
    FunctionId.MIN         : 2,
    FunctionId.MAX         : 2,
    FunctionId.SQUARE      : 1,
    FunctionId.CUBE        : 1,
    FunctionId.SQRT        : 1,
    FunctionId.EXP         : 1,
    FunctionId.LOG         : 1,
    FunctionId.SIN         : 1,
    FunctionId.COS         : 1,
    FunctionId.AFN_LOGISTIC: 1,
    FunctionId.AFN_TANH    : 1,
    FunctionId.AFN_RELU    : 1,
    FunctionId.CMP_EQ      : 2,
    FunctionId.CMP_GT      : 2,
    FunctionId.CMP_LT      : 2,
    FunctionId.AND         : 2,
    FunctionId.OR          : 2,
    FunctionId.NOT         : 1,
    FunctionId.XOR         : 2,
    FunctionId.IF_OR_ZERO  : 2,
    FunctionId.GATE        : 2,
    }

# Short mnemonics, used when printing genotypes
function_codes = {fn: fn.name.lower() for fn in FunctionId}
