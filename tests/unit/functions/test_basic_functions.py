"""
Unit tests for the graph-program primitives.
"""

import math
import pytest
import numpy as np
from evobrain.functions import FunctionId, MAX_FUNCTION_ARITY, functions, function_arity, function_codes


class TestCatalogue:
    """Test the primitive catalogue metadata."""

    def test_every_primitive_has_implementation_arity_and_code(self):
        for fn in FunctionId:
            assert fn in functions
            assert fn in function_arity
            assert fn in function_codes

    def test_identifiers_are_contiguous(self):
        assert [int(fn) for fn in FunctionId] == list(range(len(FunctionId)))

    def test_arity_never_exceeds_connection_slots(self):
        assert all(0 <= arity <= MAX_FUNCTION_ARITY for arity in function_arity.values())

    def test_constants_read_no_arguments(self):
        for fn in (FunctionId.ZERO, FunctionId.ONE, FunctionId.TWO):
            assert function_arity[fn] == 0

    def test_codes_are_lowercase_names(self):
        assert function_codes[FunctionId.AFN_TANH] == "afn_tanh"


class TestArithmetic:
    """Test the arithmetic primitives."""

    @pytest.mark.parametrize("fn, a, b, expected", [
        (FunctionId.ZERO,     5.0, 7.0,  0.0),
        (FunctionId.ONE,      5.0, 7.0,  1.0),
        (FunctionId.TWO,      5.0, 7.0,  2.0),
        (FunctionId.IDENTITY, 5.0, 7.0,  5.0),
        (FunctionId.ADD,      5.0, 7.0, 12.0),
        (FunctionId.SUBTRACT, 5.0, 7.0, -2.0),
        (FunctionId.MULTIPLY, 5.0, 7.0, 35.0),
        (FunctionId.DIVIDE,   6.0, 3.0,  2.0),
        (FunctionId.NEGATE,   5.0, 7.0, -5.0),
        (FunctionId.ABS,     -5.0, 7.0,  5.0),
        (FunctionId.AVERAGE,  5.0, 7.0,  6.0),
        (FunctionId.MIN,      5.0, 7.0,  5.0),
        (FunctionId.MAX,      5.0, 7.0,  7.0),
        (FunctionId.SQUARE,  -3.0, 7.0,  9.0),
        (FunctionId.CUBE,    -2.0, 7.0, -8.0),
        (FunctionId.SQRT,     9.0, 7.0,  3.0),
    ])
    def test_values(self, fn, a, b, expected):
        assert functions[fn](a, b) == pytest.approx(expected)

    def test_divide_by_zero_returns_zero(self):
        assert functions[FunctionId.DIVIDE](5.0, 0.0) == 0.0

    def test_sqrt_of_negative_uses_magnitude(self):
        assert functions[FunctionId.SQRT](-4.0, 0.0) == pytest.approx(2.0)

    def test_log_of_zero_is_finite(self):
        assert math.isfinite(functions[FunctionId.LOG](0.0, 0.0))

    def test_exp_does_not_overflow(self):
        assert math.isfinite(functions[FunctionId.EXP](1e6, 0.0))

    def test_square_does_not_overflow(self):
        assert math.isfinite(functions[FunctionId.SQUARE](1e300, 0.0))


class TestLogicAndComparisons:
    """Test the comparison, logic and conditional primitives."""

    @pytest.mark.parametrize("fn, a, b, expected", [
        (FunctionId.CMP_EQ,     1.0, 1.0, 1.0),
        (FunctionId.CMP_EQ,     1.0, 2.0, 0.0),
        (FunctionId.CMP_GT,     2.0, 1.0, 1.0),
        (FunctionId.CMP_LT,     2.0, 1.0, 0.0),
        (FunctionId.AND,        1.0, 0.0, 0.0),
        (FunctionId.OR,         1.0, 0.0, 1.0),
        (FunctionId.NOT,        0.0, 5.0, 1.0),
        (FunctionId.XOR,        1.0, 1.0, 0.0),
        (FunctionId.XOR,        1.0, 0.0, 1.0),
        (FunctionId.IF_OR_ZERO, 1.0, 3.0, 3.0),
        (FunctionId.IF_OR_ZERO, -1.0, 3.0, 0.0),
    ])
    def test_values(self, fn, a, b, expected):
        assert functions[fn](a, b) == expected

    def test_gate_scales_by_logistic(self):
        assert functions[FunctionId.GATE](4.0, 0.0) == pytest.approx(2.0)

    def test_activation_primitives(self):
        assert functions[FunctionId.AFN_LOGISTIC](0.0, 0.0) == pytest.approx(0.5)
        assert functions[FunctionId.AFN_TANH](0.0, 0.0) == pytest.approx(0.0)
        assert functions[FunctionId.AFN_RELU](-3.0, 0.0) == 0.0
        assert functions[FunctionId.SIN](0.0, 0.0) == pytest.approx(0.0)
        assert functions[FunctionId.COS](0.0, 0.0) == pytest.approx(1.0)

    def test_no_primitive_raises_on_extreme_values(self):
        with np.errstate(all='ignore'):
            for fn in FunctionId:
                for a, b in [(0.0, 0.0), (1e308, -1e308), (-1e308, 0.0), (float('inf'), 1.0)]:
                    functions[fn](a, b)
