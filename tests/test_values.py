import math

import pytest
from hypothesis import given, strategies as st

from plang.evaluation.operators import binary, unary
from plang.reader.token import Token, TokenType
from plang.types.environment import Environment
from plang.types.errors import PlangTypeError
from plang.types.function import Function, NativeFunction
from plang.types.klass import Instance, PlangClass
from plang.types.nil import Nil, NilType
from plang.types.values import (
    format_number,
    is_falsey,
    is_truthy,
    stringify,
    type_name,
    values_equal,
)


def op(kind: TokenType, lexeme: str) -> Token:
    return Token(kind, lexeme, None, 1)


PLUS = op(TokenType.PLUS, "+")
MINUS = op(TokenType.MINUS, "-")
SLASH = op(TokenType.SLASH, "/")
BANG = op(TokenType.BANG, "!")
EQ = op(TokenType.EQUAL_EQUAL, "==")
LESS = op(TokenType.LESS, "<")

KLASS = PlangClass("A", {})
FN = Function("f", [], [], Environment())
NATIVE = NativeFunction("clock", 0, lambda args: 0.0)


@pytest.mark.parametrize(
    "value,name,text",
    [
        (1.0, "Number", "1"),
        (2.5, "Number", "2.5"),
        ("hi", "String", "hi"),
        (True, "Boolean", "true"),
        (False, "Boolean", "false"),
        (Nil, "Nil", "nil"),
        (FN, "Callable", "f/0"),
        (NATIVE, "Callable", "clock/0"),
        (KLASS, "Class", "Class 'A'"),
        (Instance(KLASS), "Instance", "Instance of 'A'"),
    ],
)
def test_type_name_and_stringify(value, name, text):
    assert type_name(value) == name
    assert stringify(value) == text


@pytest.mark.parametrize(
    "x,text",
    [(math.inf, "inf"), (-math.inf, "-inf"), (math.nan, "NaN"), (-0.0, "-0"), (0.1, "0.1")],
)
def test_format_special_numbers(x, text):
    assert format_number(x) == text


@pytest.mark.parametrize(
    "x,text",
    [
        (0.00000015, "0.00000015"),
        (-1.5e-10, "-0.00000000015"),
        (123.456, "123.456"),
        (1e21, "1000000000000000000000"),
        (1e300 * 10, "1" + "0" * 301),
        (2.0**70, "1180591620717411300000"),
    ],
)
def test_numbers_print_positionally(x, text):
    assert format_number(x) == text


@given(st.integers(min_value=-10**15, max_value=10**15))
def test_integral_numbers_print_without_fraction(n):
    assert format_number(float(n)) == str(n)


@given(st.floats(allow_nan=False, allow_infinity=False).filter(lambda x: not x.is_integer()))
def test_fractional_numbers_print_exactly(x):
    assert float(format_number(x)) == x


def test_nil_is_a_singleton():
    assert NilType() is Nil
    assert repr(Nil) == "nil"


@pytest.mark.parametrize(
    "value,truthy,falsey",
    [
        (0.0, False, True),
        (3.0, True, False),
        ("", False, True),
        ("a", True, False),
        (True, True, False),
        (False, False, True),
        # nil: truthy under the affirmative test, not falsey under negation
        (Nil, True, False),
    ],
)
def test_truthiness(value, truthy, falsey):
    assert is_truthy(value) is truthy
    assert is_falsey(value) is falsey


@pytest.mark.parametrize("value", [FN, NATIVE, KLASS, Instance(KLASS)])
def test_objects_have_no_truth_value(value):
    with pytest.raises(PlangTypeError):
        is_truthy(value)
    with pytest.raises(PlangTypeError):
        is_falsey(value, 4)


@given(st.floats(allow_nan=False), st.text())
def test_numbers_never_equal_strings(x, s):
    assert not values_equal(x, s)
    assert not values_equal(s, x)


@pytest.mark.parametrize(
    "a,b,equal",
    [
        (True, 1.0, False),
        (False, 0.0, False),
        (Nil, False, False),
        (Nil, Nil, True),
        ("a", "a", True),
        (1.0, 1.0, True),
        (KLASS, KLASS, True),
        (KLASS, PlangClass("A", {}), False),
        (Instance(KLASS), Instance(KLASS), False),
        (FN, Function("f", [], [], Environment()), True),
        (FN, Function("g", [], [], Environment()), False),
        (NATIVE, NativeFunction("clock", 0, lambda args: 1.0), True),
    ],
)
def test_values_equal(a, b, equal):
    assert values_equal(a, b) is equal


# -----------------------------------------------------
# Operators
# -----------------------------------------------------

@given(st.text(), st.floats(allow_nan=False))
def test_plus_concatenates_numbers_into_strings(s, x):
    assert binary(PLUS, s, x) == s + format_number(x)
    assert binary(PLUS, x, s) == format_number(x) + s


def test_arithmetic_and_comparison():
    assert binary(PLUS, 1.0, 2.0) == 3.0
    assert binary(MINUS, 1.0, 2.0) == -1.0
    assert binary(SLASH, 1.0, 4.0) == 0.25
    assert binary(LESS, 1.0, 2.0) is True
    assert binary(EQ, 1.0, "1") is False


@pytest.mark.parametrize(
    "left,right,expected",
    [(1.0, 0.0, math.inf), (-1.0, 0.0, -math.inf), (1.0, -0.0, -math.inf)],
)
def test_division_by_zero_follows_ieee(left, right, expected):
    assert binary(SLASH, left, right) == expected


def test_zero_over_zero_is_nan():
    assert math.isnan(binary(SLASH, 0.0, 0.0))


@pytest.mark.parametrize(
    "operator,left,right",
    [(MINUS, "a", 1.0), (LESS, "a", "b"), (PLUS, True, 1.0), (PLUS, Nil, "x"), (SLASH, 1.0, Nil)],
)
def test_operator_type_errors(operator, left, right):
    with pytest.raises(PlangTypeError) as exc:
        binary(operator, left, right)
    assert exc.value.line == 1
    assert f"Operator '{operator.lexeme}' is not defined for" in str(exc.value)


def test_unary_operators():
    assert unary(MINUS, 2.0) == -2.0
    assert unary(BANG, 0.0) is True
    assert unary(BANG, Nil) is False
    with pytest.raises(PlangTypeError):
        unary(MINUS, "a")
