"""Unary and binary operators over runtime values.

Numbers are IEEE-754 doubles: division by zero yields inf, -inf or NaN
rather than failing. `+` also concatenates, turning a Number operand into its
printed text when the other side is a String.
"""

from __future__ import annotations

import math
import operator

from plang import Value
from plang.reader.token import Token, TokenType
from plang.types.errors import PlangTypeError
from plang.types.values import format_number, is_falsey, type_name, values_equal

ARITHMETIC = {
    TokenType.MINUS: operator.sub,
    TokenType.STAR: operator.mul,
}

COMPARISON = {
    TokenType.GREATER: operator.gt,
    TokenType.GREATER_EQUAL: operator.ge,
    TokenType.LESS: operator.lt,
    TokenType.LESS_EQUAL: operator.le,
}


def divide(left: float, right: float) -> float:
    if right == 0:
        if left == 0 or math.isnan(left):
            return math.nan
        return math.copysign(math.inf, left) * math.copysign(1.0, right)
    return left / right


def unary(op: Token, right: Value) -> Value:
    if op.type is TokenType.MINUS:
        if isinstance(right, float):
            return -right
        raise PlangTypeError(
            f"Operator '-' is not defined for {type_name(right)}.", op.line
        )
    if op.type is TokenType.BANG:
        return is_falsey(right, op.line)
    raise PlangTypeError(f"'{op.lexeme}' is not a valid unary operator.", op.line)


def binary(op: Token, left: Value, right: Value) -> Value:
    kind = op.type

    if kind is TokenType.EQUAL_EQUAL:
        return values_equal(left, right)
    if kind is TokenType.BANG_EQUAL:
        return not values_equal(left, right)

    numbers = isinstance(left, float) and isinstance(right, float)

    if kind is TokenType.PLUS:
        if numbers:
            return left + right
        if isinstance(left, str) and isinstance(right, str):
            return left + right
        if isinstance(left, float) and isinstance(right, str):
            return format_number(left) + right
        if isinstance(left, str) and isinstance(right, float):
            return left + format_number(right)
    elif numbers:
        if kind is TokenType.SLASH:
            return divide(left, right)
        if kind in ARITHMETIC:
            return ARITHMETIC[kind](left, right)
        if kind in COMPARISON:
            return COMPARISON[kind](left, right)

    raise PlangTypeError(
        f"Operator '{op.lexeme}' is not defined for {type_name(left)} and {type_name(right)}.",
        op.line,
    )
