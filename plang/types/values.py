"""Operations over the dynamic value model: naming, printing, truthiness, equality.

Values are one of: float (Number), str (String), bool (Boolean), Nil,
Function / NativeFunction (Callable), PlangClass (Class), Instance.
Every helper here matches over that closed set and rejects anything else.
"""

from __future__ import annotations

import math
from decimal import Decimal

from plang import Value
from plang.types.errors import PlangTypeError
from plang.types.function import Function, NativeFunction
from plang.types.klass import Instance, PlangClass
from plang.types.nil import NilType


def type_name(value: Value) -> str:
    match value:
        case bool():
            return "Boolean"
        case float():
            return "Number"
        case str():
            return "String"
        case NilType():
            return "Nil"
        case Function() | NativeFunction():
            return "Callable"
        case PlangClass():
            return "Class"
        case Instance():
            return "Instance"
    raise TypeError(f"Not a Plang value: {value!r}")


def format_number(x: float) -> str:
    """Shortest round-trip digits written positionally, never in exponent form.

    Integral values print without a fractional part: 1e21 prints as
    1000000000000000000000 and 1.5e-7 as 0.00000015.
    """
    if math.isnan(x):
        return "NaN"
    if math.isinf(x):
        return "inf" if x > 0 else "-inf"
    if x.is_integer():
        if x == 0 and math.copysign(1.0, x) < 0:
            return "-0"
        return format(Decimal(repr(x)), "f").partition(".")[0]
    return format(Decimal(repr(x)), "f")


def stringify(value: Value) -> str:
    """Text form used by `print`, string concatenation and error messages."""
    match value:
        case bool():
            return "true" if value else "false"
        case float():
            return format_number(value)
        case str():
            return value
        case NilType():
            return "nil"
        case Function() | NativeFunction() | PlangClass() | Instance():
            return str(value)
    raise TypeError(f"Not a Plang value: {value!r}")


def is_truthy(value: Value, line: int | None = None) -> bool:
    """Affirmative truth test used by `if`, `while`, `and` and `or`. Nil is truthy."""
    match value:
        case bool():
            return value
        case float():
            return value != 0
        case str():
            return value != ""
        case NilType():
            return True
    raise PlangTypeError(f"Cannot use {type_name(value).lower()} as truthy value.", line)


def is_falsey(value: Value, line: int | None = None) -> bool:
    """Negated truth test used by unary `!`. Nil is not falsey."""
    match value:
        case bool():
            return not value
        case float():
            return value == 0
        case str():
            return value == ""
        case NilType():
            return False
    raise PlangTypeError(f"Cannot use {type_name(value).lower()} as falsey value.", line)


def values_equal(a: Value, b: Value) -> bool:
    """Equality for `==` and `!=`: never equal across types."""
    if type_name(a) != type_name(b):
        return False
    match a:
        case Function() | NativeFunction():
            # Same kind of callable, same name and arity; the closure is ignored
            return type(a) is type(b) and a.name == b.name and a.arity == b.arity
        case PlangClass() | Instance():
            return a is b
    return a == b
