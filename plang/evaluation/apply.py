"""Application engine for Plang.

This module centralizes call semantics for the interpreter:
- User functions run in a new frame enclosing their captured closure, never
  the caller's frame, with parameters bound positionally.
- Constructing an instance runs `init` (found on the class or its direct
  superclass) bound to the new instance and discards its result.
- Arity is checked here for user code only; natives check their own.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from plang import Value
from plang.types.errors import PlangArityError
from plang.types.function import Function
from plang.types.klass import Instance, PlangClass
from plang.types.completion import Returning
from plang.types.nil import Nil

if TYPE_CHECKING:
    from plang.interpreter import Interpreter


def check_arity(fn: Function, count: int, line: int | None = None) -> None:
    if count != fn.arity:
        raise PlangArityError(
            f"Callable {fn.name} expected {fn.arity} arguments but got {count}.", line
        )


def initializer(klass: PlangClass) -> Function | None:
    return klass.find_method("init")


def call_function(fn: Function, args: list[Value], interp: Interpreter) -> Value:
    """Run `fn` on already-evaluated `args`; the result is the returned value or Nil."""
    # Lazy import: the executor evaluates expressions, which call back into here
    from plang.evaluation.executor import execute_block

    env = fn.closure.enclose()
    for param, arg in zip(fn.params, args):
        env.define(param.lexeme, arg)

    completion = execute_block(fn.body, env, interp)
    if isinstance(completion, Returning):
        return completion.value
    return Nil


def construct(klass: PlangClass, args: list[Value], interp: Interpreter) -> Instance:
    """Create an instance, run its initializer if there is one, and return the instance."""
    instance = Instance(klass)
    init = initializer(klass)
    if init is not None:
        call_function(init.bind(instance), args, interp)
    return instance
