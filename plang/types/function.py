"""Callable runtime values: user-defined functions and host-implemented natives."""

from __future__ import annotations

import logging
from typing import Callable, TYPE_CHECKING

from plang import Value
from plang.reader.token import Token
from plang.types.environment import Environment

if TYPE_CHECKING:
    from plang.reader.ast import Stmt
    from plang.types.klass import Instance

logger = logging.getLogger(__name__)


class Function:
    """A first-class function with parameters, body, and closure env.

    The closure is the frame active where the function was created, shared
    with every other holder of that frame. Calls enclose the closure, never
    the caller's frame.
    """

    __slots__ = ("name", "params", "body", "closure")

    def __init__(
        self, name: str, params: list[Token], body: list[Stmt], closure: Environment
    ):
        self.name = name
        self.params = params
        self.body = body
        self.closure = closure
        logger.debug(
            "Closure created: %s/%d, closure depth %d", name, len(params), closure.depth()
        )

    @property
    def arity(self) -> int:
        return len(self.params)

    def bind(self, instance: Instance) -> Function:
        """Return a copy whose closure has an extra frame binding `this` to `instance`."""
        env = self.closure.enclose()
        env.define("this", instance)
        return Function(self.name, self.params, self.body, env)

    def __str__(self) -> str:
        return f"{self.name}/{self.arity}"

    def __repr__(self) -> str:
        return f"<fn {self}>"


class NativeFunction:
    """A callable implemented in Python and exposed through the same shape as Function.

    `fn` receives the evaluated argument list and is trusted to check its own
    argument count.
    """

    __slots__ = ("name", "arity", "fn")

    def __init__(self, name: str, arity: int, fn: Callable[[list[Value]], Value]):
        self.name = name
        self.arity = arity
        self.fn = fn

    def __call__(self, args: list[Value]) -> Value:
        return self.fn(args)

    def __str__(self) -> str:
        return f"{self.name}/{self.arity}"

    def __repr__(self) -> str:
        return f"<native fn {self}>"
