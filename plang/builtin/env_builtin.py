"""Native functions installed into the global frame of every session.

Natives receive the already-evaluated argument list and check its length
themselves.
"""
from __future__ import annotations

import time

from plang import Value
from plang.types.environment import Environment
from plang.types.errors import PlangArityError
from plang.types.function import NativeFunction


def clock(args: list[Value]) -> float:
    """Seconds since the epoch as a Number."""
    if args:
        raise PlangArityError(f"Callable clock expected 0 arguments but got {len(args)}.")
    return time.time()


NATIVES = [
    NativeFunction("clock", 0, clock),
]


def register(env: Environment) -> None:
    """Register all native functions into the given environment."""
    for native in NATIVES:
        env.define(native.name, native)
