"""Runtime environment for Plang.

An Environment is one lexical frame: a mapping from names to evaluated values
plus an `outer` link to the enclosing frame. Frames form a singly-linked chain
from the innermost block or call to the global frame. Lookups for resolved
references walk an exact number of links (the distance computed by the
resolver); unresolved references go straight to the root (global) frame.
"""

from __future__ import annotations

from typing import Optional

from plang import Value
from plang.types.errors import PlangInternalError, PlangUndefinedVariable


class Environment:
    """Single lexical frame with a link to its enclosing frame."""

    __slots__ = ("vars", "outer")

    def __init__(self, outer: Optional[Environment] = None):
        self.vars: dict[str, Value] = {}
        # Set once at creation to an already-existing frame, so the chain is acyclic
        self.outer: Environment | None = outer

    def enclose(self) -> Environment:
        """Return a new empty frame whose enclosing frame is this one."""
        return Environment(outer=self)

    def define(self, name: str, value: Value) -> None:
        """Bind `name` in this frame, replacing any binding of the same name here."""
        self.vars[name] = value

    def root(self) -> Environment:
        *_, last = self.frames()
        return last

    def ancestor(self, distance: int) -> Environment:
        """Walk exactly `distance` enclosing links.

        Raises PlangInternalError if the chain is shorter than `distance`: the
        resolver computed a nesting the interpreter did not build.
        """
        env = self
        for hop in range(distance):
            if env.outer is None:
                raise PlangInternalError(
                    f"Scope chain ended after {hop} of {distance} hops"
                )
            env = env.outer
        return env

    def get_at(self, name: str, distance: int, line: int | None = None) -> Value:
        frame = self.ancestor(distance)
        try:
            return frame.vars[name]
        except KeyError:
            raise PlangUndefinedVariable(f"Undefined variable '{name}'.", line) from None

    def assign_at(self, name: str, value: Value, distance: int, line: int | None = None) -> None:
        frame = self.ancestor(distance)
        if name not in frame.vars:
            raise PlangUndefinedVariable(f"Undefined variable '{name}'.", line)
        frame.vars[name] = value

    def get_global(self, name: str, line: int | None = None) -> Value:
        """Look up `name` in the root frame, for references the resolver left unresolved."""
        root = self.root()
        try:
            return root.vars[name]
        except KeyError:
            raise PlangUndefinedVariable(f"Undefined variable '{name}'.", line) from None

    def assign_global(self, name: str, value: Value, line: int | None = None) -> None:
        root = self.root()
        if name not in root.vars:
            raise PlangUndefinedVariable(f"Undefined variable '{name}'.", line)
        root.vars[name] = value

    def depth(self) -> int:
        """Number of enclosing links between this frame and the root."""
        n = 0
        env = self.outer
        while env is not None:
            n += 1
            env = env.outer
        return n

    def frames(self):
        """Yield this frame and then each enclosing frame up to the root."""
        env = self
        while env is not None:
            yield env
            env = env.outer

    def _bindings(self) -> str:
        return "{" + ", ".join(f"{k}: {v!r}" for k, v in self.vars.items()) + "}"

    def __str__(self) -> str:
        """This frame's bindings, with a marker when there is an enclosing frame."""
        suffix = " -> ..." if self.outer is not None else ""
        return self._bindings() + suffix

    def __repr__(self) -> str:
        """Every frame from this one out to the root."""
        return "<Environment chain: " + " -> ".join(f._bindings() for f in self.frames()) + ">"
