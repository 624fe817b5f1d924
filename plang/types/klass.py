"""Class and instance runtime values."""

from __future__ import annotations

from typing import Optional

from plang import Value
from plang.types.errors import PlangUndefinedProperty
from plang.types.function import Function


class PlangClass:
    """A class: its name, method table and optional direct superclass."""

    __slots__ = ("name", "methods", "superclass")

    def __init__(
        self,
        name: str,
        methods: dict[str, Function],
        superclass: Optional[PlangClass] = None,
    ):
        self.name = name
        self.methods = methods
        self.superclass = superclass

    def find_method(self, name: str) -> Optional[Function]:
        """Look `name` up in this class, then in the direct superclass only.

        Deeper ancestors are not consulted.
        """
        method = self.methods.get(name)
        if method is None and self.superclass is not None:
            method = self.superclass.methods.get(name)
        return method

    def __str__(self) -> str:
        return f"Class '{self.name}'"

    def __repr__(self) -> str:
        return f"<class {self.name}>"


class Instance:
    """An object of a PlangClass with fields appended on first write."""

    __slots__ = ("klass", "fields")

    def __init__(self, klass: PlangClass):
        self.klass = klass
        # dict keeps insertion order and unique names
        self.fields: dict[str, Value] = {}

    def get(self, name: str, line: int | None = None) -> Value:
        """Field first, then a method bound to this instance."""
        if name in self.fields:
            return self.fields[name]

        method = self.klass.find_method(name)
        if method is not None:
            return method.bind(self)

        raise PlangUndefinedProperty(
            f"Undefined property '{name}' on instance of '{self.klass.name}'.", line
        )

    def set(self, name: str, value: Value) -> None:
        self.fields[name] = value

    def __str__(self) -> str:
        return f"Instance of '{self.klass.name}'"

    def __repr__(self) -> str:
        return f"<instance of {self.klass.name}>"
