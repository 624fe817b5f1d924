from __future__ import annotations


class NilType:
    """The language's nil. Truthiness is decided by plang.types.values, not __bool__."""

    _instance: NilType | None = None

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self): return "nil"

    # Nil is equal only to Nil
    def __eq__(self, other):
        return isinstance(other, NilType)

    def __hash__(self):
        return hash(None)

    def __copy__(self):
        return self

    def __deepcopy__(self, memo):
        return self


Nil = NilType()
