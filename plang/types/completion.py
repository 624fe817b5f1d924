from __future__ import annotations

from plang import Value


class Normal:
    """Statement finished; continue with the next sibling."""

    __slots__ = ()

    def __repr__(self):
        return "Normal"


class Returning:
    """A `return` ran; unwind to the nearest enclosing function body with `value`."""

    __slots__ = ("value",)

    def __init__(self, value: Value):
        self.value = value

    def __repr__(self):
        return f"Returning({self.value!r})"


NORMAL = Normal()

Completion = Normal | Returning
