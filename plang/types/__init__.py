from plang.types.nil import Nil, NilType
from plang.types.environment import Environment
from plang.types.function import Function, NativeFunction
from plang.types.klass import Instance, PlangClass
from plang.types.completion import NORMAL, Completion, Normal, Returning

__all__ = [
    "Nil",
    "NilType",
    "Environment",
    "Function",
    "NativeFunction",
    "Instance",
    "PlangClass",
    "NORMAL",
    "Completion",
    "Normal",
    "Returning",
]
