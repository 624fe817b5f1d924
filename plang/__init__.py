# Core type aliases for Plang's data model.
# Runtime values are plain Python objects where one fits (float, str, bool) plus
# the Nil singleton and the callable/class/instance types in plang.types.
#
# Naming guidance:
# - Value: use in evaluator/runtime code to denote evaluated values.
# - DistanceTable: node id -> number of enclosing frames to walk, produced by the
#   resolver and read by the interpreter.

from typing import Any

__version__ = "0.1.0"

# Runtime value alias
Value = Any

# Resolver output consumed by the interpreter
DistanceTable = dict[int, int]
