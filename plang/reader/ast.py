"""Expression and statement nodes produced by the parser.

Every node carries an `id` drawn from a process-wide counter. Ids are never
reused, so the resolver's distance table can be keyed by id even when a REPL
session parses many separate lines. Nodes compare and hash by identity: two
syntactically identical references to `x` are different keys.
"""

from __future__ import annotations

from dataclasses import dataclass, field, fields
from itertools import count
from typing import Optional

from plang import Value
from plang.reader.token import Token

_node_ids = count(1)


def next_node_id() -> int:
    return next(_node_ids)


@dataclass(eq=False)
class Node:
    id: int = field(default_factory=next_node_id, kw_only=True)


# ----------------- Expressions -----------------

@dataclass(eq=False)
class Expr(Node):
    pass


@dataclass(eq=False)
class Literal(Expr):
    value: Value


@dataclass(eq=False)
class Grouping(Expr):
    expression: Expr


@dataclass(eq=False)
class Unary(Expr):
    operator: Token
    right: Expr


@dataclass(eq=False)
class Binary(Expr):
    left: Expr
    operator: Token
    right: Expr


@dataclass(eq=False)
class Logical(Expr):
    left: Expr
    operator: Token
    right: Expr


@dataclass(eq=False)
class Variable(Expr):
    name: Token


@dataclass(eq=False)
class Assign(Expr):
    name: Token
    value: Expr


@dataclass(eq=False)
class Call(Expr):
    callee: Expr
    paren: Token
    arguments: list[Expr]


@dataclass(eq=False)
class Get(Expr):
    object: Expr
    name: Token


@dataclass(eq=False)
class Set(Expr):
    object: Expr
    name: Token
    value: Expr


@dataclass(eq=False)
class This(Expr):
    keyword: Token


@dataclass(eq=False)
class Super(Expr):
    keyword: Token
    method: Token


@dataclass(eq=False)
class AnonFunction(Expr):
    paren: Token
    params: list[Token]
    body: list[Stmt]


def line_of(expr: Expr) -> Optional[int]:
    """Line of the first token inside `expr`; None for a bare literal."""
    for f in fields(expr):
        child = getattr(expr, f.name)
        if isinstance(child, Token):
            return child.line
        if isinstance(child, Expr):
            line = line_of(child)
            if line is not None:
                return line
    return None


# ----------------- Statements -----------------

@dataclass(eq=False)
class Stmt(Node):
    pass


@dataclass(eq=False)
class Expression(Stmt):
    expression: Expr


@dataclass(eq=False)
class Print(Stmt):
    expression: Expr


@dataclass(eq=False)
class Var(Stmt):
    name: Token
    initializer: Optional[Expr] = None


@dataclass(eq=False)
class Block(Stmt):
    statements: list[Stmt]


@dataclass(eq=False)
class If(Stmt):
    condition: Expr
    then_branch: Stmt
    else_branch: Optional[Stmt] = None


@dataclass(eq=False)
class While(Stmt):
    condition: Expr
    body: Stmt


@dataclass(eq=False)
class Function(Stmt):
    name: Token
    params: list[Token]
    body: list[Stmt]


@dataclass(eq=False)
class Return(Stmt):
    keyword: Token
    value: Optional[Expr] = None


@dataclass(eq=False)
class Class(Stmt):
    name: Token
    methods: list[Function]
    superclass: Optional[Variable] = None
