"""Static scope resolution for Plang.

A single pass over a parsed program that runs to completion before anything
executes. It produces the distance table: for every reference to a local
name (variables, assignments, `this`, `super`, local class declarations), the
number of frames between the referencing scope and the declaring scope.
References it cannot find in any tracked scope get no entry and are looked up
in the global frame at run time.

It also enforces the scoping rules: no reading a local in its own
initializer, no duplicate declaration within one local scope, `return` only in
functions, `this`/`super` only inside class methods, `super` only in
subclasses, no class inheriting from itself.
"""

from __future__ import annotations

import logging
from enum import Enum, auto

from plang import DistanceTable
from plang.reader import ast
from plang.reader.token import Token
from plang.types.errors import (
    PlangDuplicateDeclaration,
    PlangInvalidSuperUsage,
    PlangReturnOutsideFunction,
    PlangSelfInheritingClass,
    PlangSelfReferenceInInitializer,
    PlangSuperOutsideMethod,
    PlangThisOutsideMethod,
)

logger = logging.getLogger(__name__)


class FunctionType(Enum):
    NONE = auto()
    FUNCTION = auto()
    METHOD = auto()


class ClassType(Enum):
    NONE = auto()
    CLASS = auto()
    SUBCLASS = auto()


class Resolver:
    """Walks statements and expressions with a stack of local scopes.

    Each scope maps a name to whether its declaration has finished
    (False while the initializer is being resolved). The global scope is
    never on the stack.
    """

    def __init__(self):
        self.scopes: list[dict[str, bool]] = []
        self.distances: DistanceTable = {}
        self.current_function = FunctionType.NONE
        self.current_class = ClassType.NONE

    def resolve_program(self, statements: list[ast.Stmt]) -> DistanceTable:
        self.resolve_all(statements)
        logger.debug("Resolved %d local references", len(self.distances))
        return self.distances

    def resolve_all(self, statements: list[ast.Stmt]) -> None:
        for stmt in statements:
            self.resolve_stmt(stmt)

    # ----------------- Statements -----------------

    def resolve_stmt(self, stmt: ast.Stmt) -> None:
        match stmt:
            case ast.Block(statements=statements):
                self.begin_scope()
                self.resolve_all(statements)
                self.end_scope()
            case ast.Var(name=name, initializer=initializer):
                self.declare(name)
                if initializer is not None:
                    self.resolve_expr(initializer)
                self.define(name)
            case ast.Function(name=name):
                # Defined before the body so the function can call itself
                self.declare(name)
                self.define(name)
                self.resolve_function(stmt.params, stmt.body, FunctionType.FUNCTION)
            case ast.Class():
                self.resolve_class(stmt)
            case ast.Expression(expression=expression) | ast.Print(expression=expression):
                self.resolve_expr(expression)
            case ast.If(condition=condition, then_branch=then_branch, else_branch=else_branch):
                self.resolve_expr(condition)
                self.resolve_stmt(then_branch)
                if else_branch is not None:
                    self.resolve_stmt(else_branch)
            case ast.While(condition=condition, body=body):
                self.resolve_expr(condition)
                self.resolve_stmt(body)
            case ast.Return(keyword=keyword, value=value):
                if self.current_function is FunctionType.NONE:
                    raise PlangReturnOutsideFunction(
                        "Can't return from top-level code.", keyword.line
                    )
                if value is not None:
                    self.resolve_expr(value)
            case _:
                raise TypeError(f"Unknown statement node: {stmt!r}")

    def resolve_class(self, stmt: ast.Class) -> None:
        enclosing_class = self.current_class
        self.current_class = ClassType.CLASS

        self.declare(stmt.name)
        self.define(stmt.name)
        self.resolve_local(stmt, stmt.name.lexeme)

        if stmt.superclass is not None:
            if stmt.superclass.name.lexeme == stmt.name.lexeme:
                raise PlangSelfInheritingClass(
                    f"Class '{stmt.name.lexeme}' can't inherit from itself.",
                    stmt.superclass.name.line,
                )
            self.current_class = ClassType.SUBCLASS
            self.resolve_expr(stmt.superclass)
            self.begin_scope()
            self.scopes[-1]["super"] = True

        self.begin_scope()
        self.scopes[-1]["this"] = True

        for method in stmt.methods:
            self.resolve_function(method.params, method.body, FunctionType.METHOD)

        self.end_scope()
        if stmt.superclass is not None:
            self.end_scope()

        self.current_class = enclosing_class

    def resolve_function(
        self, params: list[Token], body: list[ast.Stmt], kind: FunctionType
    ) -> None:
        enclosing_function = self.current_function
        self.current_function = kind

        self.begin_scope()
        for param in params:
            self.declare(param)
            self.define(param)
        self.resolve_all(body)
        self.end_scope()

        self.current_function = enclosing_function

    # ----------------- Expressions -----------------

    def resolve_expr(self, expr: ast.Expr) -> None:
        match expr:
            case ast.Variable(name=name):
                if self.scopes and self.scopes[-1].get(name.lexeme) is False:
                    raise PlangSelfReferenceInInitializer(
                        f"Can't read local variable '{name.lexeme}' in its own initializer.",
                        name.line,
                    )
                self.resolve_local(expr, name.lexeme)
            case ast.Assign(name=name, value=value):
                self.resolve_expr(value)
                self.resolve_local(expr, name.lexeme)
            case ast.Binary(left=left, right=right) | ast.Logical(left=left, right=right):
                self.resolve_expr(left)
                self.resolve_expr(right)
            case ast.Unary(right=right):
                self.resolve_expr(right)
            case ast.Grouping(expression=expression):
                self.resolve_expr(expression)
            case ast.Literal():
                pass
            case ast.Call(callee=callee, arguments=arguments):
                self.resolve_expr(callee)
                for argument in arguments:
                    self.resolve_expr(argument)
            case ast.Get(object=obj):
                self.resolve_expr(obj)
            case ast.Set(object=obj, value=value):
                self.resolve_expr(value)
                self.resolve_expr(obj)
            case ast.This(keyword=keyword):
                if self.current_class is ClassType.NONE:
                    raise PlangThisOutsideMethod(
                        "Can't use 'this' outside of a class method.", keyword.line
                    )
                self.resolve_local(expr, "this")
            case ast.Super(keyword=keyword):
                if self.current_class is ClassType.NONE:
                    raise PlangSuperOutsideMethod(
                        "Can't use 'super' outside of a class method.", keyword.line
                    )
                if self.current_class is not ClassType.SUBCLASS:
                    raise PlangInvalidSuperUsage(
                        "Can't use 'super' in a class with no superclass.", keyword.line
                    )
                # `super` sits one frame outside `this`, so both must be on the stack
                if len(self.scopes) < 2 or not self.resolve_local(expr, "super"):
                    raise PlangInvalidSuperUsage(
                        "'super' is not bound in an enclosing scope.", keyword.line
                    )
            case ast.AnonFunction(params=params, body=body):
                self.resolve_function(params, body, FunctionType.FUNCTION)
            case _:
                raise TypeError(f"Unknown expression node: {expr!r}")

    # ----------------- Scopes -----------------

    def begin_scope(self) -> None:
        self.scopes.append({})

    def end_scope(self) -> None:
        self.scopes.pop()

    def declare(self, name: Token) -> None:
        if not self.scopes:
            return
        scope = self.scopes[-1]
        if name.lexeme in scope:
            raise PlangDuplicateDeclaration(
                f"Already a variable named '{name.lexeme}' in this scope.", name.line
            )
        scope[name.lexeme] = False

    def define(self, name: Token) -> None:
        if not self.scopes:
            return
        self.scopes[-1][name.lexeme] = True

    def resolve_local(self, node: ast.Node, name: str) -> bool:
        """Record how many scopes out `name` was declared; False if not in any local scope."""
        depth = len(self.scopes)
        for i in range(depth - 1, -1, -1):
            if name in self.scopes[i]:
                self.distances[node.id] = depth - 1 - i
                return True
        return False


def resolve_program(statements: list[ast.Stmt]) -> DistanceTable:
    """Resolve `statements` with a fresh Resolver and return the distance table."""
    return Resolver().resolve_program(statements)
