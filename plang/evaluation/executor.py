"""Statement execution.

Every statement produces a Completion. `NORMAL` means carry on with the next
sibling; `Returning(value)` means a `return` ran and the remaining statements
of every enclosing block are skipped until the function body that owns it is
reached (see `plang.evaluation.apply.call_function`).
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from plang.evaluation.evaluator import evaluate
from plang.reader import ast
from plang.types.completion import NORMAL, Completion, Returning
from plang.types.environment import Environment
from plang.types.errors import (
    PlangClassDefinitionFailed,
    PlangTypeError,
    PlangUndefinedVariable,
)
from plang.types.function import Function
from plang.types.klass import PlangClass
from plang.types.nil import Nil
from plang.types.values import is_truthy, stringify, type_name

if TYPE_CHECKING:
    from plang.interpreter import Interpreter

logger = logging.getLogger(__name__)


def execute(stmt: ast.Stmt, env: Environment, interp: Interpreter) -> Completion:
    match stmt:
        case ast.Expression(expression=expression):
            evaluate(expression, env, interp)
            return NORMAL

        case ast.Print(expression=expression):
            interp.write(stringify(evaluate(expression, env, interp)))
            return NORMAL

        case ast.Var(name=name, initializer=initializer):
            value = Nil if initializer is None else evaluate(initializer, env, interp)
            env.define(name.lexeme, value)
            return NORMAL

        case ast.Block(statements=statements):
            return execute_block(statements, env.enclose(), interp)

        case ast.If(condition=condition, then_branch=then_branch, else_branch=else_branch):
            if is_truthy(evaluate(condition, env, interp), ast.line_of(condition)):
                return execute(then_branch, env, interp)
            if else_branch is not None:
                return execute(else_branch, env, interp)
            return NORMAL

        case ast.While(condition=condition, body=body):
            while is_truthy(evaluate(condition, env, interp), ast.line_of(condition)):
                completion = execute(body, env, interp)
                if completion is not NORMAL:
                    return completion
            return NORMAL

        case ast.Function(name=name, params=params, body=body):
            env.define(name.lexeme, Function(name.lexeme, params, body, env))
            return NORMAL

        case ast.Return(value=value):
            return Returning(Nil if value is None else evaluate(value, env, interp))

        case ast.Class():
            declare_class(stmt, env, interp)
            return NORMAL

    raise TypeError(f"Unknown statement node: {stmt!r}")


def execute_block(statements: list[ast.Stmt], env: Environment, interp: Interpreter) -> Completion:
    """Run `statements` in `env`, stopping at the first one that does not complete normally."""
    for stmt in statements:
        completion = execute(stmt, env, interp)
        if completion is not NORMAL:
            return completion
    return NORMAL


def declare_class(stmt: ast.Class, env: Environment, interp: Interpreter) -> PlangClass:
    """Build the class value for `stmt` and bind it to its name.

    The name is bound to nil first so methods can refer to the class. A class
    declared inside a block is bound in that block and also in the global frame.
    """
    name = stmt.name.lexeme
    env.define(name, Nil)

    superclass = None
    method_env = env
    if stmt.superclass is not None:
        superclass = evaluate(stmt.superclass, env, interp)
        if not isinstance(superclass, PlangClass):
            raise PlangTypeError(
                f"Superclass must be a class, not {type_name(superclass)}.",
                stmt.superclass.name.line,
            )
        method_env = env.enclose()
        method_env.define("super", superclass)

    methods = {
        method.name.lexeme: Function(method.name.lexeme, method.params, method.body, method_env)
        for method in stmt.methods
    }
    klass = PlangClass(name, methods, superclass)
    logger.debug(
        "Class created: %s with %d methods, superclass %s",
        name,
        len(methods),
        superclass.name if superclass is not None else None,
    )

    distance = interp.distances.get(stmt.id)
    try:
        if distance is not None:
            env.assign_at(name, klass, distance, stmt.name.line)
            interp.globals.define(name, klass)
        else:
            env.assign_global(name, klass, stmt.name.line)
    except PlangUndefinedVariable as e:
        raise PlangClassDefinitionFailed(
            f"Cannot bind class '{name}'.", stmt.name.line
        ) from e
    return klass
