"""Core expression evaluator for the Plang interpreter.

`evaluate` takes the frame to evaluate in as an explicit argument and
consults the interpreter only for the distance table, the global frame and
the output stream.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from plang import Value
from plang.evaluation.apply import call_function, check_arity, construct, initializer
from plang.evaluation.operators import binary, unary
from plang.reader import ast
from plang.reader.token import TokenType
from plang.types.environment import Environment
from plang.types.errors import (
    PlangInternalError,
    PlangNotCallable,
    PlangStackOverflow,
    PlangTypeError,
    PlangUndefinedMethod,
)
from plang.types.function import Function, NativeFunction
from plang.types.klass import Instance, PlangClass
from plang.types.nil import Nil
from plang.types.values import is_truthy, stringify, type_name

if TYPE_CHECKING:
    from plang.interpreter import Interpreter


def evaluate(expr: ast.Expr, env: Environment, interp: Interpreter) -> Value:
    match expr:
        case ast.Literal(value=value):
            return value

        case ast.Grouping(expression=expression):
            return evaluate(expression, env, interp)

        case ast.Unary(operator=op, right=right):
            return unary(op, evaluate(right, env, interp))

        case ast.Binary(left=left, operator=op, right=right):
            lhs = evaluate(left, env, interp)
            rhs = evaluate(right, env, interp)
            return binary(op, lhs, rhs)

        case ast.Logical(left=left, operator=op, right=right):
            lhs = evaluate(left, env, interp)
            if op.type is TokenType.OR:
                if is_truthy(lhs, op.line):
                    return lhs
                return evaluate(right, env, interp)
            if not is_truthy(lhs, op.line):
                return False
            return evaluate(right, env, interp)

        case ast.Variable(name=name):
            return interp.look_up_variable(name.lexeme, expr, env, name.line)

        case ast.Assign(name=name, value=value_expr):
            value = evaluate(value_expr, env, interp)
            interp.assign_variable(name.lexeme, expr, env, value, name.line)
            return value

        case ast.Call():
            return evaluate_call(expr, env, interp)

        case ast.Get(object=obj, name=name):
            instance = evaluate(obj, env, interp)
            if not isinstance(instance, Instance):
                raise PlangTypeError(
                    f"Cannot access property '{name.lexeme}' on type '{type_name(instance)}'.",
                    name.line,
                )
            return instance.get(name.lexeme, name.line)

        case ast.Set(object=obj, name=name, value=value_expr):
            instance = evaluate(obj, env, interp)
            if not isinstance(instance, Instance):
                raise PlangTypeError(
                    f"Cannot set property '{name.lexeme}' on type '{type_name(instance)}'.",
                    name.line,
                )
            instance.set(name.lexeme, evaluate(value_expr, env, interp))
            return Nil

        case ast.This(keyword=keyword):
            return interp.look_up_variable("this", expr, env, keyword.line)

        case ast.Super():
            return evaluate_super(expr, env, interp)

        case ast.AnonFunction(params=params, body=body):
            return Function("anonymous", params, body, env)

    raise TypeError(f"Unknown expression node: {expr!r}")


def evaluate_call(expr: ast.Call, env: Environment, interp: Interpreter) -> Value:
    callee = evaluate(expr.callee, env, interp)
    line = expr.paren.line

    try:
        match callee:
            case Function():
                check_arity(callee, len(expr.arguments), line)
                args = [evaluate(arg, env, interp) for arg in expr.arguments]
                return call_function(callee, args, interp)

            case NativeFunction():
                args = [evaluate(arg, env, interp) for arg in expr.arguments]
                return callee(args)

            case PlangClass():
                init = initializer(callee)
                if init is None:
                    # No initializer: arguments are ignored and never evaluated
                    return construct(callee, [], interp)
                check_arity(init, len(expr.arguments), line)
                args = [evaluate(arg, env, interp) for arg in expr.arguments]
                return construct(callee, args, interp)
    except RecursionError:
        # The innermost call reports; outer calls see a PlangError and unwind
        raise PlangStackOverflow("Stack overflow.", line) from None

    raise PlangNotCallable(f"{stringify(callee)} is not callable.", line)


def evaluate_super(expr: ast.Super, env: Environment, interp: Interpreter) -> Function:
    """Find `expr.method` on the superclass and bind it to the current `this`."""
    distance = interp.distances.get(expr.id)
    if distance is None:
        raise PlangInternalError(f"'super' at line {expr.keyword.line} was never resolved")

    superclass = env.get_at("super", distance, expr.keyword.line)
    # The `this` frame is always the one directly inside the `super` frame
    instance = env.get_at("this", distance - 1, expr.keyword.line)

    method = superclass.methods.get(expr.method.lexeme)
    if method is None:
        raise PlangUndefinedMethod(
            f"Undefined method '{expr.method.lexeme}' on superclass '{superclass.name}'.",
            expr.method.line,
        )
    return method.bind(instance)
