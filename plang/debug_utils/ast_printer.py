"""Parenthesized prefix rendering of Plang syntax trees.

    -123 * (34.5)          ->  (* (- 123) (group 34.5))
    var a = 1;             ->  (var a 1)
    class B : A { f() {} } ->  (class B : A (fun f () ()))

Used by `plang --ast` and by the parser tests. Keywords can be highlighted
with ANSI colors when printing to a terminal.
"""
from __future__ import annotations

from plang.reader import ast
from plang.types.values import stringify

# ----------------- ANSI colors -----------------
RESET = "\033[0m"
COLOR_KEYWORD = "\033[94m"
COLOR_LITERAL = "\033[92m"


def _kw(word: str, color: bool) -> str:
    return f"{COLOR_KEYWORD}{word}{RESET}" if color else word


def _paren(head: str, *parts: str) -> str:
    return "(" + " ".join((head,) + parts) + ")"


def _names(tokens) -> str:
    return "(" + " ".join(t.lexeme for t in tokens) + ")"


def pformat(node: ast.Node, color: bool = False) -> str:
    """Render an expression or statement node as a single line."""
    p = lambda n: pformat(n, color)  # noqa: E731
    k = lambda w: _kw(w, color)  # noqa: E731

    match node:
        # ----------------- Expressions -----------------
        case ast.Literal(value=value):
            text = f'"{value}"' if isinstance(value, str) else stringify(value)
            return f"{COLOR_LITERAL}{text}{RESET}" if color else text
        case ast.Grouping(expression=e):
            return _paren(k("group"), p(e))
        case ast.Unary(operator=op, right=right):
            return _paren(op.lexeme, p(right))
        case ast.Binary(left=left, operator=op, right=right) | ast.Logical(
            left=left, operator=op, right=right
        ):
            return _paren(op.lexeme, p(left), p(right))
        case ast.Variable(name=name):
            return name.lexeme
        case ast.Assign(name=name, value=value):
            return _paren("=", name.lexeme, p(value))
        case ast.Call(callee=callee, arguments=arguments):
            return _paren(k("call"), p(callee), *(p(a) for a in arguments))
        case ast.Get(object=obj, name=name):
            return _paren(".", p(obj), name.lexeme)
        case ast.Set(object=obj, name=name, value=value):
            return _paren("=", _paren(".", p(obj), name.lexeme), p(value))
        case ast.This():
            return k("this")
        case ast.Super(method=method):
            return _paren(".", k("super"), method.lexeme)
        case ast.AnonFunction(params=params, body=body):
            return _paren(k("fun"), _names(params), _body(body, color))

        # ----------------- Statements -----------------
        case ast.Expression(expression=e):
            return p(e)
        case ast.Print(expression=e):
            return _paren(k("print"), p(e))
        case ast.Var(name=name, initializer=initializer):
            if initializer is None:
                return _paren(k("var"), name.lexeme)
            return _paren(k("var"), name.lexeme, p(initializer))
        case ast.Block(statements=statements):
            return _paren(k("block"), *(p(s) for s in statements))
        case ast.If(condition=condition, then_branch=then_branch, else_branch=else_branch):
            if else_branch is None:
                return _paren(k("if"), p(condition), p(then_branch))
            return _paren(k("if"), p(condition), p(then_branch), p(else_branch))
        case ast.While(condition=condition, body=body):
            return _paren(k("while"), p(condition), p(body))
        case ast.Function(name=name, params=params, body=body):
            return _paren(k("fun"), name.lexeme, _names(params), _body(body, color))
        case ast.Return(value=value):
            if value is None:
                return _paren(k("return"))
            return _paren(k("return"), p(value))
        case ast.Class(name=name, methods=methods, superclass=superclass):
            head = [name.lexeme]
            if superclass is not None:
                head += [":", superclass.name.lexeme]
            return _paren(k("class"), *head, *(p(m) for m in methods))

    raise TypeError(f"Unknown node: {node!r}")


def _body(statements: list[ast.Stmt], color: bool) -> str:
    return "(" + " ".join(pformat(s, color) for s in statements) + ")"


def pformat_program(statements: list[ast.Stmt], color: bool = False) -> str:
    """One rendered statement per line."""
    return "\n".join(pformat(s, color) for s in statements)
