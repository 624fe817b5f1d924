"""
  Plang recursive-descent parser

- Consumes the token list produced by plang.reader.lexer
- Emits statement and expression nodes from plang.reader.ast
- Precedence cascade: assignment -> or -> and -> equality -> comparison ->
  term -> factor -> unary -> call -> primary
- On a syntax error the parser records it, skips to the next statement
  boundary and keeps going, so one pass reports every error
- `for` loops are desugared into `while` loops wrapped in blocks
"""

from __future__ import annotations

import logging
from typing import Optional

from plang.reader import ast
from plang.reader.lexer import lex
from plang.reader.token import Token, TokenType
from plang.types.errors import PlangParseError, PlangSyntaxError
from plang.types.nil import Nil

logger = logging.getLogger(__name__)

MAX_ARGUMENTS = 255

# Tokens that begin a statement; synchronize() stops in front of these
STATEMENT_STARTS = frozenset({
    TokenType.CLASS,
    TokenType.FUN,
    TokenType.VAR,
    TokenType.FOR,
    TokenType.IF,
    TokenType.WHILE,
    TokenType.PRINT,
    TokenType.RETURN,
})


class Parser:
    def __init__(self, tokens: list[Token]):
        self.tokens = tokens
        self.current = 0
        self.errors: list[PlangSyntaxError] = []

    # ----------------- Entry points -----------------

    def parse(self) -> list[ast.Stmt]:
        """Parse the whole token list; raises PlangParseError if anything was malformed."""
        statements, errors = self.parse_partial()
        if errors:
            raise PlangParseError(errors)
        logger.debug("Parsed %d top-level statements", len(statements))
        return statements

    def parse_partial(self) -> tuple[list[ast.Stmt], list[PlangSyntaxError]]:
        """Tolerant parse: every statement that parsed cleanly, plus the errors met."""
        statements: list[ast.Stmt] = []
        while not self.is_at_end():
            stmt = self.declaration()
            if stmt is not None:
                statements.append(stmt)
        return statements, list(self.errors)

    # ----------------- Declarations -----------------

    def declaration(self) -> Optional[ast.Stmt]:
        try:
            if self.match(TokenType.CLASS):
                return self.class_declaration()
            if self.check(TokenType.FUN) and self.check_next(TokenType.IDENTIFIER):
                self.advance()
                return self.function("function")
            if self.match(TokenType.VAR):
                return self.var_declaration()
            return self.statement()
        except PlangSyntaxError as err:
            self.errors.append(err)
            self.synchronize()
            return None

    def class_declaration(self) -> ast.Class:
        name = self.consume(TokenType.IDENTIFIER, "Expect class name.")

        superclass = None
        if self.match(TokenType.COLON):
            super_name = self.consume(TokenType.IDENTIFIER, "Expect superclass name.")
            superclass = ast.Variable(super_name)

        self.consume(TokenType.LEFT_BRACE, "Expect '{' before class body.")
        methods = []
        while not self.check(TokenType.RIGHT_BRACE) and not self.is_at_end():
            methods.append(self.function("method"))
        self.consume(TokenType.RIGHT_BRACE, "Expect '}' after class body.")

        return ast.Class(name, methods, superclass)

    def function(self, kind: str) -> ast.Function:
        name = self.consume(TokenType.IDENTIFIER, f"Expect {kind} name.")
        self.consume(TokenType.LEFT_PAREN, f"Expect '(' after {kind} name.")
        params = self.parameters()
        self.consume(TokenType.LEFT_BRACE, f"Expect '{{' before {kind} body.")
        body = self.block()
        return ast.Function(name, params, body)

    def parameters(self) -> list[Token]:
        """Parse a parameter list up to and including the closing ')'."""
        params: list[Token] = []
        if not self.check(TokenType.RIGHT_PAREN):
            while True:
                if len(params) >= MAX_ARGUMENTS:
                    self.report(self.peek(), f"Can't have more than {MAX_ARGUMENTS} parameters.")
                params.append(self.consume(TokenType.IDENTIFIER, "Expect parameter name."))
                if not self.match(TokenType.COMMA):
                    break
        self.consume(TokenType.RIGHT_PAREN, "Expect ')' after parameters.")
        return params

    def var_declaration(self) -> ast.Var:
        name = self.consume(TokenType.IDENTIFIER, "Expect variable name.")
        initializer = None
        if self.match(TokenType.EQUAL):
            initializer = self.expression()
        self.consume(TokenType.SEMICOLON, "Expect ';' after variable declaration.")
        return ast.Var(name, initializer)

    # ----------------- Statements -----------------

    def statement(self) -> ast.Stmt:
        if self.match(TokenType.FOR):
            return self.for_statement()
        if self.match(TokenType.IF):
            return self.if_statement()
        if self.match(TokenType.PRINT):
            return self.print_statement()
        if self.match(TokenType.RETURN):
            return self.return_statement()
        if self.match(TokenType.WHILE):
            return self.while_statement()
        if self.match(TokenType.LEFT_BRACE):
            return ast.Block(self.block())
        return self.expression_statement()

    def for_statement(self) -> ast.Stmt:
        self.consume(TokenType.LEFT_PAREN, "Expect '(' after 'for'.")

        if self.match(TokenType.SEMICOLON):
            initializer = None
        elif self.match(TokenType.VAR):
            initializer = self.var_declaration()
        else:
            initializer = self.expression_statement()

        condition = None
        if not self.check(TokenType.SEMICOLON):
            condition = self.expression()
        self.consume(TokenType.SEMICOLON, "Expect ';' after loop condition.")

        increment = None
        if not self.check(TokenType.RIGHT_PAREN):
            increment = self.expression()
        self.consume(TokenType.RIGHT_PAREN, "Expect ')' after for clauses.")

        body = self.statement()

        if increment is not None:
            body = ast.Block([body, ast.Expression(increment)])
        if condition is None:
            condition = ast.Literal(True)
        body = ast.While(condition, body)
        if initializer is not None:
            body = ast.Block([initializer, body])

        return body

    def if_statement(self) -> ast.If:
        self.consume(TokenType.LEFT_PAREN, "Expect '(' after 'if'.")
        condition = self.expression()
        self.consume(TokenType.RIGHT_PAREN, "Expect ')' after if condition.")

        then_branch = self.statement()
        else_branch = None
        if self.match(TokenType.ELSE):
            else_branch = self.statement()

        return ast.If(condition, then_branch, else_branch)

    def print_statement(self) -> ast.Print:
        value = self.expression()
        self.consume(TokenType.SEMICOLON, "Expect ';' after value.")
        return ast.Print(value)

    def return_statement(self) -> ast.Return:
        keyword = self.previous()
        value = None
        if not self.check(TokenType.SEMICOLON):
            value = self.expression()
        self.consume(TokenType.SEMICOLON, "Expect ';' after return value.")
        return ast.Return(keyword, value)

    def while_statement(self) -> ast.While:
        self.consume(TokenType.LEFT_PAREN, "Expect '(' after 'while'.")
        condition = self.expression()
        self.consume(TokenType.RIGHT_PAREN, "Expect ')' after condition.")
        body = self.statement()
        return ast.While(condition, body)

    def block(self) -> list[ast.Stmt]:
        """Parse declarations up to the closing '}' (the '{' is already consumed)."""
        statements: list[ast.Stmt] = []
        while not self.check(TokenType.RIGHT_BRACE) and not self.is_at_end():
            stmt = self.declaration()
            if stmt is not None:
                statements.append(stmt)
        self.consume(TokenType.RIGHT_BRACE, "Expect '}' after block.")
        return statements

    def expression_statement(self) -> ast.Expression:
        expr = self.expression()
        self.consume(TokenType.SEMICOLON, "Expect ';' after expression.")
        return ast.Expression(expr)

    # ----------------- Expressions -----------------

    def expression(self) -> ast.Expr:
        return self.assignment()

    def assignment(self) -> ast.Expr:
        expr = self._or()

        if self.match(TokenType.EQUAL):
            equals = self.previous()
            value = self.assignment()

            if isinstance(expr, ast.Variable):
                return ast.Assign(expr.name, value)
            if isinstance(expr, ast.Get):
                return ast.Set(expr.object, expr.name, value)

            # Reported without raising; parsing continues
            self.report(equals, "Invalid assignment target.")

        return expr

    def _or(self) -> ast.Expr:
        expr = self._and()
        while self.match(TokenType.OR):
            operator = self.previous()
            right = self._and()
            expr = ast.Logical(expr, operator, right)
        return expr

    def _and(self) -> ast.Expr:
        expr = self.equality()
        while self.match(TokenType.AND):
            operator = self.previous()
            right = self.equality()
            expr = ast.Logical(expr, operator, right)
        return expr

    def equality(self) -> ast.Expr:
        expr = self.comparison()
        while self.match(TokenType.BANG_EQUAL, TokenType.EQUAL_EQUAL):
            operator = self.previous()
            right = self.comparison()
            expr = ast.Binary(expr, operator, right)
        return expr

    def comparison(self) -> ast.Expr:
        expr = self.term()
        while self.match(TokenType.GREATER, TokenType.GREATER_EQUAL,
                         TokenType.LESS, TokenType.LESS_EQUAL):
            operator = self.previous()
            right = self.term()
            expr = ast.Binary(expr, operator, right)
        return expr

    def term(self) -> ast.Expr:
        expr = self.factor()
        while self.match(TokenType.MINUS, TokenType.PLUS):
            operator = self.previous()
            right = self.factor()
            expr = ast.Binary(expr, operator, right)
        return expr

    def factor(self) -> ast.Expr:
        expr = self.unary()
        while self.match(TokenType.SLASH, TokenType.STAR):
            operator = self.previous()
            right = self.unary()
            expr = ast.Binary(expr, operator, right)
        return expr

    def unary(self) -> ast.Expr:
        if self.match(TokenType.BANG, TokenType.MINUS):
            operator = self.previous()
            right = self.unary()
            return ast.Unary(operator, right)
        return self.call()

    def call(self) -> ast.Expr:
        expr = self.primary()
        while True:
            if self.match(TokenType.LEFT_PAREN):
                expr = self.finish_call(expr)
            elif self.match(TokenType.DOT):
                name = self.consume(TokenType.IDENTIFIER, "Expect property name after '.'.")
                expr = ast.Get(expr, name)
            else:
                break
        return expr

    def finish_call(self, callee: ast.Expr) -> ast.Call:
        arguments: list[ast.Expr] = []
        if not self.check(TokenType.RIGHT_PAREN):
            while True:
                if len(arguments) >= MAX_ARGUMENTS:
                    self.report(self.peek(), f"Can't have more than {MAX_ARGUMENTS} arguments.")
                arguments.append(self.expression())
                if not self.match(TokenType.COMMA):
                    break
        paren = self.consume(TokenType.RIGHT_PAREN, "Expect ')' after arguments.")
        return ast.Call(callee, paren, arguments)

    def primary(self) -> ast.Expr:
        if self.match(TokenType.FALSE):
            return ast.Literal(False)
        if self.match(TokenType.TRUE):
            return ast.Literal(True)
        if self.match(TokenType.NIL):
            return ast.Literal(Nil)
        if self.match(TokenType.NUMBER, TokenType.STRING):
            return ast.Literal(self.previous().literal)
        if self.match(TokenType.SUPER):
            keyword = self.previous()
            self.consume(TokenType.DOT, "Expect '.' after 'super'.")
            method = self.consume(TokenType.IDENTIFIER, "Expect superclass method name.")
            return ast.Super(keyword, method)
        if self.match(TokenType.THIS):
            return ast.This(self.previous())
        if self.match(TokenType.IDENTIFIER):
            return ast.Variable(self.previous())
        if self.match(TokenType.FUN):
            paren = self.consume(TokenType.LEFT_PAREN, "Expect '(' after 'fun'.")
            params = self.parameters()
            self.consume(TokenType.LEFT_BRACE, "Expect '{' before function body.")
            return ast.AnonFunction(paren, params, self.block())
        if self.match(TokenType.LEFT_PAREN):
            expr = self.expression()
            self.consume(TokenType.RIGHT_PAREN, "Expect ')' after expression.")
            return ast.Grouping(expr)

        raise self.error(self.peek(), "Expect expression.")

    # ----------------- Token helpers -----------------

    def match(self, *types: TokenType) -> bool:
        for type_ in types:
            if self.check(type_):
                self.advance()
                return True
        return False

    def check(self, type_: TokenType) -> bool:
        if self.is_at_end():
            return False
        return self.peek().type == type_

    def check_next(self, type_: TokenType) -> bool:
        if self.current + 1 >= len(self.tokens):
            return False
        return self.tokens[self.current + 1].type == type_

    def advance(self) -> Token:
        if not self.is_at_end():
            self.current += 1
        return self.previous()

    def is_at_end(self) -> bool:
        return self.peek().type == TokenType.EOF

    def peek(self) -> Token:
        return self.tokens[self.current]

    def previous(self) -> Token:
        return self.tokens[self.current - 1]

    def consume(self, type_: TokenType, message: str) -> Token:
        if self.check(type_):
            return self.advance()
        raise self.error(self.peek(), message)

    def error(self, token: Token, message: str) -> PlangSyntaxError:
        where = "end" if token.type == TokenType.EOF else f"'{token.lexeme}'"
        return PlangSyntaxError(f"Error at {where}: {message}", token.line)

    def report(self, token: Token, message: str) -> None:
        self.errors.append(self.error(token, message))

    def synchronize(self) -> None:
        self.advance()
        while not self.is_at_end():
            if self.previous().type == TokenType.SEMICOLON:
                return
            if self.peek().type in STATEMENT_STARTS:
                return
            self.advance()


def parse(source: str) -> list[ast.Stmt]:
    """Lex and parse `source` in one step."""
    return Parser(lex(source)).parse()
