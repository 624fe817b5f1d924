from __future__ import annotations

import logging
import sys
from typing import TextIO

from plang import DistanceTable, Value
from plang.analysis.resolver import Resolver
from plang.builtin.env_builtin import register
from plang.config import get_recursion_limit
from plang.evaluation.evaluator import evaluate
from plang.evaluation.executor import execute
from plang.reader import ast
from plang.reader.parser import parse
from plang.types.environment import Environment
from plang.types.nil import Nil

logger = logging.getLogger(__name__)


class Interpreter:
    """
    Orchestrates lexing, parsing, resolving and executing Plang source.
    Keeps the global frame and the distance table across calls, so a
    declaration made by one `run` is visible to the next (REPL sessions).
    """

    def __init__(self, out: TextIO | None = None):
        self.globals: Environment = Environment()
        register(self.globals)
        self.distances: DistanceTable = {}
        self.out = out
        # Every Plang call costs several host frames
        sys.setrecursionlimit(max(sys.getrecursionlimit(), get_recursion_limit()))

    # ----------------- Phases -----------------

    def parse(self, source: str) -> list[ast.Stmt]:
        return parse(source)

    def resolve(self, statements: list[ast.Stmt]) -> DistanceTable:
        """Resolve `statements` completely and merge the result into the session table.

        Nothing is merged if resolution fails.
        """
        distances = Resolver().resolve_program(statements)
        self.distances.update(distances)
        return distances

    def execute_program(self, statements: list[ast.Stmt]) -> None:
        for stmt in statements:
            execute(stmt, self.globals, self)

    # ----------------- Entry points -----------------

    def run(self, source: str) -> None:
        """Lex, parse, resolve, then execute `source` in the global frame."""
        statements = self.parse(source)
        self.resolve(statements)
        logger.debug("Running %d statements", len(statements))
        self.execute_program(statements)

    def eval(self, source: str) -> Value:
        """Like `run`, but return the value of a trailing expression statement (else nil)."""
        statements = self.parse(source)
        self.resolve(statements)
        last = None
        if statements and isinstance(statements[-1], ast.Expression):
            last = statements.pop()
        self.execute_program(statements)
        if last is None:
            return Nil
        return evaluate(last.expression, self.globals, self)

    # ----------------- Runtime services -----------------

    def look_up_variable(self, name: str, node: ast.Expr, env: Environment, line: int | None = None) -> Value:
        distance = self.distances.get(node.id)
        if distance is None:
            return env.get_global(name, line)
        return env.get_at(name, distance, line)

    def assign_variable(
        self, name: str, node: ast.Expr, env: Environment, value: Value, line: int | None = None
    ) -> None:
        distance = self.distances.get(node.id)
        if distance is None:
            env.assign_global(name, value, line)
        else:
            env.assign_at(name, value, distance, line)

    def write(self, text: str) -> None:
        print(text, file=self.out if self.out is not None else sys.stdout)
