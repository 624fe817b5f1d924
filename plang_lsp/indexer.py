from __future__ import annotations

"""
Static indexer for Plang documents; never evaluates code.

The document is scanned and parsed tolerantly, so a buffer that is being
edited still yields every declaration that parses. When parsing succeeds the
resolver also runs, so scoping mistakes (duplicate locals, `return` at top
level, `this` outside a class...) show up as diagnostics before the file is
ever run. The index powers document symbols, hover, completion and signature
help in plang_lsp.server.
"""

import re
from dataclasses import dataclass, field
from typing import Dict, List, Optional

from plang.analysis.resolver import Resolver
from plang.builtin.env_builtin import NATIVES
from plang.reader import ast
from plang.reader.lexer import scan
from plang.reader.parser import Parser
from plang.reader.token import Token
from plang.types.errors import PlangError, PlangResolveError


@dataclass
class SymbolDef:
    name: str
    kind: str  # "class" | "function" | "method" | "var"
    line: int  # 0-based
    col: int
    params: List[str] = field(default_factory=list)
    superclass: Optional[str] = None
    children: List["SymbolDef"] = field(default_factory=list)

    @property
    def signature(self) -> str:
        if self.kind in ("function", "method"):
            return f"{self.name}({', '.join(self.params)})"
        if self.kind == "class":
            return f"class {self.name}" + (f" : {self.superclass}" if self.superclass else "")
        return f"var {self.name}"


@dataclass
class Problem:
    message: str
    line: int  # 0-based
    severity: str  # "error" | "warning"


@dataclass
class DocumentIndex:
    symbols: Dict[str, SymbolDef] = field(default_factory=dict)
    problems: List[Problem] = field(default_factory=list)


# Native signatures for hover/signature help without evaluation
BUILTIN_SIGNATURES: Dict[str, str] = {
    native.name: f"{native.name}({', '.join(f'arg{i}' for i in range(native.arity))})"
    for native in NATIVES
}

KEYWORD_DOCS: Dict[str, str] = {
    "and": "a and b: false if a is falsey, otherwise b",
    "class": "class Name [: Superclass] { methods }",
    "else": "if (cond) stmt else stmt",
    "false": "Boolean false",
    "for": "for (init; cond; step) stmt",
    "fun": "fun name(params) { body }, or fun (params) { body } as an expression",
    "if": "if (cond) stmt [else stmt]",
    "nil": "The absent value",
    "or": "a or b: a if a is truthy, otherwise b",
    "print": "print expr; writes the value and a newline",
    "return": "return [expr]; leaves the current function",
    "super": "super.method: the superclass's method bound to this",
    "this": "The instance a method was called on",
    "true": "Boolean true",
    "var": "var name [= expr];",
    "while": "while (cond) stmt",
}


def _column(lines: List[str], token: Token) -> int:
    # Tokens only record their line; take the first occurrence on that line
    idx = token.line - 1
    if 0 <= idx < len(lines):
        m = re.search(rf"\b{re.escape(token.lexeme)}\b", lines[idx])
        if m:
            return m.start()
    return 0


def _problem(err: PlangError, severity: str = "error") -> Problem:
    line = (err.line or 1) - 1
    return Problem(message=err.message, line=max(line, 0), severity=severity)


def _function_def(lines: List[str], fn: ast.Function, kind: str) -> SymbolDef:
    return SymbolDef(
        name=fn.name.lexeme,
        kind=kind,
        line=fn.name.line - 1,
        col=_column(lines, fn.name),
        params=[p.lexeme for p in fn.params],
    )


def _collect(lines: List[str], statements: List[ast.Stmt], idx: DocumentIndex) -> None:
    for stmt in statements:
        match stmt:
            case ast.Class(name=name, methods=methods, superclass=superclass):
                sdef = SymbolDef(
                    name=name.lexeme,
                    kind="class",
                    line=name.line - 1,
                    col=_column(lines, name),
                    superclass=superclass.name.lexeme if superclass is not None else None,
                    children=[_function_def(lines, m, "method") for m in methods],
                )
                init = next((m for m in sdef.children if m.name == "init"), None)
                if init is not None:
                    sdef.params = list(init.params)
                idx.symbols[name.lexeme] = sdef
            case ast.Function():
                idx.symbols[stmt.name.lexeme] = _function_def(lines, stmt, "function")
            case ast.Var(name=name):
                idx.symbols[name.lexeme] = SymbolDef(
                    name=name.lexeme, kind="var", line=name.line - 1, col=_column(lines, name)
                )


def build_index(text: str) -> DocumentIndex:
    idx = DocumentIndex()
    lines = text.splitlines()

    tokens, lex_errors = scan(text)
    statements, parse_errors = Parser(tokens).parse_partial()

    for err in lex_errors + parse_errors:
        idx.problems.append(_problem(err))

    _collect(lines, statements, idx)

    # Resolution needs a complete tree; a partial one would report bogus errors
    if not lex_errors and not parse_errors:
        try:
            Resolver().resolve_program(statements)
        except PlangResolveError as err:
            idx.problems.append(_problem(err))

    return idx
