"""Plang Language Server package.

This package provides:
- A pygls-based Language Server for Plang.
- A static indexer that lexes, parses and resolves documents without evaluation.

Note: The LSP does not evaluate user buffers; diagnostics come from the same
lexer, parser and resolver the interpreter uses.
"""

__all__ = [
    "server",
    "indexer",
]
