"""
  Plang lexer

- Single master regular expression with one named group per token class
- Produces a flat list of Tokens terminated by EOF
- Lexical errors are collected rather than raised one at a time, so a whole
  source text reports every bad character at once
"""

from __future__ import annotations

import logging
import re

from plang.reader.token import KEYWORDS, Token, TokenType
from plang.types.errors import PlangParseError, PlangSyntaxError

logger = logging.getLogger(__name__)


TOKEN_RE = re.compile(
    r"(?P<newline>\n)"
    r"|(?P<space>[ \t\r]+)"
    r"|(?P<comment>//[^\n]*)"  # single-line comment
    r'|(?P<string>"[^"]*")'  # strings may span lines, no escapes
    r'|(?P<unterminated>"[^"]*\Z)'
    r"|(?P<number>[0-9]+(?:\.[0-9]+)?)"
    r"|(?P<identifier>[A-Za-z_][A-Za-z0-9_]*)"
    r"|(?P<operator>!=|==|<=|>=|[(){},.:\-+;/*!=<>])"
)

OPERATORS: dict[str, TokenType] = {
    "(": TokenType.LEFT_PAREN,
    ")": TokenType.RIGHT_PAREN,
    "{": TokenType.LEFT_BRACE,
    "}": TokenType.RIGHT_BRACE,
    ",": TokenType.COMMA,
    ".": TokenType.DOT,
    ":": TokenType.COLON,
    "-": TokenType.MINUS,
    "+": TokenType.PLUS,
    ";": TokenType.SEMICOLON,
    "/": TokenType.SLASH,
    "*": TokenType.STAR,
    "!": TokenType.BANG,
    "!=": TokenType.BANG_EQUAL,
    "=": TokenType.EQUAL,
    "==": TokenType.EQUAL_EQUAL,
    ">": TokenType.GREATER,
    ">=": TokenType.GREATER_EQUAL,
    "<": TokenType.LESS,
    "<=": TokenType.LESS_EQUAL,
}


def scan(source: str) -> tuple[list[Token], list[PlangSyntaxError]]:
    """Tolerant scan: returns every token that could be read plus the errors met."""
    tokens: list[Token] = []
    errors: list[PlangSyntaxError] = []
    line = 1
    pos = 0
    n = len(source)

    while pos < n:
        m = TOKEN_RE.match(source, pos)
        if not m:
            errors.append(PlangSyntaxError(f"Unexpected character {source[pos]!r}.", line))
            pos += 1
            continue

        kind = m.lastgroup
        text = m.group()
        pos = m.end()

        if kind == "newline":
            line += 1
        elif kind in ("space", "comment"):
            pass
        elif kind == "string":
            # The token is reported on the line where the string ends
            line += text.count("\n")
            tokens.append(Token(TokenType.STRING, text, text[1:-1], line))
        elif kind == "unterminated":
            errors.append(PlangSyntaxError("Unterminated string.", line))
            line += text.count("\n")
        elif kind == "number":
            tokens.append(Token(TokenType.NUMBER, text, float(text), line))
        elif kind == "identifier":
            keyword = KEYWORDS.get(text)
            if keyword is not None:
                tokens.append(Token(keyword, text, None, line))
            else:
                tokens.append(Token(TokenType.IDENTIFIER, text, text, line))
        else:
            tokens.append(Token(OPERATORS[text], text, None, line))

    tokens.append(Token(TokenType.EOF, "", None, line))
    return tokens, errors


def lex(source: str) -> list[Token]:
    """Scan `source` into tokens; raises PlangParseError listing every lexical error."""
    tokens, errors = scan(source)
    if errors:
        raise PlangParseError(errors)
    logger.debug("Scanned %d tokens over %d lines", len(tokens), tokens[-1].line)
    return tokens
