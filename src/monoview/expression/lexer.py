"""Lexer for ``@if`` conditions.

Produces a flat token list ending in an EOF token. Operators are matched
longest-first so ``===`` never lexes as ``==`` followed by ``=``.
"""

from __future__ import annotations

import re

from monoview._types import Token, TokenType
from monoview.environment.exceptions import ExpressionEvaluationError

# Longest first
OPERATORS: tuple[str, ...] = (
    "===",
    "!==",
    "==",
    "!=",
    "<=",
    ">=",
    "&&",
    "||",
    "<",
    ">",
    "!",
    "+",
    "-",
    "*",
    "/",
    "%",
)

_NUMBER_RE = re.compile(r"\d+(?:\.\d+)?|\.\d+")
_NAME_RE = re.compile(r"[A-Za-z_]\w*")
_ESCAPES = {"n": "\n", "t": "\t", "r": "\r", "\\": "\\", "'": "'", '"': '"'}


def tokenize(source: str) -> list[Token]:
    """Split a condition into tokens.

    Raises:
        ExpressionEvaluationError: On an unterminated string or an
            unexpected character.
    """
    tokens: list[Token] = []
    pos = 0
    length = len(source)

    while pos < length:
        char = source[pos]

        if char.isspace():
            pos += 1
            continue

        if char in "'\"":
            value, end = _read_string(source, pos)
            tokens.append(Token(TokenType.STRING, value, pos))
            pos = end
            continue

        if char == "(":
            tokens.append(Token(TokenType.LPAREN, char, pos))
            pos += 1
            continue

        if char == ")":
            tokens.append(Token(TokenType.RPAREN, char, pos))
            pos += 1
            continue

        match = _NUMBER_RE.match(source, pos)
        if match:
            tokens.append(Token(TokenType.NUMBER, match.group(), pos))
            pos = match.end()
            continue

        match = _NAME_RE.match(source, pos)
        if match:
            tokens.append(Token(TokenType.NAME, match.group(), pos))
            pos = match.end()
            continue

        for op in OPERATORS:
            if source.startswith(op, pos):
                tokens.append(Token(TokenType.OPERATOR, op, pos))
                pos += len(op)
                break
        else:
            raise ExpressionEvaluationError(
                f"Unexpected character {char!r}", expression=source, position=pos
            )

    tokens.append(Token(TokenType.EOF, "", length))
    return tokens


def _read_string(source: str, start: int) -> tuple[str, int]:
    """Read a quoted string starting at ``start``; return (value, end offset)."""
    quote = source[start]
    chars: list[str] = []
    pos = start + 1
    while pos < len(source):
        char = source[pos]
        if char == "\\" and pos + 1 < len(source):
            nxt = source[pos + 1]
            chars.append(_ESCAPES.get(nxt, "\\" + nxt))
            pos += 2
            continue
        if char == quote:
            return "".join(chars), pos + 1
        chars.append(char)
        pos += 1
    raise ExpressionEvaluationError("Unterminated string literal", expression=source, position=start)
