"""Token types for the ``@if`` condition lexer."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class TokenType(Enum):
    """Kinds of tokens produced by ``monoview.expression.lexer.tokenize``."""

    NUMBER = "number"
    STRING = "string"
    NAME = "name"
    OPERATOR = "operator"
    LPAREN = "lparen"
    RPAREN = "rparen"
    EOF = "eof"


@dataclass(frozen=True, slots=True)
class Token:
    """A lexed token with its character offset in the condition text."""

    type: TokenType
    value: str
    offset: int

    def __repr__(self) -> str:
        return f"Token({self.type.name}, {self.value!r}, @{self.offset})"
