"""Recursive-descent parser for ``@if`` conditions.

Grammar (lowest to highest precedence):

    or_expr     := and_expr (("||" | "or") and_expr)*
    and_expr    := equality (("&&" | "and") equality)*
    equality    := comparison (("==" | "!=" | "===" | "!==") comparison)*
    comparison  := additive (("<" | ">" | "<=" | ">=") additive)*
    additive    := term (("+" | "-") term)*
    term        := unary (("*" | "/" | "%") unary)*
    unary       := ("!" | "not" | "-" | "+") unary | primary
    primary     := NUMBER | STRING | "true" | "false" | "null" | "(" or_expr ")"

Keywords are case-insensitive. Bare identifiers other than keywords are a
parse error: by the time a condition reaches the parser every ``$name`` has
already been replaced with a literal.

Unary operators and parentheses nest at most ``MAX_NESTING`` deep.
"""

from __future__ import annotations

import math

from monoview._types import Token, TokenType
from monoview.environment.exceptions import ExpressionEvaluationError
from monoview.expression.lexer import tokenize
from monoview.expression.nodes import BinOp, BoolOp, Compare, Const, Node, UnaryOp

_CONSTANTS: dict[str, bool | None] = {"true": True, "false": False, "null": None}

# Word operators normalized to their symbolic form
_WORD_OPERATORS = {"and": "&&", "or": "||", "not": "!"}

_EQUALITY_OPS = frozenset({"==", "!=", "===", "!=="})
_COMPARISON_OPS = frozenset({"<", ">", "<=", ">="})
_ADDITIVE_OPS = frozenset({"+", "-"})
_TERM_OPS = frozenset({"*", "/", "%"})
_UNARY_OPS = frozenset({"!", "-", "+"})

MAX_NESTING = 32


class Parser:
    """Parse one condition string into a node tree.

    Example:
        >>> Parser("1 < 2 && 'a' == 'a'").parse()
        BoolOp(offset=6, op='&&', left=Compare(...), right=Compare(...))
    """

    __slots__ = ("_depth", "_pos", "_source", "_tokens")

    def __init__(self, source: str):
        self._source = source
        self._tokens = tokenize(source)
        self._pos = 0
        self._depth = 0

    def parse(self) -> Node:
        """Parse the whole condition.

        Raises:
            ExpressionEvaluationError: On empty input, trailing tokens or
                any grammar violation.
        """
        if self._peek().type is TokenType.EOF:
            raise self._error("Empty condition", self._peek())
        node = self._parse_or()
        token = self._peek()
        if token.type is not TokenType.EOF:
            raise self._error(f"Unexpected {token.value!r}", token)
        return node

    # ── token helpers ───────────────────────────────────────────────────────

    def _peek(self) -> Token:
        return self._tokens[self._pos]

    def _advance(self) -> Token:
        token = self._tokens[self._pos]
        if token.type is not TokenType.EOF:
            self._pos += 1
        return token

    def _operator(self) -> str | None:
        """Operator at the cursor (word operators normalized), else None."""
        token = self._peek()
        if token.type is TokenType.OPERATOR:
            return token.value
        if token.type is TokenType.NAME:
            return _WORD_OPERATORS.get(token.value.lower())
        return None

    def _error(self, message: str, token: Token) -> ExpressionEvaluationError:
        return ExpressionEvaluationError(message, expression=self._source, position=token.offset)

    def _nest(self, token: Token) -> None:
        self._depth += 1
        if self._depth > MAX_NESTING:
            raise self._error(f"Condition nested deeper than {MAX_NESTING} levels", token)

    # ── grammar ─────────────────────────────────────────────────────────────

    def _parse_or(self) -> Node:
        node = self._parse_and()
        while self._operator() == "||":
            token = self._advance()
            node = BoolOp(token.offset, "||", node, self._parse_and())
        return node

    def _parse_and(self) -> Node:
        node = self._parse_equality()
        while self._operator() == "&&":
            token = self._advance()
            node = BoolOp(token.offset, "&&", node, self._parse_equality())
        return node

    def _parse_equality(self) -> Node:
        node = self._parse_comparison()
        while self._operator() in _EQUALITY_OPS:
            token = self._advance()
            node = Compare(token.offset, token.value, node, self._parse_comparison())
        return node

    def _parse_comparison(self) -> Node:
        node = self._parse_additive()
        while self._operator() in _COMPARISON_OPS:
            token = self._advance()
            node = Compare(token.offset, token.value, node, self._parse_additive())
        return node

    def _parse_additive(self) -> Node:
        node = self._parse_term()
        while self._operator() in _ADDITIVE_OPS:
            token = self._advance()
            node = BinOp(token.offset, token.value, node, self._parse_term())
        return node

    def _parse_term(self) -> Node:
        node = self._parse_unary()
        while self._operator() in _TERM_OPS:
            token = self._advance()
            node = BinOp(token.offset, token.value, node, self._parse_unary())
        return node

    def _parse_unary(self) -> Node:
        op = self._operator()
        if op in _UNARY_OPS:
            token = self._advance()
            self._nest(token)
            node = UnaryOp(token.offset, op, self._parse_unary())
            self._depth -= 1
            return node
        return self._parse_primary()

    def _parse_primary(self) -> Node:
        token = self._advance()

        if token.type is TokenType.NUMBER:
            return Const(token.offset, self._number(token))

        if token.type is TokenType.STRING:
            return Const(token.offset, token.value)

        if token.type is TokenType.NAME:
            key = token.value.lower()
            if key in _CONSTANTS:
                return Const(token.offset, _CONSTANTS[key])
            raise self._error(f"Unknown identifier {token.value!r}", token)

        if token.type is TokenType.LPAREN:
            self._nest(token)
            node = self._parse_or()
            closing = self._advance()
            if closing.type is not TokenType.RPAREN:
                raise self._error("Expected ')'", closing)
            self._depth -= 1
            return node

        if token.type is TokenType.EOF:
            raise self._error("Unexpected end of condition", token)
        raise self._error(f"Unexpected {token.value!r}", token)

    def _number(self, token: Token) -> int | float:
        try:
            value: int | float = float(token.value) if "." in token.value else int(token.value)
        except ValueError:
            # int() refuses very long digit strings
            raise self._error("Number literal too long", token) from None
        if not math.isfinite(value):
            raise self._error("Number literal out of range", token)
        return value


def parse(source: str) -> Node:
    """Parse ``source`` into a condition node tree."""
    return Parser(source).parse()
