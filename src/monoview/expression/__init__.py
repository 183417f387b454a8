"""Restricted expression language for ``@if`` conditions.

Conditions are lexed, parsed into immutable nodes and walked by a small
evaluator. Only literals and operators exist in the grammar, so a condition
cannot reach any host object.

    >>> from monoview.expression import evaluate_condition
    >>> evaluate_condition("(1 + 2) * 3 >= 9 && 'a' != 'b'")
    True

"""

from __future__ import annotations

from monoview.expression.evaluator import (
    Evaluator,
    evaluate_condition,
    loose_equals,
    strict_equals,
    truthy,
)
from monoview.expression.lexer import tokenize
from monoview.expression.parser import Parser, parse

__all__ = [
    "Evaluator",
    "Parser",
    "evaluate_condition",
    "loose_equals",
    "parse",
    "strict_equals",
    "tokenize",
    "truthy",
]
