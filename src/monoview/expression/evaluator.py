"""Evaluator for parsed ``@if`` conditions.

Evaluation is a pure walk over the node tree: there are no names, calls,
attribute lookups or assignments in the grammar, so a condition can only
ever compute a value from its own literals.

Comparison Semantics:
Loose comparison follows the rules template authors expect from the
original PHP views:

- ``bool``/``null`` against anything (except null vs string): both sides
  compared as booleans
- ``null`` against a string: null is treated as ``""``
- numbers and numeric strings: compared numerically
- anything else: compared as strings

Strict ``===``/``!==`` require identical types (``1 === 1.0`` is false).

"""

from __future__ import annotations

import math
import re
from collections.abc import Callable
from typing import Any

from monoview.environment.exceptions import ExpressionEvaluationError
from monoview.expression.nodes import BinOp, BoolOp, Compare, Const, Node, UnaryOp
from monoview.expression.parser import parse

Value = str | int | float | bool | None

_NUMERIC_RE = re.compile(r"\s*[+-]?(?:\d+(?:\.\d*)?|\.\d+)(?:[eE][+-]?\d+)?\s*")


def truthy(value: Value) -> bool:
    """PHP truthiness: ``null``, ``false``, ``0``, ``0.0``, ``""`` and ``"0"`` are false."""
    if isinstance(value, str):
        return value not in ("", "0")
    return bool(value)


def is_numeric(value: Value) -> bool:
    if isinstance(value, bool) or value is None:
        return False
    if isinstance(value, (int, float)):
        return True
    return bool(_NUMERIC_RE.fullmatch(value))


def to_number(value: Value) -> int | float:
    """Coerce a value for arithmetic.

    Raises:
        ExpressionEvaluationError: For non-numeric strings and strings
            outside the float range (``"1e999"``).
    """
    if value is None:
        return 0
    if isinstance(value, bool):
        return int(value)
    if isinstance(value, (int, float)):
        return value
    if not is_numeric(value):
        raise ExpressionEvaluationError(f"Non-numeric value {value!r} in arithmetic")
    text = value.strip()
    number = float(text)
    if not math.isfinite(number):
        raise ExpressionEvaluationError(f"Numeric value {value!r} out of range")
    if number.is_integer() and not any(c in text for c in ".eE"):
        return int(number)
    return number


def _as_text(value: Value) -> str:
    if value is None:
        return ""
    if isinstance(value, bool):
        return "1" if value else ""
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


def _spaceship(left: Value, right: Value) -> int:
    """Three-way loose comparison: -1, 0 or 1."""
    if left is None and isinstance(right, str):
        left = ""
    elif right is None and isinstance(left, str):
        right = ""
    elif isinstance(left, bool) or isinstance(right, bool) or left is None or right is None:
        a, b = truthy(left), truthy(right)
        return (a > b) - (a < b)

    if is_numeric(left) and is_numeric(right):
        a_num, b_num = to_number(left), to_number(right)
        return (a_num > b_num) - (a_num < b_num)

    a_str, b_str = _as_text(left), _as_text(right)
    return (a_str > b_str) - (a_str < b_str)


def loose_equals(left: Value, right: Value) -> bool:
    return _spaceship(left, right) == 0


def strict_equals(left: Value, right: Value) -> bool:
    return type(left) is type(right) and left == right


_COMPARATORS: dict[str, Callable[[Value, Value], bool]] = {
    "==": loose_equals,
    "!=": lambda a, b: not loose_equals(a, b),
    "===": strict_equals,
    "!==": lambda a, b: not strict_equals(a, b),
    "<": lambda a, b: _spaceship(a, b) < 0,
    ">": lambda a, b: _spaceship(a, b) > 0,
    "<=": lambda a, b: _spaceship(a, b) <= 0,
    ">=": lambda a, b: _spaceship(a, b) >= 0,
}


def _divide(a: int | float, b: int | float) -> int | float:
    if b == 0:
        raise ExpressionEvaluationError("Division by zero")
    result = a / b
    if isinstance(a, int) and isinstance(b, int) and result.is_integer():
        return int(result)
    return result


def _modulo(a: int | float, b: int | float) -> int:
    # Integer modulo with the sign of the dividend
    if not (math.isfinite(a) and math.isfinite(b)):
        raise ExpressionEvaluationError("Modulo of a non-finite number")
    a_int, b_int = int(a), int(b)
    if b_int == 0:
        raise ExpressionEvaluationError("Modulo by zero")
    return int(math.fmod(a_int, b_int))


_ARITHMETIC: dict[str, Callable[[Any, Any], int | float]] = {
    "+": lambda a, b: a + b,
    "-": lambda a, b: a - b,
    "*": lambda a, b: a * b,
    "/": _divide,
    "%": _modulo,
}


class Evaluator:
    """Evaluate condition nodes with O(1) node-type dispatch."""

    __slots__ = ("_dispatch",)

    def __init__(self) -> None:
        self._dispatch: dict[type[Node], Callable[[Any], Value]] = {
            Const: self._eval_const,
            UnaryOp: self._eval_unary,
            BinOp: self._eval_binop,
            Compare: self._eval_compare,
            BoolOp: self._eval_boolop,
        }

    def evaluate(self, node: Node) -> Value:
        return self._dispatch[type(node)](node)

    def _eval_const(self, node: Const) -> Value:
        return node.value

    def _eval_unary(self, node: UnaryOp) -> Value:
        operand = self.evaluate(node.operand)
        if node.op == "!":
            return not truthy(operand)
        number = self._number(operand, node)
        return -number if node.op == "-" else number

    def _eval_binop(self, node: BinOp) -> Value:
        left = self._number(self.evaluate(node.left), node)
        right = self._number(self.evaluate(node.right), node)
        try:
            return _ARITHMETIC[node.op](left, right)
        except ExpressionEvaluationError as exc:
            exc.position = node.offset
            raise

    def _eval_compare(self, node: Compare) -> Value:
        return _COMPARATORS[node.op](self.evaluate(node.left), self.evaluate(node.right))

    def _eval_boolop(self, node: BoolOp) -> Value:
        left = truthy(self.evaluate(node.left))
        if node.op == "&&":
            return left and truthy(self.evaluate(node.right))
        return left or truthy(self.evaluate(node.right))

    @staticmethod
    def _number(value: Value, node: Node) -> int | float:
        try:
            return to_number(value)
        except ExpressionEvaluationError as exc:
            exc.position = node.offset
            raise


_EVALUATOR = Evaluator()


def evaluate_condition(source: str) -> bool:
    """Parse and evaluate ``source``, returning its truthiness.

    Raises:
        ExpressionEvaluationError: If the condition cannot be parsed or
            evaluated. The error carries the condition text. Numeric
            overflow and operator chains too long to walk are reported
            the same way.
    """
    try:
        return truthy(_EVALUATOR.evaluate(parse(source)))
    except ExpressionEvaluationError as exc:
        if not exc.expression:
            exc.expression = source
        raise
    except (OverflowError, ValueError) as exc:
        raise ExpressionEvaluationError(f"Numeric overflow: {exc}", expression=source) from exc
    except RecursionError:
        raise ExpressionEvaluationError("Condition too long", expression=source) from None
