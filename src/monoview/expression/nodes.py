"""Expression nodes for ``@if`` conditions.

Nodes are immutable and record the character offset they were parsed from,
so evaluation errors can point into the condition text.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class Node:
    """Base class for all condition nodes."""

    offset: int


@dataclass(frozen=True, slots=True)
class Const(Node):
    """Literal value: string, int, float, bool or null."""

    value: str | int | float | bool | None


@dataclass(frozen=True, slots=True)
class UnaryOp(Node):
    """Prefix operator: ``!x``, ``-x``, ``+x``"""

    op: str
    operand: Node


@dataclass(frozen=True, slots=True)
class BinOp(Node):
    """Arithmetic: ``a + b``, ``a * b``, ``a % b``"""

    op: str
    left: Node
    right: Node


@dataclass(frozen=True, slots=True)
class Compare(Node):
    """Comparison: ``a == b``, ``a !== b``, ``a < b``"""

    op: str
    left: Node
    right: Node


@dataclass(frozen=True, slots=True)
class BoolOp(Node):
    """Short-circuit logic: ``a && b``, ``a || b``"""

    op: str
    left: Node
    right: Node
