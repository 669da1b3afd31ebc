"""
Binary operators and their numeric semantics.

All four operators share one precedence level; the evaluator applies them
in the order they appear. This module only knows how to apply a single
operator to two operands.
"""

from __future__ import annotations

import math
from enum import StrEnum

Number = int | float


class BinaryOp(StrEnum):
    """Binary operators for expressions."""

    ADD = "+"
    SUB = "-"
    MUL = "*"
    DIV = "/"


class DivisionMode(StrEnum):
    """How ``/`` turns two operands into a quotient."""

    # Python true division: 7 / 2 == 3.5
    TRUE = "true"
    # Integer quotient truncated toward zero: 7 / 2 == 3, -7 / 2 == -3
    TRUNCATE = "truncate"


class ZeroDivisor(Exception):
    """Signals a division whose right operand is zero.

    The evaluator converts this into a DivisionByZeroError carrying the
    source position of the operator.
    """


def apply(
    op: BinaryOp, left: Number, right: Number, division: DivisionMode = DivisionMode.TRUE
) -> Number:
    """Apply ``op`` to ``left`` and ``right``.

    Raises:
        ZeroDivisor: If ``op`` is DIV and ``right`` is zero.
        OverflowError: If the result, or an int converted for float
            arithmetic, is beyond float range.
    """
    result = _apply(op, left, right, division)
    if isinstance(result, float) and not math.isfinite(result):
        raise OverflowError(f"Result of '{op}' is out of float range")
    return result


def _apply(op: BinaryOp, left: Number, right: Number, division: DivisionMode) -> Number:
    if op == BinaryOp.ADD:
        return left + right
    if op == BinaryOp.SUB:
        return left - right
    if op == BinaryOp.MUL:
        return left * right
    if op == BinaryOp.DIV:
        if right == 0:
            raise ZeroDivisor()
        if division == DivisionMode.TRUNCATE:
            return _truncating_div(left, right)
        return left / right
    raise ValueError(f"Unknown binary op: {op}")


def _truncating_div(left: Number, right: Number) -> int:
    """Divide and truncate toward zero."""
    if isinstance(left, int) and isinstance(right, int):
        # Exact for arbitrarily large ints, unlike int(left / right)
        quotient = abs(left) // abs(right)
        return quotient if (left < 0) == (right < 0) else -quotient
    return math.trunc(left / right)
