"""
Tokenizer for flatcalc expressions.

Converts an expression string into a sequence of typed tokens.
"""

from __future__ import annotations

import math
import re
from enum import StrEnum, auto

from flatcalc.core.errors import InvalidCharacterError, MalformedNumberError
from flatcalc.core.notation import STANDARD, Notation
from flatcalc.core.operators import BinaryOp, Number


class TokenKind(StrEnum):
    """Token types for flatcalc expressions."""

    NUMBER = auto()
    OPERATOR = auto()
    LPAREN = auto()
    RPAREN = auto()


class Token:
    """A single token from the expression tokenizer.

    ``value`` is the parsed number for NUMBER tokens, the BinaryOp for
    OPERATOR tokens, and None for brackets. Tokens are immutable.
    """

    __slots__ = ("kind", "value", "pos", "text")

    def __init__(
        self, kind: TokenKind, value: Number | BinaryOp | None, pos: int, text: str
    ) -> None:
        object.__setattr__(self, "kind", kind)
        object.__setattr__(self, "value", value)
        object.__setattr__(self, "pos", pos)
        object.__setattr__(self, "text", text)

    def __setattr__(self, name: str, value: object) -> None:
        raise AttributeError(f"Token is immutable; cannot set {name!r}")

    def __delattr__(self, name: str) -> None:
        raise AttributeError(f"Token is immutable; cannot delete {name!r}")

    @classmethod
    def number(cls, value: Number, pos: int, text: str | None = None) -> Token:
        return cls(TokenKind.NUMBER, value, pos, text if text is not None else str(value))

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Token):
            return NotImplemented
        return (self.kind, self.value, self.pos) == (other.kind, other.value, other.pos)

    def __hash__(self) -> int:
        return hash((self.kind, self.value, self.pos))

    def __repr__(self) -> str:
        return f"Token({self.kind}, {self.value!r}, pos={self.pos})"


# A run of digits and decimal points; validated after matching so that
# "1.2.3" is reported as one malformed literal rather than two numbers.
_NUMBER_RUN_RE = re.compile(r"[0-9.]+")
_INT_RE = re.compile(r"[0-9]+")
_FLOAT_RE = re.compile(r"[0-9]*\.[0-9]*")


def tokenize(source: str, notation: Notation = STANDARD) -> list[Token]:
    """Tokenize an expression string into a list of tokens.

    Raises:
        InvalidCharacterError: On a character outside the notation.
        MalformedNumberError: On a numeric run that is not an int or float.
    """
    tokens: list[Token] = []
    operators = notation.operators
    i = 0
    n = len(source)

    while i < n:
        c = source[i]

        if c.isspace():
            i += 1
            continue

        if c in "0123456789.":
            m = _NUMBER_RUN_RE.match(source, i)
            assert m is not None
            run = m.group(0)
            tokens.append(Token.number(_parse_number(run, source, i), i, run))
            i = m.end()
            continue

        if c in operators:
            tokens.append(Token(TokenKind.OPERATOR, operators[c], i, c))
        elif c == notation.open:
            tokens.append(Token(TokenKind.LPAREN, None, i, c))
        elif c == notation.close:
            tokens.append(Token(TokenKind.RPAREN, None, i, c))
        else:
            raise InvalidCharacterError(c, source, i)
        i += 1

    return tokens


def _parse_number(run: str, source: str, pos: int) -> Number:
    """Convert a digit/decimal-point run to int or float."""
    try:
        if _INT_RE.fullmatch(run):
            return int(run)
        # Exactly one point and at least one digit: "1.5", "3.", ".5"
        if _FLOAT_RE.fullmatch(run) and run != ".":
            value = float(run)
            # Literals beyond float range parse as inf
            if not math.isinf(value):
                return value
    except ValueError as e:
        # int() refuses literals beyond sys.get_int_max_str_digits()
        raise MalformedNumberError(run, source, pos) from e
    raise MalformedNumberError(run, source, pos)
