"""
Expression evaluator for flatcalc.

Operators share one precedence level and are applied strictly left to
right; only brackets change grouping:

    2 + 3 * 4    →  (2 + 3) * 4  = 20
    2 + (3 * 4)  →  2 + 12       = 14

Two strategies produce the same values:

- SUBSTITUTION repeatedly finds the first ``)``, folds the flat run back to
  its nearest preceding ``(``, and splices the result in as a number token.
- STACK makes a single pass, opening a new fold on ``(`` and feeding its
  result into the enclosing fold on ``)``.

Pure evaluation, no I/O. Does NOT use Python's eval().
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Sequence
from enum import StrEnum, auto

from flatcalc.core.errors import (
    DivisionByZeroError,
    MalformedExpressionError,
    NumericOverflowError,
    UnbalancedParenthesesError,
)
from flatcalc.core.notation import STANDARD, Notation
from flatcalc.core.operators import BinaryOp, DivisionMode, Number, ZeroDivisor, apply
from flatcalc.core.tokenizer import Token, TokenKind, tokenize

logger = logging.getLogger(__name__)


class Strategy(StrEnum):
    """How bracketed groups are resolved."""

    SUBSTITUTION = auto()
    STACK = auto()


class _FoldState(StrEnum):
    EXPECT_NUMBER = auto()
    EXPECT_OPERATOR = auto()


class _Fold:
    """Left-to-right fold over one flat nesting level.

    Starts in EXPECT_NUMBER and must finish in EXPECT_OPERATOR; a token
    arriving in the wrong state is a MalformedExpressionError.
    """

    def __init__(self, source: str | None, division: DivisionMode, start: int = 0) -> None:
        self.source = source
        self.division = division
        self.start = start
        self.state = _FoldState.EXPECT_NUMBER
        self.value: Number | None = None
        self.pending: Token | None = None

    def feed(self, tok: Token) -> None:
        if self.state == _FoldState.EXPECT_NUMBER:
            if tok.kind != TokenKind.NUMBER:
                raise MalformedExpressionError(
                    f"Expected a number, got {tok.text!r}", self.source, tok.pos
                )
            self.value = tok.value if self.pending is None else self._apply(tok)
            self.state = _FoldState.EXPECT_OPERATOR
            return

        if tok.kind != TokenKind.OPERATOR:
            raise MalformedExpressionError(
                f"Expected an operator, got {tok.text!r}", self.source, tok.pos
            )
        self.pending = tok
        self.state = _FoldState.EXPECT_NUMBER

    def result(self) -> Number:
        if self.state == _FoldState.EXPECT_NUMBER:
            if self.pending is None:
                raise MalformedExpressionError("Empty expression", self.source, self.start)
            raise MalformedExpressionError(
                f"Expression ends with operator {self.pending.text!r}",
                self.source,
                self.pending.pos,
            )
        assert self.value is not None
        return self.value

    def _apply(self, right: Token) -> Number:
        assert self.pending is not None and self.value is not None
        op = self.pending.value
        assert isinstance(op, BinaryOp)
        try:
            return apply(op, self.value, right.value, self.division)
        except ZeroDivisor:
            raise DivisionByZeroError(
                f"Division by zero at position {self.pending.pos}", self.source, self.pending.pos
            ) from None
        except OverflowError as e:
            raise NumericOverflowError(
                f"Numeric overflow at position {self.pending.pos}", self.source, self.pending.pos
            ) from e


def fold(
    tokens: Iterable[Token],
    *,
    source: str | None = None,
    division: DivisionMode = DivisionMode.TRUE,
    start: int = 0,
) -> Number:
    """Fold a flat token sequence left to right.

    ``n0 op1 n1 op2 n2`` evaluates as ``(n0 op1 n1) op2 n2`` whatever the
    operators are.

    Args:
        tokens: Alternating NUMBER/OPERATOR tokens, no brackets.
        source: Expression text, used for error context.
        division: Division semantics for every ``/``.
        start: Position reported if the sequence is empty.

    Raises:
        MalformedExpressionError: If the sequence does not alternate
            number/operator, starting and ending with a number.
        DivisionByZeroError: If a divisor is zero.
        NumericOverflowError: If a step leaves float range.
    """
    acc = _Fold(source, division, start)
    for tok in tokens:
        acc.feed(tok)
    return acc.result()


def check_balance(tokens: Sequence[Token], source: str | None = None) -> None:
    """Verify every bracket has a partner.

    Raises:
        UnbalancedParenthesesError: Pointing at the first unmatched ``)``,
            or else at the innermost unmatched ``(``.
    """
    opens: list[int] = []
    for tok in tokens:
        if tok.kind == TokenKind.LPAREN:
            opens.append(tok.pos)
        elif tok.kind == TokenKind.RPAREN:
            if not opens:
                raise UnbalancedParenthesesError(
                    f"Unmatched {tok.text!r} at position {tok.pos}", source, tok.pos
                )
            opens.pop()
    if opens:
        raise UnbalancedParenthesesError(
            f"Unclosed bracket at position {opens[-1]}", source, opens[-1]
        )


def check_structure(tokens: Sequence[Token], source: str | None = None) -> None:
    """Verify number/operator alternation at every nesting level.

    A bracketed group counts as a number in its enclosing level. Assumes
    check_balance() already passed.

    Raises:
        MalformedExpressionError: At the first token that breaks alternation.
    """
    expect_number = True
    last: Token | None = None
    for tok in tokens:
        if tok.kind in (TokenKind.NUMBER, TokenKind.LPAREN):
            if not expect_number:
                raise MalformedExpressionError(
                    f"Expected an operator, got {tok.text!r}", source, tok.pos
                )
            expect_number = tok.kind == TokenKind.LPAREN
        elif expect_number:
            # An operator or ")" where a number should be
            if last is None:
                message = f"Expression starts with {tok.text!r}"
            elif last.kind == TokenKind.LPAREN and tok.kind == TokenKind.RPAREN:
                message = f"Empty group at position {last.pos}"
            else:
                message = f"Expected a number, got {tok.text!r}"
            raise MalformedExpressionError(message, source, tok.pos)
        else:
            expect_number = tok.kind == TokenKind.OPERATOR
        last = tok

    if expect_number:
        if last is None:
            raise MalformedExpressionError("Empty expression", source, 0)
        raise MalformedExpressionError(
            f"Expression ends with {last.text!r}", source, last.pos
        )


def evaluate_tokens(
    tokens: Sequence[Token],
    *,
    source: str | None = None,
    division: DivisionMode = DivisionMode.TRUE,
    strategy: Strategy = Strategy.SUBSTITUTION,
) -> Number:
    """Evaluate a token sequence.

    Checks run in a fixed order so both strategies report the same error
    kind: unbalanced brackets first, then malformed structure, then
    arithmetic errors found while folding.
    """
    check_balance(tokens, source)
    check_structure(tokens, source)

    if strategy == Strategy.STACK:
        value = _evaluate_with_stack(tokens, source, division)
    else:
        value = _evaluate_by_substitution(tokens, source, division)
    logger.debug("Evaluated %r -> %r (%s, %s division)", source, value, strategy, division)
    return value


def evaluate(
    source: str,
    *,
    notation: Notation = STANDARD,
    division: DivisionMode = DivisionMode.TRUE,
    strategy: Strategy = Strategy.SUBSTITUTION,
) -> Number:
    """Tokenize and evaluate an expression string.

    Args:
        source: Expression text, e.g. ``"2 + 3 * 4"``.
        notation: Symbols for operators and brackets.
        division: Division semantics for every ``/``.
        strategy: Group resolution strategy; both give identical results.

    Returns:
        The computed value: int, or float once a float literal or true
        division is involved.

    Raises:
        EvaluationError: Any subclass, see flatcalc.core.errors.
    """
    tokens = tokenize(source, notation)
    return evaluate_tokens(tokens, source=source, division=division, strategy=strategy)


def _evaluate_by_substitution(
    tokens: Sequence[Token], source: str | None, division: DivisionMode
) -> Number:
    work = list(tokens)
    while True:
        close = next((i for i, tok in enumerate(work) if tok.kind == TokenKind.RPAREN), None)
        if close is None:
            break
        open_ = _matching_open(work, close, source)
        start, end = work[open_].pos, work[close].pos
        value = fold(work[open_ + 1 : close], source=source, division=division, start=start)
        logger.debug("Resolved group at position %d -> %r", start, value)
        work[open_ : close + 1] = [Token.number(value, start, _group_text(source, start, end))]
    return fold(work, source=source, division=division)


def _matching_open(work: list[Token], close: int, source: str | None) -> int:
    """Index of the nearest ``(`` before the first ``)`` at ``close``."""
    for i in range(close - 1, -1, -1):
        if work[i].kind == TokenKind.LPAREN:
            return i
    tok = work[close]
    raise UnbalancedParenthesesError(
        f"Unmatched {tok.text!r} at position {tok.pos}", source, tok.pos
    )


def _evaluate_with_stack(
    tokens: Sequence[Token], source: str | None, division: DivisionMode
) -> Number:
    scopes = [_Fold(source, division)]
    for tok in tokens:
        if tok.kind == TokenKind.LPAREN:
            scopes.append(_Fold(source, division, tok.pos))
        elif tok.kind == TokenKind.RPAREN:
            group = scopes.pop()
            value = group.result()
            logger.debug("Resolved group at position %d -> %r", group.start, value)
            text = _group_text(source, group.start, tok.pos)
            scopes[-1].feed(Token.number(value, group.start, text))
        else:
            scopes[-1].feed(tok)
    return scopes[0].result()


def _group_text(source: str | None, start: int, end: int) -> str:
    # str() of a very large int raises ValueError; label the group by its source instead
    if source is None:
        return "(...)"
    return source[start : end + 1]
