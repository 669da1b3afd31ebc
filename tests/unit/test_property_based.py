"""
Property-based tests using Hypothesis.

These tests verify evaluator invariants across generated expressions.
"""

from __future__ import annotations

import operator
from functools import reduce

from hypothesis import given, settings
from hypothesis import strategies as st

from flatcalc.core.errors import EvaluationError
from flatcalc.core.evaluator import Strategy, evaluate
from flatcalc.core.result import try_evaluate
from flatcalc.core.tokenizer import tokenize

_PY_OPS = {"+": operator.add, "-": operator.sub, "*": operator.mul, "/": operator.truediv}

# n0 op1 n1 ... opk nk with non-zero operands so "/" never fails
flat_terms = st.tuples(
    st.integers(min_value=1, max_value=999),
    st.lists(
        st.tuples(st.sampled_from(sorted(_PY_OPS)), st.integers(min_value=1, max_value=999)),
        max_size=8,
    ),
)


def _render(first: int, rest: list[tuple[str, int]]) -> str:
    return " ".join([str(first), *(f"{op} {n}" for op, n in rest)])


def _left_fold(first: int, rest: list[tuple[str, int]]) -> float:
    return reduce(lambda acc, pair: _PY_OPS[pair[0]](acc, pair[1]), rest, first)


class TestEvaluatorProperties:
    """Invariants of left-to-right evaluation."""

    @given(flat_terms)
    @settings(max_examples=200)
    def test_flat_sequence_is_left_fold(self, terms: tuple[int, list[tuple[str, int]]]) -> None:
        """Invariant: a flat sequence equals the iterated left fold."""
        first, rest = terms
        assert evaluate(_render(first, rest)) == _left_fold(first, rest)

    @given(flat_terms)
    @settings(max_examples=100)
    def test_wrapping_in_brackets_is_identity(
        self, terms: tuple[int, list[tuple[str, int]]]
    ) -> None:
        """Invariant: evaluating (E) equals evaluating E."""
        source = _render(*terms)
        assert evaluate(f"({source})") == evaluate(source)

    @given(flat_terms, st.data())
    @settings(max_examples=100)
    def test_bracketed_prefix_changes_nothing(
        self, terms: tuple[int, list[tuple[str, int]]], data: st.DataObject
    ) -> None:
        """Invariant: bracketing any leading run matches the left fold's own grouping."""
        first, rest = terms
        split = data.draw(st.integers(min_value=0, max_value=len(rest)))
        head = _render(first, rest[:split])
        tail = " ".join(f"{op} {n}" for op, n in rest[split:])
        assert evaluate(f"({head}) {tail}") == _left_fold(first, rest)

    @given(st.text(alphabet="0123456789+-*/(). ", max_size=30))
    @settings(max_examples=300)
    def test_strategies_agree(self, source: str) -> None:
        """Invariant: substitution and stack strategies give the same outcome."""
        by_substitution = try_evaluate(source, strategy=Strategy.SUBSTITUTION)
        by_stack = try_evaluate(source, strategy=Strategy.STACK)
        assert by_substitution.value == by_stack.value
        assert (by_substitution.error is None) == (by_stack.error is None)
        if by_substitution.error is not None and by_stack.error is not None:
            assert by_substitution.error.kind == by_stack.error.kind

    @given(st.text(max_size=50))
    @settings(max_examples=200)
    def test_only_evaluation_errors_escape(self, source: str) -> None:
        """Invariant: arbitrary input either evaluates or raises EvaluationError."""
        try:
            evaluate(source)
        except EvaluationError:
            pass


class TestTokenizerProperties:
    @given(st.lists(st.integers(min_value=0, max_value=10**12), min_size=1, max_size=10))
    def test_numbers_round_trip(self, numbers: list[int]) -> None:
        """Invariant: space-separated integers tokenize to the same values in order."""
        tokens = tokenize(" ".join(str(n) for n in numbers))
        assert [t.value for t in tokens] == numbers
