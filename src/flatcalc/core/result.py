"""Pydantic models for evaluation results and errors."""

from __future__ import annotations

from pydantic import BaseModel, Field, computed_field

from flatcalc.core.errors import EvaluationError
from flatcalc.core.evaluator import Strategy, evaluate
from flatcalc.core.notation import STANDARD, Notation
from flatcalc.core.operators import DivisionMode


class ErrorInfo(BaseModel):
    """Why an expression could not be evaluated."""

    kind: str = Field(..., description="Error kind, e.g. 'DivisionByZero'")
    message: str = Field(..., description="Human-readable description")
    position: int | None = Field(default=None, description="0-indexed offset into the expression")

    @classmethod
    def from_error(cls, error: EvaluationError) -> ErrorInfo:
        return cls(kind=error.kind, message=error.message, position=error.position)


class EvaluationResult(BaseModel):
    """Outcome of evaluating one expression: a value or an error, never both."""

    expression: str = Field(..., description="Original arithmetic expression")
    value: int | float | None = Field(default=None, description="Computed value on success")
    error: ErrorInfo | None = Field(default=None, description="Failure details")

    @computed_field  # type: ignore[prop-decorator]
    @property
    def ok(self) -> bool:
        return self.error is None


def try_evaluate(
    source: str,
    *,
    notation: Notation = STANDARD,
    division: DivisionMode = DivisionMode.TRUE,
    strategy: Strategy = Strategy.SUBSTITUTION,
) -> EvaluationResult:
    """Evaluate ``source`` and wrap the value or EvaluationError in a result."""
    try:
        value = evaluate(source, notation=notation, division=division, strategy=strategy)
    except EvaluationError as e:
        return EvaluationResult(expression=source, error=ErrorInfo.from_error(e))
    return EvaluationResult(expression=source, value=value)
