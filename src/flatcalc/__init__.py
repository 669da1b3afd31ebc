"""
flatcalc - a calculator without operator precedence.

Operators are applied strictly left to right; brackets are the only way
to group:

    >>> from flatcalc import evaluate
    >>> evaluate("2 + 3 * 4")
    20
    >>> evaluate("2 + (3 * 4)")
    14
"""

from __future__ import annotations

from flatcalc._version import get_version
from flatcalc.core import evaluate, tokenize, try_evaluate
from flatcalc.core.errors import (
    ConfigError,
    DivisionByZeroError,
    EvaluationError,
    FlatcalcError,
    InvalidCharacterError,
    MalformedExpressionError,
    MalformedNumberError,
    NumericOverflowError,
    UnbalancedParenthesesError,
)

__version__ = get_version()

__all__ = [
    "__version__",
    "evaluate",
    "tokenize",
    "try_evaluate",
    "FlatcalcError",
    "EvaluationError",
    "InvalidCharacterError",
    "MalformedNumberError",
    "UnbalancedParenthesesError",
    "MalformedExpressionError",
    "DivisionByZeroError",
    "NumericOverflowError",
    "ConfigError",
]
