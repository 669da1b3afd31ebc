"""
Error types for flatcalc tokenizing, evaluation, and configuration.
"""

from dataclasses import dataclass


class FlatcalcError(Exception):
    """Base exception for all flatcalc errors."""

    def __init__(self, message: str, context: "ErrorContext | None" = None):
        self.message = message
        self.context = context
        super().__init__(self._format_message())

    def _format_message(self) -> str:
        """Format error message with context if available."""
        if self.context:
            return f"{self.message}\n{self.context.format()}"
        return self.message


class EvaluationError(FlatcalcError):
    """
    Raised when an expression cannot be tokenized or evaluated.

    Subclasses set ``kind`` to the name callers match on.
    """

    kind = "EvaluationError"

    def __init__(self, message: str, source: str | None = None, position: int | None = None):
        self.source = source
        self.position = position
        context = None
        if source is not None and position is not None:
            context = ErrorContext(source=source, position=position)
        super().__init__(message, context)


class InvalidCharacterError(EvaluationError):
    """
    Raised when the tokenizer meets a symbol outside the active notation.

    Examples:
    - Letters in standard notation ("2 + x")
    - Unsupported operators ("2 ^ 3", "7 % 2")
    """

    kind = "InvalidCharacter"

    def __init__(self, character: str, source: str, position: int):
        self.character = character
        super().__init__(
            f"Invalid character {character!r} at position {position}", source, position
        )


class MalformedNumberError(EvaluationError):
    """
    Raised when a run of digits and decimal points is not a number.

    Examples:
    - Multiple decimal points ("1.2.3")
    - A lone decimal point (".")
    """

    kind = "MalformedNumber"

    def __init__(self, literal: str, source: str, position: int):
        self.literal = literal
        super().__init__(f"Malformed number {literal!r} at position {position}", source, position)


class UnbalancedParenthesesError(EvaluationError):
    """
    Raised when a bracket has no partner.

    Examples:
    - "(1 + 2"
    - "1 + 2)"
    """

    kind = "UnbalancedParentheses"


class MalformedExpressionError(EvaluationError):
    """
    Raised when a nesting level does not alternate number/operator.

    Examples:
    - Empty input or empty brackets ("", "()")
    - Leading or trailing operator ("* 2", "2 +")
    - Two numbers in a row ("2 (3)")
    """

    kind = "MalformedExpression"


class DivisionByZeroError(EvaluationError, ZeroDivisionError):
    """Raised when the right operand of a division is zero."""

    kind = "DivisionByZero"


class NumericOverflowError(EvaluationError):
    """
    Raised when an operation leaves the range a float can represent.

    Examples:
    - True division of a 400-digit integer
    - Multiplying two floats near 1e300
    """

    kind = "NumericOverflow"


class ConfigError(FlatcalcError):
    """
    Raised when configuration cannot be loaded.

    Examples:
    - Malformed flatcalc.toml
    - Unknown notation preset or division mode
    """

    pass


@dataclass
class ErrorContext:
    """
    Location of an error inside the expression source.

    Attributes:
        source: The full expression text
        position: 0-indexed character offset of the offending symbol
    """

    source: str
    position: int

    def format(self) -> str:
        """
        Format the source with a caret marker under the error position.

        Returns:
            Two lines: the source, then "^" under the offending column
        """
        # Newlines and tabs would misalign the marker
        line = self.source.replace("\n", " ").replace("\t", " ")
        column = min(self.position, len(line))
        return f"  {line}\n  {' ' * column}^"
