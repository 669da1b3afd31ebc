"""
Notations: the characters used to spell operators and brackets.

The standard notation is ``+ - * / ( )``. The letter notation spells the
same six symbols ``a b c d e f``, so ``"3ae4c66fb32"`` reads as
``3 + (4 * 66) - 32``.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field, model_validator

from flatcalc.core.errors import ConfigError
from flatcalc.core.operators import BinaryOp


class Notation(BaseModel):
    """One symbol per operator and bracket."""

    name: str = Field(default="custom", description="Display name")
    add: str = Field(default="+", min_length=1, max_length=1)
    subtract: str = Field(default="-", min_length=1, max_length=1)
    multiply: str = Field(default="*", min_length=1, max_length=1)
    divide: str = Field(default="/", min_length=1, max_length=1)
    open: str = Field(default="(", min_length=1, max_length=1)
    close: str = Field(default=")", min_length=1, max_length=1)

    model_config = ConfigDict(frozen=True)

    @model_validator(mode="after")
    def _check_symbols(self) -> Notation:
        symbols = self.symbols()
        for symbol in symbols:
            if symbol.isdigit() or symbol.isspace() or symbol == ".":
                raise ValueError(f"Symbol {symbol!r} clashes with number or whitespace syntax")
        if len(set(symbols)) != len(symbols):
            raise ValueError(f"Symbols must be distinct, got {''.join(symbols)!r}")
        return self

    def symbols(self) -> list[str]:
        return [self.add, self.subtract, self.multiply, self.divide, self.open, self.close]

    @property
    def operators(self) -> dict[str, BinaryOp]:
        """Map operator symbol -> BinaryOp."""
        return {
            self.add: BinaryOp.ADD,
            self.subtract: BinaryOp.SUB,
            self.multiply: BinaryOp.MUL,
            self.divide: BinaryOp.DIV,
        }

    def __str__(self) -> str:
        return f"{self.name} ({''.join(self.symbols())})"


STANDARD = Notation(name="standard")
LETTERS = Notation(
    name="letters",
    add="a",
    subtract="b",
    multiply="c",
    divide="d",
    open="e",
    close="f",
)

PRESETS: dict[str, Notation] = {
    STANDARD.name: STANDARD,
    LETTERS.name: LETTERS,
}


def get_notation(name: str) -> Notation:
    """Look up a preset notation by name."""
    try:
        return PRESETS[name.lower()]
    except KeyError:
        choices = ", ".join(sorted(PRESETS))
        raise ConfigError(f"Unknown notation {name!r}; choose one of: {choices}") from None
