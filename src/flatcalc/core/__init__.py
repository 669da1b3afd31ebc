"""
flatcalc core: tokenizer, left-to-right evaluator, notations and config.

Usage:
    from flatcalc.core import evaluate

    evaluate("2 + 3 * 4")    # 20, operators apply left to right
    evaluate("2 + (3 * 4)")  # 14, brackets group first
"""

from flatcalc.core.evaluator import Strategy, evaluate, evaluate_tokens, fold
from flatcalc.core.notation import LETTERS, STANDARD, Notation, get_notation
from flatcalc.core.operators import BinaryOp, DivisionMode
from flatcalc.core.result import EvaluationResult, try_evaluate
from flatcalc.core.tokenizer import Token, TokenKind, tokenize

__all__ = [
    "BinaryOp",
    "DivisionMode",
    "EvaluationResult",
    "LETTERS",
    "Notation",
    "STANDARD",
    "Strategy",
    "Token",
    "TokenKind",
    "evaluate",
    "evaluate_tokens",
    "fold",
    "get_notation",
    "tokenize",
    "try_evaluate",
]
