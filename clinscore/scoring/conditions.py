"""
Condition Evaluator
===================

Parses and evaluates the threshold expressions used by conditional point
rules in score definitions.

Grammar:
    condition  := comparison ( "&&" comparison )*
    comparison := operator number
    operator   := ">=" | "<=" | "==" | "!=" | ">" | "<"

Operators are matched in the order listed so that ``>=`` is never read as
``>``. ``==`` and ``!=`` compare within ``CONDITION_EPSILON``. There is no
OR, no grouping and no nesting.

Usage:
    evaluate_condition(">= 30 && < 40", 35.0)   # True

Author: ClinScore Team
Version: 1.0.0
"""

import operator
import re
from dataclasses import dataclass
from typing import Callable, Dict, Tuple

from clinscore.scoring.errors import ConditionParseError


CONDITION_EPSILON = 1e-9

AND_TOKEN = "&&"

# Checked in this order
OPERATORS: Tuple[str, ...] = (">=", "<=", "==", "!=", ">", "<")

_EXPECTED = "expected: >=, <=, ==, !=, >, <"

_FLOAT_LITERAL = re.compile(r"[+-]?(?:\d+(?:\.\d*)?|\.\d+)(?:[eE][+-]?\d+)?")


def _approx_eq(value: float, threshold: float) -> bool:
    return abs(value - threshold) < CONDITION_EPSILON


def _approx_ne(value: float, threshold: float) -> bool:
    return abs(value - threshold) >= CONDITION_EPSILON


_COMPARATORS: Dict[str, Callable[[float, float], bool]] = {
    ">=": operator.ge,
    "<=": operator.le,
    "==": _approx_eq,
    "!=": _approx_ne,
    ">": operator.gt,
    "<": operator.lt,
}


@dataclass(frozen=True)
class Comparison:
    """A single parsed comparison, e.g. ``>= 65``."""
    op: str
    threshold: float

    def holds(self, value: float) -> bool:
        return _COMPARATORS[self.op](value, self.threshold)


def parse_comparison(text: str) -> Comparison:
    """
    Parse one comparison.

    Raises:
        ConditionParseError: Unknown operator or invalid number
    """
    text = text.strip()
    for op in OPERATORS:
        if text.startswith(op):
            operand = text[len(op):].strip()
            if not _FLOAT_LITERAL.fullmatch(operand):
                raise ConditionParseError(text, f"Invalid number after '{op}'")
            return Comparison(op=op, threshold=float(operand))
    raise ConditionParseError(text, f"Unknown operator ({_EXPECTED})")


def parse_condition(condition: str) -> Tuple[Comparison, ...]:
    """
    Parse a full condition into its AND-ed comparisons.

    Raises:
        ConditionParseError: If any part is malformed
    """
    condition = condition.strip()
    if not condition:
        raise ConditionParseError(condition, f"Empty condition ({_EXPECTED})")
    return tuple(parse_comparison(part) for part in condition.split(AND_TOKEN))


def evaluate_condition(condition: str, value: float) -> bool:
    """
    Evaluate a condition against a numeric value.

    All comparisons must hold. Every part is parsed before evaluation,
    so a malformed tail is reported even when an earlier part is false.

    Raises:
        ConditionParseError: If the condition is malformed
    """
    return all(comparison.holds(value) for comparison in parse_condition(condition))
