"""
Range Matcher
=============

Decides whether a total score falls inside an interpretation rule's score
specification, and picks the first matching rule of a definition.

Accepted forms, tried in order:
    1. exact integer on the rule        2
    2. inclusive interval               "1-3"
    3. inclusive lower bound            "≥3", ">=3"
    4. inclusive upper bound            "≤2", "<=2"
    5. exclusive lower bound            ">5"
    6. exclusive upper bound            "<15"
    7. plain integer string             "2"

Author: ClinScore Team
Version: 1.0.0
"""

import operator
import re
from typing import Callable, Tuple

from clinscore.scoring.errors import ConditionParseError, NoInterpretation
from shared.schemas.definitions import InterpretationRule, ScoreDefinition, ScoreRange


_INTEGER = re.compile(r"[+-]?\d+")

# Longer prefixes first so ">=" is never taken for ">"
_BOUNDS: Tuple[Tuple[Tuple[str, ...], Callable[[int, int], bool]], ...] = (
    (("≥", ">="), operator.ge),
    (("≤", "<="), operator.le),
    ((">",), operator.gt),
    (("<",), operator.lt),
)


def _parse_int(text: str, range_str: str, reason: str) -> int:
    text = text.strip()
    if not _INTEGER.fullmatch(text):
        raise ConditionParseError(range_str, reason)
    return int(text)


def matches_score_range(range_spec: ScoreRange, score: int) -> bool:
    """
    Check whether a score matches a range specification.

    Raises:
        ConditionParseError: If a range string has an unrecognized shape
    """
    if isinstance(range_spec, int) and not isinstance(range_spec, bool):
        return score == range_spec

    range_str = str(range_spec).strip()

    if "-" in range_str:
        parts = range_str.split("-")
        if len(parts) == 2:
            low = _parse_int(parts[0], range_str, "Invalid range format")
            high = _parse_int(parts[1], range_str, "Invalid range format")
            return low <= score <= high

    for prefixes, compare in _BOUNDS:
        for prefix in prefixes:
            if range_str.startswith(prefix):
                threshold = _parse_int(
                    range_str[len(prefix):], range_str, "Invalid number in range"
                )
                return compare(score, threshold)

    if _INTEGER.fullmatch(range_str):
        return score == int(range_str)

    raise ConditionParseError(range_str, "Unrecognized range format")


def find_interpretation(definition: ScoreDefinition, score: int) -> InterpretationRule:
    """
    Return the first interpretation rule (in definition order) matching the score.

    Raises:
        NoInterpretation: If no rule covers the score
        ConditionParseError: If a rule checked before a match is malformed
    """
    for rule in definition.interpretation:
        if matches_score_range(rule.score, score):
            return rule
    raise NoInterpretation(score)
