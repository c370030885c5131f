"""
ClinScore Scoring Package
=========================

Score calculation engine.

This package provides:
    - conditions: threshold expression evaluator
    - ranges: interpretation range matcher
    - points: per-field point evaluator
    - formulas: closed-form clinical equations
    - engine: calculation orchestration
    - loader: YAML definition loading

Author: ClinScore Team
Version: 1.0.0
"""

from clinscore.scoring.engine import ScoreCalculator, calculate
from clinscore.scoring.errors import (
    CalculationError,
    ConditionParseError,
    InvalidInput,
    MissingRequiredField,
    NoInterpretation,
    OutOfRange,
    UnknownFormula,
    UnknownOption,
)
from clinscore.scoring.loader import ScoreLibrary, UnknownScore, load_all_scores
from clinscore.scoring.results import CalculationResult, FieldScore

__all__ = [
    "calculate",
    "ScoreCalculator",
    "CalculationResult",
    "FieldScore",
    "ScoreLibrary",
    "load_all_scores",
    "UnknownScore",
    "CalculationError",
    "MissingRequiredField",
    "InvalidInput",
    "OutOfRange",
    "UnknownOption",
    "ConditionParseError",
    "NoInterpretation",
    "UnknownFormula",
]
