"""
ClinScore Calculation Engine
============================

Orchestrates a score calculation:

    1. Validate presence of required inputs (definition order)
    2. Dispatch to the formula engine, or sum per-field points
    3. Match the total against the interpretation rules
    4. Assemble a fresh CalculationResult

The engine is stateless. A call either returns a result or raises a
``CalculationError``; there are no partial results.

Usage:
    from clinscore.scoring.engine import calculate

    result = calculate(definition, {"age": 72, "hypertension": True})
    print(result.total_score, result.risk)

Author: ClinScore Team
Version: 1.0.0
"""

import logging
from typing import List, Optional

from clinscore.scoring.errors import CalculationError, MissingRequiredField
from clinscore.scoring.formulas import calculate_formula
from clinscore.scoring.points import field_points
from clinscore.scoring.ranges import find_interpretation
from clinscore.scoring.results import CalculationResult, FieldScore
from clinscore.scoring.values import Inputs
from shared.schemas.definitions import InputKind, ScoreDefinition


logger = logging.getLogger(__name__)


def validate_required(definition: ScoreDefinition, inputs: Inputs) -> None:
    """
    Check that every required field has an entry in the input map.

    Boolean fields are exempt: an unchecked box and an absent box are the
    same answer.

    Raises:
        MissingRequiredField: For the first missing field in definition order
    """
    for input_field in definition.inputs:
        if input_field.input_type is InputKind.BOOLEAN:
            continue
        if input_field.required and input_field.field not in inputs:
            raise MissingRequiredField(input_field.field)


def sum_points(definition: ScoreDefinition, inputs: Inputs) -> List[FieldScore]:
    """Compute the breakdown for every field, zero contributions included."""
    return [
        FieldScore(
            field=input_field.field,
            label=input_field.label,
            points=field_points(input_field, inputs.get(input_field.field)),
            label_de=input_field.label_de,
        )
        for input_field in definition.inputs
    ]


def calculate(definition: ScoreDefinition, inputs: Inputs) -> CalculationResult:
    """
    Calculate a score from user inputs.

    Args:
        definition: Immutable score definition
        inputs: Field identifier -> supplied value

    Returns:
        CalculationResult with total, breakdown and interpretation

    Raises:
        CalculationError: On the first validation, parse or matching failure
    """
    validate_required(definition, inputs)

    if definition.formula is not None:
        formula_result = calculate_formula(definition.formula, inputs)
        total = formula_result.value
        field_scores = formula_result.field_scores
    else:
        field_scores = sum_points(definition, inputs)
        total = sum(entry.points for entry in field_scores)

    interpretation = find_interpretation(definition, total)
    return CalculationResult.build(total, tuple(field_scores), interpretation)


class ScoreCalculator:
    """
    Calculates scores from a library of loaded definitions by score id.

    Example:
        library = load_all_scores("scores/")
        calculator = ScoreCalculator(library)
        result = calculator.calculate("cha2ds2_va", {"age": 72})
    """

    def __init__(self, library):
        """
        Initialize the calculator.

        Args:
            library: ScoreLibrary providing ``get_score(score_id)``
        """
        self.library = library

    def get_definition(self, score_id: str) -> ScoreDefinition:
        """
        Raises:
            UnknownScore: If the id is not in the library
        """
        return self.library.require_score(score_id)

    def calculate(
        self,
        score_id: str,
        inputs: Inputs,
        definition: Optional[ScoreDefinition] = None,
    ) -> CalculationResult:
        """Calculate a library score, logging the outcome."""
        definition = definition or self.get_definition(score_id)
        try:
            result = calculate(definition, inputs)
        except CalculationError as e:
            logger.info(
                f"Calculation of '{score_id}' failed ({e.kind}): {e.message}"
            )
            raise

        logger.debug(
            f"Calculated '{score_id}': total={result.total_score} "
            f"risk_level={result.risk_level.value}"
        )
        return result
