"""
Point Evaluator
===============

Turns one input value into the integer point contribution of its field.
Dispatch is by ``InputKind``; every kind has exactly one evaluator.

    boolean   absent/False -> 0, True -> fixed points
    number    bounds-checked, fixed points or first matching condition
    dropdown  exact option lookup, option points

Author: ClinScore Team
Version: 1.0.0
"""

import logging
import math
from typing import Callable, Dict, List, Optional

from clinscore.scoring.conditions import evaluate_condition
from clinscore.scoring.errors import (
    ConditionParseError,
    InvalidInput,
    MissingRequiredField,
    OutOfRange,
    UnknownOption,
)
from clinscore.scoring.values import InputValue, as_number, is_boolean, is_category, kind_name
from shared.schemas.definitions import InputField, InputKind, PointCondition


logger = logging.getLogger(__name__)


def evaluate_conditions(conditions: List[PointCondition], value: float) -> int:
    """
    Evaluate conditional tiers top to bottom and return the first match.

    Tiers are not commutative: ``[">= 75" -> 2, ">= 65" -> 1]`` gives 80 two
    points, while the reverse order would shadow the upper tier.
    Returns 0 when no tier matches.
    """
    for tier in conditions:
        if evaluate_condition(tier.condition, value):
            return tier.points
    return 0


def boolean_points(input_field: InputField, value: Optional[InputValue]) -> int:
    if value is None:
        return 0
    if not is_boolean(value):
        raise InvalidInput(
            input_field.field, f"Expected boolean value, got {kind_name(value)}"
        )
    if not value:
        return 0
    if isinstance(input_field.points, int):
        return input_field.points
    # Conditional tiers carry no meaning for a checkbox
    logger.debug(
        f"Conditional points on boolean field '{input_field.field}' yield 0"
    )
    return 0


def number_points(input_field: InputField, value: Optional[InputValue]) -> int:
    if value is None:
        if input_field.required:
            raise MissingRequiredField(input_field.field)
        return 0

    number = as_number(value)
    if number is None:
        raise InvalidInput(
            input_field.field, f"Expected numeric value, got {kind_name(value)}"
        )
    if not math.isfinite(number):
        raise InvalidInput(input_field.field, "Expected a finite number")

    if input_field.min is not None and number < input_field.min:
        raise OutOfRange(input_field.field, number, input_field.min, input_field.max)
    if input_field.max is not None and number > input_field.max:
        raise OutOfRange(input_field.field, number, input_field.min, input_field.max)

    if isinstance(input_field.points, int):
        return input_field.points
    try:
        return evaluate_conditions(input_field.points, number)
    except ConditionParseError as e:
        raise ConditionParseError(e.condition, e.reason, field=input_field.field) from e


def dropdown_points(input_field: InputField, value: Optional[InputValue]) -> int:
    if value is None:
        if input_field.required:
            raise MissingRequiredField(input_field.field)
        return 0

    if not is_category(value):
        raise InvalidInput(
            input_field.field, f"Expected dropdown selection, got {kind_name(value)}"
        )

    option = input_field.option(value)
    if option is None:
        raise UnknownOption(input_field.field, value)
    return option.points


_EVALUATORS: Dict[InputKind, Callable[[InputField, Optional[InputValue]], int]] = {
    InputKind.BOOLEAN: boolean_points,
    InputKind.NUMBER: number_points,
    InputKind.DROPDOWN: dropdown_points,
}


def field_points(input_field: InputField, value: Optional[InputValue]) -> int:
    """
    Calculate the points one field contributes.

    Args:
        input_field: Field specification from the score definition
        value: Supplied value, or None if the field was not answered

    Raises:
        CalculationError: Wrong kind, out of bounds, unknown option,
            missing required value or malformed condition
    """
    return _EVALUATORS[input_field.input_type](input_field, value)
