"""
Calculation Errors
==================

Closed set of errors a score calculation can end with. Every error is
terminal for the call: no partial result accompanies it.

    CalculationError
    ├── MissingRequiredField
    ├── InvalidInput
    ├── OutOfRange
    ├── UnknownOption
    ├── ConditionParseError
    ├── NoInterpretation
    └── UnknownFormula

``str(error)`` is the message shown to the end user.

Author: ClinScore Team
Version: 1.0.0
"""

from typing import Any, Dict, Optional


class CalculationError(Exception):
    """Base exception for score calculation errors."""

    kind = "calculation_error"

    def __init__(self, message: str, field: Optional[str] = None):
        super().__init__(message)
        self.message = message
        self.field = field

    def to_dict(self) -> Dict[str, Any]:
        """Serialize for API error payloads."""
        data: Dict[str, Any] = {"error": self.kind, "message": self.message}
        if self.field is not None:
            data["field"] = self.field
        return data


class MissingRequiredField(CalculationError):
    """A required input is absent from the input map."""

    kind = "missing_required_field"

    def __init__(self, field: str):
        super().__init__(f"Missing required field: {field}", field=field)


class InvalidInput(CalculationError):
    """A value is present but unusable for the field (e.g. wrong kind)."""

    kind = "invalid_input"

    def __init__(self, field: str, reason: str):
        super().__init__(f"Invalid input value for field '{field}': {reason}", field=field)
        self.reason = reason


class OutOfRange(CalculationError):
    """A numeric value violates the field's declared bounds."""

    kind = "out_of_range"

    def __init__(
        self,
        field: str,
        value: float,
        min_value: Optional[float],
        max_value: Optional[float],
    ):
        lower = "-inf" if min_value is None else f"{min_value:g}"
        upper = "inf" if max_value is None else f"{max_value:g}"
        super().__init__(
            f"Field '{field}' is out of range: {value:g} (allowed: {lower} - {upper})",
            field=field,
        )
        self.value = value
        self.min_value = min_value
        self.max_value = max_value

    def to_dict(self) -> Dict[str, Any]:
        data = super().to_dict()
        data.update(value=self.value, min=self.min_value, max=self.max_value)
        return data


class UnknownOption(CalculationError):
    """A category value is not among the field's options."""

    kind = "unknown_option"

    def __init__(self, field: str, option: str):
        super().__init__(f"Unknown option '{option}' for field '{field}'", field=field)
        self.option = option


class ConditionParseError(CalculationError):
    """Malformed condition or range expression in a score definition."""

    kind = "condition_parse_error"

    def __init__(self, condition: str, reason: str, field: Optional[str] = None):
        super().__init__(f"Failed to parse condition '{condition}': {reason}", field=field)
        self.condition = condition
        self.reason = reason

    def to_dict(self) -> Dict[str, Any]:
        data = super().to_dict()
        data["condition"] = self.condition
        return data


class NoInterpretation(CalculationError):
    """The computed total matched none of the interpretation rules."""

    kind = "no_interpretation"

    def __init__(self, score: int):
        super().__init__(f"No interpretation found for score {score}")
        self.score = score


class UnknownFormula(CalculationError):
    """The definition names a formula that is not registered."""

    kind = "unknown_formula"

    def __init__(self, formula: str):
        super().__init__(f"Unknown formula: {formula}", field="formula")
        self.formula = formula
