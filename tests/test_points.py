"""
Point Evaluator Tests
=====================

Unit tests for per-field point rules.

Author: ClinScore Team
Version: 1.0.0
"""

import pytest

from clinscore.scoring.errors import (
    ConditionParseError,
    InvalidInput,
    MissingRequiredField,
    OutOfRange,
    UnknownOption,
)
from clinscore.scoring.points import evaluate_conditions, field_points
from shared.schemas.definitions import InputField, PointCondition


def make_field(**kwargs) -> InputField:
    data = {"field": "f", "label": "F"}
    data.update(kwargs)
    return InputField.model_validate(data)


class TestBooleanPoints:
    """Checkbox fields."""

    @pytest.fixture
    def field(self):
        return make_field(type="boolean", points=2)

    def test_true_awards_points(self, field):
        assert field_points(field, True) == 2

    def test_false_and_absent_are_zero(self, field):
        assert field_points(field, False) == 0
        assert field_points(field, None) == 0

    def test_conditional_rule_on_true_is_zero(self):
        field = make_field(type="boolean", points=[{"condition": ">= 1", "points": 5}])
        assert field_points(field, True) == 0

    @pytest.mark.parametrize("value", [1, 0, "yes", 1.0])
    def test_non_boolean_rejected(self, field, value):
        with pytest.raises(InvalidInput) as exc_info:
            field_points(field, value)
        assert exc_info.value.field == "f"


class TestNumberPoints:
    """Numeric fields with bounds and tiers."""

    @pytest.fixture
    def age(self):
        return make_field(
            field="age",
            type="number",
            min=0,
            max=120,
            points=[
                {"condition": ">= 75", "points": 2},
                {"condition": ">= 65", "points": 1},
            ],
        )

    @pytest.mark.parametrize("value,expected", [(80, 2), (75, 2), (70, 1), (65, 1), (60, 0)])
    def test_first_matching_tier(self, age, value, expected):
        assert field_points(age, value) == expected

    def test_bounds_are_inclusive(self, age):
        assert field_points(age, 0) == 0
        assert field_points(age, 120) == 2

    @pytest.mark.parametrize("value", [-1, 120.5, 121])
    def test_out_of_range(self, age, value):
        with pytest.raises(OutOfRange) as exc_info:
            field_points(age, value)

        error = exc_info.value
        assert error.field == "age"
        assert error.min_value == 0
        assert error.max_value == 120
        assert error.to_dict()["error"] == "out_of_range"

    def test_missing_required(self, age):
        with pytest.raises(MissingRequiredField) as exc_info:
            field_points(age, None)
        assert str(exc_info.value) == "Missing required field: age"

    def test_missing_optional_is_zero(self):
        field = make_field(type="number", required=False, points=3)
        assert field_points(field, None) == 0

    def test_fixed_points(self):
        field = make_field(type="number", points=3)
        assert field_points(field, 12.5) == 3

    @pytest.mark.parametrize("value", [True, "72"])
    def test_non_number_rejected(self, age, value):
        with pytest.raises(InvalidInput):
            field_points(age, value)

    def test_no_matching_tier_is_zero(self):
        field = make_field(type="number", points=[{"condition": "> 35", "points": 1}])
        assert field_points(field, 20) == 0

    @pytest.mark.parametrize("value", [float("nan"), float("inf"), float("-inf")])
    def test_non_finite_rejected(self, age, value):
        with pytest.raises(InvalidInput) as exc_info:
            field_points(age, value)

        assert exc_info.value.field == "age"
        assert "finite" in str(exc_info.value)

    def test_nan_rejected_without_bounds(self):
        field = make_field(type="number", points=[{"condition": "< 5", "points": 1}])
        with pytest.raises(InvalidInput):
            field_points(field, float("nan"))

    @pytest.mark.parametrize("value", [10 ** 400, -(10 ** 400)])
    def test_integer_beyond_float_range(self, age, value):
        with pytest.raises(InvalidInput) as exc_info:
            field_points(age, value)
        assert exc_info.value.field == "age"

    def test_large_integer_within_float_range(self):
        field = make_field(type="number", points=[{"condition": "> 1000", "points": 1}])
        assert field_points(field, 10 ** 20) == 1

    def test_malformed_tier(self):
        field = make_field(type="number", points=[{"condition": "around 5", "points": 1}])
        with pytest.raises(ConditionParseError) as exc_info:
            field_points(field, 5)

        error = exc_info.value
        assert error.field == "f"
        assert error.condition == "around 5"
        assert error.to_dict()["field"] == "f"


class TestDropdownPoints:
    """Selection fields."""

    @pytest.fixture
    def asa(self):
        return make_field(
            field="asa",
            type="dropdown",
            options=[
                {"value": "I", "label": "ASA I", "points": 1},
                {"value": "II", "label": "ASA II", "points": 2},
            ],
        )

    def test_selected_option_points(self, asa):
        assert field_points(asa, "II") == 2

    def test_option_match_is_case_sensitive(self, asa):
        with pytest.raises(UnknownOption) as exc_info:
            field_points(asa, "ii")
        assert str(exc_info.value) == "Unknown option 'ii' for field 'asa'"

    def test_missing_required(self, asa):
        with pytest.raises(MissingRequiredField):
            field_points(asa, None)

    def test_non_string_rejected(self, asa):
        with pytest.raises(InvalidInput):
            field_points(asa, 2)


class TestEvaluateConditions:
    """Ordering of conditional tiers."""

    def test_order_matters(self):
        upper_first = [PointCondition(condition=">= 75", points=2), PointCondition(condition=">= 65", points=1)]
        lower_first = list(reversed(upper_first))

        assert evaluate_conditions(upper_first, 80) == 2
        assert evaluate_conditions(lower_first, 80) == 1

    def test_empty_tiers(self):
        assert evaluate_conditions([], 50) == 0
