"""
ClinScore Shared Schemas Package
================================

Score definition schemas shared by the loader, the calculation engine and
the API.

This package provides:
    - ScoreDefinition: Declarative description of a clinical score
    - InputField, PointCondition, DropdownOption: Input specifications
    - InterpretationRule: Score range to risk category mapping
    - Enumerations: input kinds, risk levels, specialties

Author: ClinScore Team
Version: 1.0.0
"""

from shared.schemas.definitions import (
    DropdownOption,
    InputField,
    InputKind,
    InterpretationRule,
    PointCondition,
    PointsValue,
    RiskLevel,
    ScoreDefinition,
    ScoreRange,
    Specialty,
)

__all__ = [
    "ScoreDefinition",
    "InputField",
    "InputKind",
    "PointCondition",
    "PointsValue",
    "DropdownOption",
    "InterpretationRule",
    "ScoreRange",
    "RiskLevel",
    "Specialty",
]
