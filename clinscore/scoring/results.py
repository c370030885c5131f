"""
Calculation Results
===================

Immutable result of one score calculation: the total, an ordered per-field
breakdown, and the matched interpretation flattened for display.

Author: ClinScore Team
Version: 1.0.0
"""

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Dict, Mapping, Optional, Tuple

from shared.schemas.definitions import InterpretationRule, RiskLevel


@dataclass(frozen=True)
class FieldScore:
    """Points contributed by one field (or one formula breakdown entry)."""
    field: str
    label: str
    points: int
    label_de: str = ""

    def label_for(self, language: str = "en") -> str:
        if language == "de" and self.label_de:
            return self.label_de
        return self.label


@dataclass(frozen=True)
class CalculationResult:
    """
    Complete result of a score calculation.

    ``field_scores`` preserves the definition's field order. For formula
    scores the breakdown ends with a ``result`` entry carrying the value.
    """
    total_score: int
    field_scores: Tuple[FieldScore, ...]
    interpretation: InterpretationRule
    risk_level: RiskLevel
    risk: str
    recommendation: str
    details: Optional[str] = None
    risk_de: str = ""
    recommendation_de: str = ""
    details_de: Optional[str] = None
    _points: Mapping[str, int] = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        points: Dict[str, int] = {}
        for entry in self.field_scores:
            points.setdefault(entry.field, entry.points)
        object.__setattr__(self, "_points", MappingProxyType(points))

    @classmethod
    def build(
        cls,
        total_score: int,
        field_scores: Tuple[FieldScore, ...],
        interpretation: InterpretationRule,
    ) -> "CalculationResult":
        """Assemble a result from a total, its breakdown and the matched rule."""
        return cls(
            total_score=total_score,
            field_scores=tuple(field_scores),
            interpretation=interpretation,
            risk_level=interpretation.risk_level,
            risk=interpretation.risk,
            recommendation=interpretation.recommendation,
            details=interpretation.details,
            risk_de=interpretation.risk_de,
            recommendation_de=interpretation.recommendation_de,
            details_de=interpretation.details_de,
        )

    @property
    def field_points(self) -> Mapping[str, int]:
        """Read-only mapping of field identifier to points."""
        return self._points

    def points_for(self, field_id: str) -> Optional[int]:
        """Get points for a field by identifier."""
        return self._points.get(field_id)

    def localized(self, language: str = "en") -> Dict[str, Optional[str]]:
        """Risk, recommendation and details in the requested language."""
        if language == "de":
            return {
                "risk": self.risk_de or self.risk,
                "recommendation": self.recommendation_de or self.recommendation,
                "details": self.details_de or self.details,
            }
        return {
            "risk": self.risk,
            "recommendation": self.recommendation,
            "details": self.details,
        }

    def to_dict(self, language: str = "en") -> Dict[str, Any]:
        """Serialize for API responses."""
        data: Dict[str, Any] = {
            "total_score": self.total_score,
            "risk_level": self.risk_level.value,
            "risk_color": self.risk_level.color,
            "field_scores": [
                {
                    "field": entry.field,
                    "label": entry.label_for(language),
                    "points": entry.points,
                }
                for entry in self.field_scores
            ],
        }
        data.update(self.localized(language))
        return data
