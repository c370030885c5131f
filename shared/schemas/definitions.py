"""
Score Definition Schemas
========================

Declarative description of a clinical scoring instrument as loaded from
YAML: ordered input fields with point rules, ordered interpretation rules,
and an optional closed-form formula name.

Definitions are immutable once constructed. The calculation engine only
reads them, so one instance can be shared across threads.

Usage:
    from shared.schemas.definitions import ScoreDefinition

    definition = ScoreDefinition.model_validate(yaml.safe_load(text))

Author: ClinScore Team
Version: 1.0.0
"""

from enum import Enum
from typing import Dict, List, Optional, Union

from pydantic import BaseModel, ConfigDict, Field


class Specialty(str, Enum):
    """Medical specialty a score belongs to."""
    CARDIOLOGY = "Cardiology"
    NEPHROLOGY = "Nephrology"
    ANESTHESIOLOGY = "Anesthesiology"
    EMERGENCY = "Emergency"
    INTERNAL_MEDICINE = "InternalMedicine"
    SURGERY = "Surgery"
    OTHER = "Other"

    @classmethod
    def _missing_(cls, value: object) -> "Specialty":
        return cls.OTHER

    @property
    def english(self) -> str:
        return _SPECIALTY_NAMES[self][0]

    @property
    def german(self) -> str:
        return _SPECIALTY_NAMES[self][1]


_SPECIALTY_NAMES = {
    Specialty.CARDIOLOGY: ("Cardiology", "Kardiologie"),
    Specialty.NEPHROLOGY: ("Nephrology", "Nephrologie"),
    Specialty.ANESTHESIOLOGY: ("Anesthesiology", "Anästhesiologie"),
    Specialty.EMERGENCY: ("Emergency Medicine", "Notfallmedizin"),
    Specialty.INTERNAL_MEDICINE: ("Internal Medicine", "Innere Medizin"),
    Specialty.SURGERY: ("Surgery", "Chirurgie"),
    Specialty.OTHER: ("Other", "Sonstiges"),
}


class InputKind(str, Enum):
    """Kind of value an input field accepts."""
    BOOLEAN = "boolean"
    NUMBER = "number"
    DROPDOWN = "dropdown"


class RiskLevel(str, Enum):
    """
    Ordinal risk category of an interpretation.

    Used for display only; interpretation matching never looks at it.
    """
    VERY_LOW = "VeryLow"
    LOW = "Low"
    MODERATE = "Moderate"
    HIGH = "High"
    VERY_HIGH = "VeryHigh"
    CRITICAL = "Critical"
    NONE = "None"

    @property
    def color(self) -> str:
        """Hex color code for UI display."""
        return _RISK_COLORS[self]


_RISK_COLORS = {
    RiskLevel.VERY_LOW: "#4CAF50",
    RiskLevel.LOW: "#8BC34A",
    RiskLevel.MODERATE: "#FFC107",
    RiskLevel.HIGH: "#FF9800",
    RiskLevel.VERY_HIGH: "#F44336",
    RiskLevel.CRITICAL: "#B71C1C",
    RiskLevel.NONE: "#9E9E9E",
}


class _FrozenModel(BaseModel):
    model_config = ConfigDict(frozen=True, populate_by_name=True)


class PointCondition(_FrozenModel):
    """One tier of a conditional point rule, e.g. ``">= 65" -> 1``."""
    condition: str = Field(..., description="Threshold expression, e.g. '>= 30 && < 40'")
    points: int = Field(..., description="Points awarded when the condition holds")
    label: Optional[str] = Field(None, description="Tier label, e.g. 'Age 65-74'")
    label_de: Optional[str] = Field(None, description="Tier label (German)")


# Fixed points, or conditions evaluated top to bottom (first match wins)
PointsValue = Union[int, List[PointCondition]]

# Exact score, or a range expression such as "0-1", "≥2", "<15"
ScoreRange = Union[int, str]


class DropdownOption(_FrozenModel):
    """Selectable option of a dropdown field."""
    value: str = Field(..., description="Internal option identifier")
    label: str = Field(..., description="Display label")
    label_de: str = Field("", description="Display label (German)")
    points: int = Field(0, description="Points awarded for this selection")
    description: Optional[str] = None
    description_de: Optional[str] = None


class InputField(_FrozenModel):
    """A single input of a score definition."""
    field: str = Field(..., description="Unique key into the input map")
    input_type: InputKind = Field(..., alias="type", description="boolean, number or dropdown")
    label: str = Field(..., description="Display label")
    label_de: str = Field("", description="Display label (German)")
    unit: Optional[str] = Field(None, description="Unit of measurement, e.g. 'years'")
    unit_de: Optional[str] = None
    points: PointsValue = Field(0, description="Fixed points or conditional tiers")
    help: Optional[str] = None
    help_de: Optional[str] = None
    min: Optional[float] = Field(None, description="Inclusive lower bound (numbers)")
    max: Optional[float] = Field(None, description="Inclusive upper bound (numbers)")
    options: List[DropdownOption] = Field(default_factory=list)
    required: bool = Field(True, description="Whether the input must be supplied")

    def option(self, value: str) -> Optional[DropdownOption]:
        """Look up a dropdown option by exact (case-sensitive) value."""
        for opt in self.options:
            if opt.value == value:
                return opt
        return None


class InterpretationRule(_FrozenModel):
    """Maps a score value or range to a risk category and recommendation."""
    score: ScoreRange = Field(..., description="Exact score or range expression")
    risk: str
    risk_de: str = ""
    risk_level: RiskLevel = RiskLevel.NONE
    recommendation: str
    recommendation_de: str = ""
    details: Optional[str] = None
    details_de: Optional[str] = None


class ScoreDefinition(_FrozenModel):
    """
    Complete definition of a clinical score.

    Only ``inputs``, ``interpretation`` and ``formula`` take part in the
    calculation; the remaining attributes label results.
    """
    name: str
    name_de: str = ""
    specialty: Specialty = Specialty.OTHER
    specialty_de: str = ""
    version: str = "1.0"
    guideline_source: str = ""
    reference: str = ""
    validation_status: str = "draft"
    description: str = ""
    description_de: str = ""
    inputs: List[InputField] = Field(default_factory=list)
    interpretation: List[InterpretationRule] = Field(default_factory=list)
    formula: Optional[str] = Field(
        None,
        description="Named closed-form formula; replaces point summation when set"
    )
    metadata: Dict[str, str] = Field(default_factory=dict)

    def get_input(self, field: str) -> Optional[InputField]:
        """Get an input field by identifier."""
        for input_field in self.inputs:
            if input_field.field == field:
                return input_field
        return None
