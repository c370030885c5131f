"""
ClinScore Contract Models
=========================

Request/Response models for the score calculation API.

These are the STABLE contracts consumed by form and reporting clients.
Do NOT change field names or types without versioning.

Author: ClinScore Team
Version: 1.0.0
"""

from typing import Dict, List, Literal, Optional, Union

from pydantic import BaseModel, Field, StrictBool, StrictFloat, StrictInt, StrictStr


# Strict members keep JSON true/1/"1" distinct: checkbox, number, selection
InputValueIn = Union[StrictBool, StrictInt, StrictFloat, StrictStr]

Language = Literal["en", "de"]


# =============================================================================
# Calculation Contracts
# =============================================================================


class CalculateRequest(BaseModel):
    """
    Request: Calculate a score.

    Client calls: POST /scores/{score_id}/calculate
    """
    inputs: Dict[str, InputValueIn] = Field(
        default_factory=dict,
        description="Field identifier -> boolean, number or dropdown value"
    )
    language: Optional[Language] = Field(
        None,
        description="Language for labels; defaults to the configured language"
    )


class FieldScoreOut(BaseModel):
    """Points contributed by one field."""
    field: str
    label: str
    points: int


class CalculateResponse(BaseModel):
    """Response: Calculated score with breakdown and interpretation."""
    score_id: str
    score_name: str
    language: Language
    total_score: int
    risk_level: str
    risk_color: str
    risk: str
    recommendation: str
    details: Optional[str] = None
    field_scores: List[FieldScoreOut]


class CalculationErrorResponse(BaseModel):
    """Response: Calculation rejected; message is shown to the user verbatim."""
    error: str = Field(..., description="Error kind, e.g. 'out_of_range'")
    message: str
    field: Optional[str] = None


# =============================================================================
# Library Contracts
# =============================================================================


class ScoreSummary(BaseModel):
    """Short description of a score in the library."""
    id: str
    name: str
    name_de: str = ""
    specialty: str
    guideline_source: str = ""
    formula: Optional[str] = None
    input_count: int


class ScoreListResponse(BaseModel):
    """Response: Scores available in the library."""
    total: int
    scores: List[ScoreSummary]


class HealthResponse(BaseModel):
    """Response: Service health."""
    status: Literal["healthy", "degraded"]
    version: str
    scores_loaded: int
    scores_dir: str
