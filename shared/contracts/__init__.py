"""
ClinScore Shared Contracts
==========================

Canonical request/response models of the score calculation API.

Version: 1.0.0
"""

from shared.contracts.scores import (
    CalculateRequest,
    CalculateResponse,
    CalculationErrorResponse,
    FieldScoreOut,
    HealthResponse,
    ScoreListResponse,
    ScoreSummary,
)

__all__ = [
    "CalculateRequest",
    "CalculateResponse",
    "CalculationErrorResponse",
    "FieldScoreOut",
    "HealthResponse",
    "ScoreListResponse",
    "ScoreSummary",
]
