"""
ClinScore Score Routes
======================

REST API endpoints for browsing and calculating clinical scores.

Endpoints:
    GET  /scores                    - List loaded scores
    GET  /scores/{score_id}         - Full score definition
    POST /scores/{score_id}/calculate
    POST /scores/{score_id}/export  - Calculation rendered as JSON or CSV

Calculation errors are returned as HTTP 422 with the error kind, a message
suitable for showing to the user, and the offending field when known.

Author: ClinScore Team
Version: 1.0.0
"""

from typing import Any, Dict, Literal, Optional

from fastapi import APIRouter, Depends, HTTPException, Query
from fastapi.responses import JSONResponse, Response

from clinscore.api.dependencies import require_calculator
from clinscore.config import settings
from clinscore.export import ExportRecord, default_filename, export_record
from clinscore.scoring.engine import ScoreCalculator
from clinscore.scoring.errors import CalculationError
from clinscore.scoring.loader import UnknownScore
from shared.contracts.scores import (
    CalculateRequest,
    CalculateResponse,
    CalculationErrorResponse,
    ScoreListResponse,
    ScoreSummary,
)
from shared.schemas.definitions import ScoreDefinition, Specialty


router = APIRouter(prefix="/scores", tags=["Scores"])

MEDIA_TYPES = {
    "json": "application/json",
    "csv": "text/csv; charset=utf-8",
}


# =============================================================================
# Helpers
# =============================================================================

def _summary(score_id: str, definition: ScoreDefinition) -> ScoreSummary:
    return ScoreSummary(
        id=score_id,
        name=definition.name,
        name_de=definition.name_de,
        specialty=definition.specialty.value,
        guideline_source=definition.guideline_source,
        formula=definition.formula,
        input_count=len(definition.inputs),
    )


def _definition_or_404(calculator: ScoreCalculator, score_id: str) -> ScoreDefinition:
    try:
        return calculator.get_definition(score_id)
    except UnknownScore as e:
        raise HTTPException(status_code=404, detail=str(e))


def _specialty_or_422(specialty: str) -> Specialty:
    # Specialty(...) maps unknown names to OTHER; a filter must match exactly
    known = {member.value: member for member in Specialty}
    if specialty not in known:
        raise HTTPException(
            status_code=422,
            detail=f"Unknown specialty: {specialty}. Expected one of: {', '.join(known)}"
        )
    return known[specialty]


def _localized_name(definition: ScoreDefinition, language: str) -> str:
    if language == "de" and definition.name_de:
        return definition.name_de
    return definition.name


def _error_response(error: CalculationError) -> JSONResponse:
    return JSONResponse(status_code=422, content=error.to_dict())


# =============================================================================
# Library Endpoints
# =============================================================================

@router.get(
    "",
    response_model=ScoreListResponse,
    summary="List Scores",
    description="List loaded score definitions, optionally filtered by specialty."
)
async def list_scores(
    specialty: Optional[str] = Query(None, description="Specialty, e.g. 'Cardiology'"),
    calculator: ScoreCalculator = Depends(require_calculator)
) -> ScoreListResponse:
    library = calculator.library
    wanted = _specialty_or_422(specialty) if specialty else None

    summaries = [
        _summary(score_id, library.get_score(score_id))
        for score_id in library.score_ids()
        if wanted is None or library.get_score(score_id).specialty == wanted
    ]
    return ScoreListResponse(total=len(summaries), scores=summaries)


@router.get(
    "/{score_id}",
    summary="Get Score Definition",
    description="Return the full definition of one score."
)
async def get_score(
    score_id: str,
    calculator: ScoreCalculator = Depends(require_calculator)
) -> Dict[str, Any]:
    definition = _definition_or_404(calculator, score_id)
    return {"id": score_id, **definition.model_dump(mode="json", by_alias=True)}


# =============================================================================
# Calculation Endpoints
# =============================================================================

@router.post(
    "/{score_id}/calculate",
    response_model=CalculateResponse,
    responses={422: {"model": CalculationErrorResponse}},
    summary="Calculate Score",
    description="Calculate a score from field inputs."
)
async def calculate_score(
    score_id: str,
    request: CalculateRequest,
    calculator: ScoreCalculator = Depends(require_calculator)
):
    """
    Calculate a score.

    - **inputs**: field identifier to boolean, number or dropdown value
    - **language**: `en` or `de` for labels and interpretation texts
    """
    definition = _definition_or_404(calculator, score_id)
    language = request.language or settings.default_language

    try:
        result = calculator.calculate(score_id, request.inputs, definition=definition)
    except CalculationError as e:
        return _error_response(e)

    return CalculateResponse(
        score_id=score_id,
        score_name=_localized_name(definition, language),
        language=language,
        **result.to_dict(language),
    )


@router.post(
    "/{score_id}/export",
    responses={422: {"model": CalculationErrorResponse}},
    summary="Export Calculation",
    description="Calculate a score and return the result as a JSON or CSV document."
)
async def export_score(
    score_id: str,
    request: CalculateRequest,
    format: Literal["json", "csv"] = Query("json", description="Export format"),
    calculator: ScoreCalculator = Depends(require_calculator)
) -> Response:
    definition = _definition_or_404(calculator, score_id)
    language = request.language or settings.default_language

    try:
        result = calculator.calculate(score_id, request.inputs, definition=definition)
    except CalculationError as e:
        return _error_response(e)

    record = ExportRecord.from_result(
        result, _localized_name(definition, language), language=language
    )
    filename = default_filename(record.score_name, format)
    return Response(
        content=export_record(record, format),
        media_type=MEDIA_TYPES[format],
        headers={"Content-Disposition": f'attachment; filename="{filename}"'},
    )
