"""
Formula Engine
==============

Closed-form clinical equations for scores whose total is derived directly
from raw inputs instead of summed points.

Registered formulas:
    ckd_epi_2021  CKD-EPI 2021 race-free eGFR (mL/min/1.73m²)
                  Inker LA, et al. NEJM 2021;385(19):1737-1749
    kfre_4var     Kidney Failure Risk Equation, 4 variables, 2-year risk (%)
                  Tangri N, et al. JAMA 2011;305(15):1553-9

Each formula returns an integer value for interpretation matching and a
breakdown whose informational entries carry 0 points; the final
``result`` entry carries the computed value.

Author: ClinScore Team
Version: 1.0.0
"""

import math
from dataclasses import dataclass
from enum import Enum
from typing import Callable, Dict, List

from clinscore.scoring.errors import (
    InvalidInput,
    MissingRequiredField,
    UnknownFormula,
    UnknownOption,
)
from clinscore.scoring.results import FieldScore
from clinscore.scoring.values import Inputs, as_number, is_category, kind_name


# =============================================================================
# Constants
# =============================================================================

CREATININE_UMOL_PER_MG_DL = 88.4
ACR_MG_G_PER_MG_MMOL = 8.84

# CKD-EPI 2021: sex -> (kappa, alpha)
CKD_EPI_CONSTANTS = {
    "female": (0.7, -0.241),
    "male": (0.9, -0.302),
}
CKD_EPI_FEMALE_FACTOR = 1.012

KFRE_BASELINE_SURVIVAL = 0.9832

SEXES = ("female", "male")


class FormulaName(str, Enum):
    """Registered formula identifiers, as written in score definitions."""
    CKD_EPI_2021 = "ckd_epi_2021"
    KFRE_4VAR = "kfre_4var"


@dataclass(frozen=True)
class FormulaResult:
    """Value computed by a formula plus its breakdown."""
    value: int
    field_scores: List[FieldScore]


# =============================================================================
# Helpers
# =============================================================================


def round_half_away(value: float) -> int:
    """Round to the nearest integer, halves away from zero."""
    return int(math.copysign(math.floor(abs(value) + 0.5), value))


def _require_number(inputs: Inputs, field: str) -> float:
    if field not in inputs:
        raise MissingRequiredField(field)
    number = as_number(inputs[field])
    if number is None:
        raise InvalidInput(field, f"Expected numeric value, got {kind_name(inputs[field])}")
    if not math.isfinite(number):
        raise InvalidInput(field, "Expected a finite number")
    return number


def _require_sex(inputs: Inputs, field: str = "sex") -> str:
    if field not in inputs:
        raise MissingRequiredField(field)
    value = inputs[field]
    if not is_category(value):
        raise InvalidInput(field, f"Expected dropdown selection, got {kind_name(value)}")
    if value not in SEXES:
        raise UnknownOption(field, value)
    return value


def _sex_labels(sex: str) -> tuple:
    if sex == "female":
        return "Female", "Weiblich"
    return "Male", "Männlich"


# =============================================================================
# Formulas
# =============================================================================


def egfr_ckd_epi_2021(inputs: Inputs) -> FormulaResult:
    """
    CKD-EPI 2021 race-free eGFR.

        eGFR = 142 × min(Scr/κ, 1)^α × max(Scr/κ, 1)^-1.200
                   × 0.9938^age × (1.012 if female)

    Inputs: ``age`` (years), ``sex`` ("male"/"female"), ``creatinine``
    (µmol/L, converted to mg/dL).
    """
    age = _require_number(inputs, "age")
    sex = _require_sex(inputs)
    creatinine_umol = _require_number(inputs, "creatinine")
    if creatinine_umol <= 0:
        raise InvalidInput("creatinine", "Creatinine must be greater than 0")

    scr = creatinine_umol / CREATININE_UMOL_PER_MG_DL
    kappa, alpha = CKD_EPI_CONSTANTS[sex]
    ratio = scr / kappa

    try:
        egfr = (
            142.0
            * min(ratio, 1.0) ** alpha
            * max(ratio, 1.0) ** -1.200
            * 0.9938 ** age
            * (CKD_EPI_FEMALE_FACTOR if sex == "female" else 1.0)
        )
    except OverflowError:
        egfr = math.inf
    # Only a far negative age can push the product out of float range
    if not math.isfinite(egfr):
        raise InvalidInput("age", f"Age {age:g} gives an eGFR outside numeric range")
    egfr_rounded = round_half_away(egfr)

    sex_en, sex_de = _sex_labels(sex)
    field_scores = [
        FieldScore("age", f"Age: {age:.0f} years", 0, f"Alter: {age:.0f} Jahre"),
        FieldScore("sex", f"Sex: {sex_en}", 0, f"Geschlecht: {sex_de}"),
        FieldScore(
            "creatinine",
            f"Creatinine: {creatinine_umol:.0f} μmol/L ({scr:.2f} mg/dL)",
            0,
            f"Kreatinin: {creatinine_umol:.0f} μmol/L ({scr:.2f} mg/dL)",
        ),
        FieldScore(
            "result",
            f"eGFR: {egfr_rounded} mL/min/1.73m²",
            egfr_rounded,
            f"eGFR: {egfr_rounded} mL/min/1,73m²",
        ),
    ]
    return FormulaResult(value=egfr_rounded, field_scores=field_scores)


def kfre_4var(inputs: Inputs) -> FormulaResult:
    """
    4-variable Kidney Failure Risk Equation, 2-year risk.

        sum  = -0.2201 × (age/10 - 7.036) + 0.2467 × (male - 0.5642)
               - 0.5567 × (eGFR/5 - 7.222) + 0.4510 × (ln(ACR) - 5.137)
        risk = 1 - 0.9832^exp(sum)

    Inputs: ``age``, ``sex``, ``egfr`` (mL/min/1.73m²), ``acr`` (mg/mmol,
    converted to mg/g). Result is a percentage clamped to [0, 100].
    """
    age = _require_number(inputs, "age")
    sex = _require_sex(inputs)
    egfr = _require_number(inputs, "egfr")
    acr_mg_mmol = _require_number(inputs, "acr")

    # ln(ACR) is undefined otherwise
    if acr_mg_mmol <= 0:
        raise InvalidInput("acr", "ACR must be greater than 0")

    male = 1.0 if sex == "male" else 0.0
    acr_mg_g = acr_mg_mmol * ACR_MG_G_PER_MG_MMOL

    index = (
        -0.2201 * (age / 10.0 - 7.036)
        + 0.2467 * (male - 0.5642)
        - 0.5567 * (egfr / 5.0 - 7.222)
        + 0.4510 * (math.log(acr_mg_g) - 5.137)
    )
    try:
        risk = 1.0 - KFRE_BASELINE_SURVIVAL ** math.exp(index)
    except OverflowError:
        risk = 1.0
    risk_percent = min(100, max(0, round_half_away(risk * 100.0)))

    sex_en, sex_de = _sex_labels(sex)
    field_scores = [
        FieldScore("age", f"Age: {age:.0f} years", 0, f"Alter: {age:.0f} Jahre"),
        FieldScore("sex", f"Sex: {sex_en}", 0, f"Geschlecht: {sex_de}"),
        FieldScore("egfr", f"eGFR: {egfr:.0f} mL/min/1.73m²", 0, f"eGFR: {egfr:.0f} mL/min/1,73m²"),
        FieldScore(
            "acr",
            f"ACR: {acr_mg_mmol:.1f} mg/mmol ({acr_mg_g:.0f} mg/g)",
            0,
            f"ACR: {acr_mg_mmol:.1f} mg/mmol ({acr_mg_g:.0f} mg/g)",
        ),
        FieldScore(
            "result",
            f"2-year risk: {risk_percent}%",
            risk_percent,
            f"2-Jahres-Risiko: {risk_percent}%",
        ),
    ]
    return FormulaResult(value=risk_percent, field_scores=field_scores)


FORMULAS: Dict[FormulaName, Callable[[Inputs], FormulaResult]] = {
    FormulaName.CKD_EPI_2021: egfr_ckd_epi_2021,
    FormulaName.KFRE_4VAR: kfre_4var,
}


def calculate_formula(formula: str, inputs: Inputs) -> FormulaResult:
    """
    Dispatch to a registered formula by name.

    Raises:
        UnknownFormula: If the name is not registered
        CalculationError: From the formula's own input validation
    """
    try:
        name = FormulaName(formula)
    except ValueError:
        raise UnknownFormula(formula) from None
    return FORMULAS[name](inputs)
