"""
Test Fixtures for Score Definitions
===================================

Provides reusable definition data for unit and integration tests:
    - build_definition(): definition from plain dicts, as if loaded from YAML
    - VALID_SCORE_YAML: a minimal loadable definition
    - Broken YAML documents for loader failure paths
    - Expected CHA2DS2-VA outcomes for the bundled definition

Author: ClinScore Team
Version: 1.0.0
"""

from typing import Any, Dict, List, Optional

from shared.schemas.definitions import ScoreDefinition


def build_definition(
    inputs: List[Dict[str, Any]],
    interpretation: Optional[List[Dict[str, Any]]] = None,
    **extra: Any,
) -> ScoreDefinition:
    """Build a definition from plain dicts, as if loaded from YAML."""
    data = {
        "name": "Test Score",
        "inputs": inputs,
        "interpretation": interpretation or [
            {"score": "≥0", "risk": "Any", "recommendation": "None"},
        ],
    }
    data.update(extra)
    return ScoreDefinition.model_validate(data)


# =============================================================================
# YAML Documents
# =============================================================================

VALID_SCORE_YAML = """
name: "Test Score"
name_de: "Testscore"
specialty: Cardiology
inputs:
  - field: age
    type: number
    label: "Age"
    min: 0
    max: 120
    points:
      - condition: ">= 65"
        points: 1
  - field: smoker
    type: boolean
    label: "Smoker"
    label_de: "Raucher"
    points: 2
interpretation:
  - score: "0-1"
    risk: "Low"
    recommendation: "Observe"
  - score: "≥2"
    risk: "High"
    recommendation: "Treat"
"""

NEPHROLOGY_SCORE_YAML = """
name: "Renal Test"
specialty: Nephrology
inputs:
  - field: dialysis
    type: boolean
    label: "Dialysis"
    points: 1
interpretation:
  - score: 0
    risk: "Low"
    recommendation: "Observe"
  - score: 1
    risk: "High"
    recommendation: "Refer"
"""

INVALID_YAML = """
name: "Broken
inputs: [
"""

EMPTY_NAME_YAML = """
name: "   "
inputs:
  - field: a
    type: boolean
    label: "A"
interpretation:
  - score: 0
    risk: "Low"
    recommendation: "-"
"""

NO_INPUTS_YAML = """
name: "No Inputs"
inputs: []
interpretation:
  - score: 0
    risk: "Low"
    recommendation: "-"
"""

NO_INTERPRETATION_YAML = """
name: "No Interpretation"
inputs:
  - field: a
    type: boolean
    label: "A"
interpretation: []
"""

DUPLICATE_FIELD_YAML = """
name: "Duplicate"
inputs:
  - field: a
    type: boolean
    label: "A"
  - field: a
    type: boolean
    label: "A again"
interpretation:
  - score: 0
    risk: "Low"
    recommendation: "-"
"""

EMPTY_LABEL_YAML = """
name: "Empty Label"
inputs:
  - field: a
    type: boolean
    label: ""
interpretation:
  - score: 0
    risk: "Low"
    recommendation: "-"
"""

UNKNOWN_INPUT_TYPE_YAML = """
name: "Unknown Type"
inputs:
  - field: a
    type: slider
    label: "A"
interpretation:
  - score: 0
    risk: "Low"
    recommendation: "-"
"""


# =============================================================================
# Expected Outcomes (bundled definitions)
# =============================================================================

CHA2DS2_VA_NO_RISK_FACTORS = {
    "age": 50,
    "heart_failure": False,
    "hypertension": False,
    "diabetes": False,
    "stroke_tia": False,
    "vascular_disease": False,
}

# (age, expected age points)
CHA2DS2_VA_AGE_POINTS = [
    (64, 0),
    (65, 1),
    (70, 1),
    (74, 1),
    (75, 2),
    (80, 2),
]
