"""
pytest configuration and fixtures.

Author: ClinScore Team
Version: 1.0.0
"""

from pathlib import Path

import pytest

from clinscore.api.dependencies import ServiceContainer
from clinscore.scoring.loader import load_all_scores
from tests.fixtures import build_definition


SCORES_DIR = Path(__file__).resolve().parent.parent / "scores"


@pytest.fixture(scope="session")
def scores_dir() -> Path:
    """Directory of the bundled score definitions."""
    return SCORES_DIR


@pytest.fixture(scope="session")
def library(scores_dir):
    """Score library loaded from the bundled definitions."""
    return load_all_scores(scores_dir)


@pytest.fixture
def cha2ds2_va(library):
    return library.get_score("cha2ds2_va")


@pytest.fixture
def cha2ds2_va_inputs():
    """72-year-old with heart failure and hypertension (3 points)."""
    return {
        "age": 72,
        "heart_failure": True,
        "hypertension": True,
        "diabetes": False,
        "stroke_tia": False,
        "vascular_disease": False,
    }


@pytest.fixture
def age_tiers_definition():
    """Single number field with ordered tiers and a three-way interpretation."""
    return build_definition(
        inputs=[
            {
                "field": "age",
                "type": "number",
                "label": "Age",
                "label_de": "Alter",
                "min": 0,
                "max": 120,
                "points": [
                    {"condition": ">= 75", "points": 2},
                    {"condition": ">= 65", "points": 1},
                ],
            },
        ],
        interpretation=[
            {"score": 0, "risk": "Low", "risk_level": "Low", "recommendation": "Nothing"},
            {"score": 1, "risk": "Moderate", "risk_level": "Moderate", "recommendation": "Consider"},
            {"score": "≥2", "risk": "High", "risk_level": "High", "recommendation": "Treat"},
        ],
    )


@pytest.fixture
def service_container():
    """Fresh service container, dropped again after the test."""
    ServiceContainer.reset_instance()
    container = ServiceContainer.get_instance()
    yield container
    ServiceContainer.reset_instance()
