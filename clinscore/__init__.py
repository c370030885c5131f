"""
ClinScore Core Package
======================

Declarative clinical score calculation.

This package contains:
    - api/: FastAPI REST API layer
    - scoring/: Condition evaluator, point rules, formulas and YAML loader
    - export: JSON/CSV rendering of calculation results
    - config: Environment-driven settings
    - logging: Structured logging setup

Author: ClinScore Team
Version: 1.0.0
"""

__version__ = "1.0.0"
