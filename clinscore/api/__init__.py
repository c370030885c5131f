"""
ClinScore API Package
=====================

FastAPI REST API layer for the score library.

This package provides:
    - main: FastAPI application and route configuration
    - routes/: Endpoint implementations
    - dependencies: Shared dependency injection

Author: ClinScore Team
Version: 1.0.0
"""

from clinscore.api.main import app, create_app

__all__ = [
    "app",
    "create_app",
]
