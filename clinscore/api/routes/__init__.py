"""
ClinScore API Routes Package
============================

FastAPI route modules.

Author: ClinScore Team
Version: 1.0.0
"""

from clinscore.api.routes.health import router as health_router
from clinscore.api.routes.scores import router as scores_router

__all__ = [
    "health_router",
    "scores_router",
]
